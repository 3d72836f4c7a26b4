from .base import Base
from .admin import Admin, AdminRole
from .student import Student, ClassName, Gender
from .admission import Admission, AdmissionStatus, ApplicationPaymentStatus
from .fee import Fee, Payment, FeeStatus, PaymentMode, FEE_COMPONENTS
from .notification import Notification, NotificationType, NotificationPriority, RelatedModel
from .teacher import Teacher, Designation
from .notice import Notice, NoticeCategory, NoticePriority, Audience
from .gallery import Gallery, GalleryCategory, GalleryType
from .contact import Contact, ContactStatus
from .content import Content, ContentType

__all__ = [
    "Base",
    "Admin", "AdminRole",
    "Student", "ClassName", "Gender",
    "Admission", "AdmissionStatus", "ApplicationPaymentStatus",
    "Fee", "Payment", "FeeStatus", "PaymentMode", "FEE_COMPONENTS",
    "Notification", "NotificationType", "NotificationPriority", "RelatedModel",
    "Teacher", "Designation",
    "Notice", "NoticeCategory", "NoticePriority", "Audience",
    "Gallery", "GalleryCategory", "GalleryType",
    "Contact", "ContactStatus",
    "Content", "ContentType",
]
