from sqlalchemy import Column, String, Date, DateTime, Integer, Numeric, JSON, Text, ForeignKey, Uuid
import enum

from .base import Base, enum_column
from .student import ClassName, Gender, current_academic_year


class AdmissionStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"


class ApplicationPaymentStatus(enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class Admission(Base):
    __tablename__ = "admissions"

    application_number = Column(String(20), nullable=False, unique=True, index=True)

    # Applicant
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = enum_column(Gender, nullable=False)
    class_applied = enum_column(ClassName, nullable=False)
    photo = Column(String(500), default="")

    # Parent/guardian details
    father_name = Column(String(100), nullable=False)
    father_phone = Column(String(20), nullable=False)
    father_email = Column(String(100))
    father_occupation = Column(String(100))
    mother_name = Column(String(100), nullable=False)
    mother_phone = Column(String(20))
    mother_email = Column(String(100))
    mother_occupation = Column(String(100))
    guardian_name = Column(String(100))
    guardian_phone = Column(String(20))
    guardian_relation = Column(String(50))

    address = Column(JSON, nullable=False)  # {street, city, state, pincode}, all required
    previous_school = Column(String(200))
    previous_class = Column(String(20))

    # Workflow
    status = enum_column(AdmissionStatus, default=AdmissionStatus.PENDING, nullable=False, index=True)
    remarks = Column(Text)
    approved_by = Column(Uuid, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime(timezone=True))

    # Application fee
    application_fee = Column(Numeric(10, 2), default=0, nullable=False)
    payment_status = enum_column(ApplicationPaymentStatus, default=ApplicationPaymentStatus.PENDING, nullable=False)
    payment_id = Column(String(100))

    academic_year = Column(String(10), default=current_academic_year, nullable=False)

    # Bumped on every UPDATE; a stale writer gets StaleDataError
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}
