from sqlalchemy import Column, String, Date, DateTime, Integer, Boolean, JSON
import enum

from .base import Base, enum_column, utcnow
from .student import Gender


class Designation(enum.Enum):
    PRINCIPAL = "Principal"
    VICE_PRINCIPAL = "Vice Principal"
    SENIOR_TEACHER = "Senior Teacher"
    TEACHER = "Teacher"
    ASSISTANT_TEACHER = "Assistant Teacher"


class Teacher(Base):
    __tablename__ = "teachers"

    employee_id = Column(String(20), nullable=False, unique=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False, unique=True)
    phone = Column(String(20), nullable=False)
    photo = Column(String(500), default="")
    date_of_birth = Column(Date)
    gender = enum_column(Gender, nullable=True)

    # Professional Information
    qualification = Column(String(200), nullable=False)
    experience = Column(Integer, default=0, nullable=False)
    subject = Column(String(100), nullable=False, index=True)
    classes = Column(JSON, default=list)  # list of class names
    designation = enum_column(Designation, default=Designation.TEACHER, nullable=False)
    joining_date = Column(DateTime(timezone=True), default=utcnow)

    address = Column(JSON)
    is_active = Column(Boolean, default=True, nullable=False)
