from sqlalchemy import Column, String, Date, DateTime, Boolean, JSON, Index
import enum

from .base import Base, enum_column, utcnow


class ClassName(enum.Enum):
    NURSERY = "Nursery"
    LKG = "LKG"
    UKG = "UKG"
    I = "I"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"
    VI = "VI"
    VII = "VII"
    VIII = "VIII"
    IX = "IX"
    X = "X"


class Gender(enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


def current_academic_year() -> str:
    year = utcnow().year
    return f"{year}-{year + 1}"


class Student(Base):
    __tablename__ = "students"

    admission_number = Column(String(20), nullable=False, unique=True, index=True)

    # Basic Information
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = enum_column(Gender, nullable=False)
    class_name = enum_column(ClassName, nullable=False)
    section = Column(String(10), default="A", nullable=False)
    roll_number = Column(String(20))
    photo = Column(String(500), default="")
    email = Column(String(100))
    phone = Column(String(20))
    address = Column(JSON)  # {street, city, state, pincode}

    # Parent/guardian details
    father_name = Column(String(100), nullable=False)
    father_phone = Column(String(20), nullable=False)
    father_occupation = Column(String(100))
    mother_name = Column(String(100), nullable=False)
    mother_phone = Column(String(20))
    mother_occupation = Column(String(100))
    guardian_name = Column(String(100))
    guardian_phone = Column(String(20))
    guardian_relation = Column(String(50))

    # Admission details
    admission_date = Column(DateTime(timezone=True), default=utcnow)
    previous_school = Column(String(200))
    is_active = Column(Boolean, default=True, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)
    academic_year = Column(String(10), default=current_academic_year, nullable=False)

    __table_args__ = (
        Index("ix_students_class_section", "class_name", "section"),
    )
