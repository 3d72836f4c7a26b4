# school_admin/schemas/student_schemas.py
"""Pydantic schemas for Student records."""
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .common import Address, CamelModel, RecordOut
from ..models.student import ClassName, Gender


class StudentBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    gender: Gender
    class_name: ClassName = Field(..., alias="class")
    section: str = Field(default="A", max_length=10)
    roll_number: Optional[str] = Field(default=None, max_length=20)
    photo: Optional[str] = ""
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[Address] = None

    father_name: str = Field(..., min_length=1, max_length=100)
    father_phone: str = Field(..., min_length=1, max_length=20)
    father_occupation: Optional[str] = None
    mother_name: str = Field(..., min_length=1, max_length=100)
    mother_phone: Optional[str] = None
    mother_occupation: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_relation: Optional[str] = None

    previous_school: Optional[str] = None
    is_active: bool = True
    is_approved: bool = False
    academic_year: Optional[str] = Field(default=None, max_length=10)


class StudentCreate(StudentBase):
    """Admission number is generated when not supplied"""
    admission_number: Optional[str] = Field(default=None, max_length=20)


class StudentUpdate(CamelModel):
    """Schema for updating a student - all fields optional"""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    class_name: Optional[ClassName] = Field(default=None, alias="class")
    section: Optional[str] = Field(default=None, max_length=10)
    roll_number: Optional[str] = Field(default=None, max_length=20)
    photo: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    father_occupation: Optional[str] = None
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    mother_occupation: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_relation: Optional[str] = None
    previous_school: Optional[str] = None
    is_active: Optional[bool] = None
    is_approved: Optional[bool] = None
    academic_year: Optional[str] = Field(default=None, max_length=10)


class StudentOut(RecordOut, StudentBase):
    admission_number: str
    email: Optional[str] = None
    admission_date: Optional[datetime] = None
    academic_year: str


class StudentSummary(CamelModel):
    """Display fields attached to fee records"""
    id: UUID
    first_name: str
    last_name: str
    class_name: ClassName = Field(..., alias="class")
    section: Optional[str] = None
    photo: Optional[str] = ""
    admission_number: str
