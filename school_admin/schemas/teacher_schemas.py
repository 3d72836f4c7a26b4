# school_admin/schemas/teacher_schemas.py
"""Pydantic schemas for Teacher records."""
from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from .common import Address, CamelModel, RecordOut
from ..models.student import ClassName, Gender
from ..models.teacher import Designation
from ..utils.forms import coerce_list, coerce_mapping


class TeacherBase(CamelModel):
    employee_id: Optional[str] = Field(default=None, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    qualification: str = Field(..., min_length=1, max_length=200)
    experience: int = Field(default=0, ge=0)
    subject: str = Field(..., min_length=1, max_length=100)
    classes: List[ClassName] = []
    designation: Designation = Designation.TEACHER
    joining_date: Optional[datetime] = None
    address: Optional[Address] = None
    is_active: bool = True

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v):
        return coerce_list(v)

    @field_validator("address", mode="before")
    @classmethod
    def parse_address(cls, v):
        return coerce_mapping(v)


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(CamelModel):
    """Schema for updating a teacher - all fields optional"""
    photo: Optional[str] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    qualification: Optional[str] = None
    experience: Optional[int] = Field(default=None, ge=0)
    subject: Optional[str] = None
    classes: Optional[List[ClassName]] = None
    designation: Optional[Designation] = None
    joining_date: Optional[datetime] = None
    address: Optional[Address] = None
    is_active: Optional[bool] = None

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v):
        return None if v is None else coerce_list(v)

    @field_validator("address", mode="before")
    @classmethod
    def parse_address(cls, v):
        return coerce_mapping(v)


class TeacherOut(RecordOut, TeacherBase):
    employee_id: str
    email: str
    photo: Optional[str] = ""
