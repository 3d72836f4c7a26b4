# school_admin/schemas/admission_schemas.py
"""Pydantic schemas for the admission workflow."""
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional
from uuid import UUID
import json

from pydantic import EmailStr, Field

from .common import Address, CamelModel, RecordOut, parse_payload
from ..core.exceptions import ValidationError
from ..models.admission import AdmissionStatus, ApplicationPaymentStatus
from ..models.student import ClassName, Gender

ADDRESS_FIELDS = ("street", "city", "state", "pincode")
ADDRESS_REQUIRED_MESSAGE = "All address fields (street, city, state, pincode) are required"


def _address_from_payload(data: Mapping[str, Any]) -> Address:
    """Accept a nested object, a JSON string, or flattened `address.<field>` keys.

    Nested/JSON values take precedence; flattened keys fill the gaps.
    """
    raw = data.get("address")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else {}
        except ValueError:
            raw = {}
    if not isinstance(raw, Mapping):
        raw = {}

    merged: Dict[str, Optional[str]] = {}
    for field in ADDRESS_FIELDS:
        value = raw.get(field)
        if value in (None, ""):
            value = data.get(f"address.{field}")
        merged[field] = str(value).strip() if value not in (None, "") else None
    return Address(**merged)


class AdmissionCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    gender: Gender
    class_applied: ClassName

    father_name: str = Field(..., min_length=1, max_length=100)
    father_phone: str = Field(..., min_length=1, max_length=20)
    father_email: Optional[EmailStr] = None
    father_occupation: Optional[str] = None
    mother_name: str = Field(..., min_length=1, max_length=100)
    mother_phone: Optional[str] = None
    mother_email: Optional[EmailStr] = None
    mother_occupation: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_relation: Optional[str] = None

    address: Address
    previous_school: Optional[str] = None
    previous_class: Optional[str] = None
    academic_year: Optional[str] = Field(default=None, max_length=10)
    application_fee: Optional[float] = Field(default=None, ge=0)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "AdmissionCreate":
        """Single parsing step from a JSON body or multipart form into a typed application"""
        address = _address_from_payload(data)
        if not address.is_complete():
            raise ValidationError(ADDRESS_REQUIRED_MESSAGE)

        fields = {key: value for key, value in data.items() if not key.startswith("address.")}
        fields["address"] = address.model_dump()
        return parse_payload(cls, fields)

    @property
    def contact_email(self) -> Optional[str]:
        return self.father_email or self.mother_email


class ApproveAdmissionRequest(CamelModel):
    section: Optional[str] = Field(default=None, max_length=10)
    roll_number: Optional[str] = Field(default=None, max_length=20)
    remarks: Optional[str] = None


class RejectAdmissionRequest(CamelModel):
    remarks: Optional[str] = None


class AdmissionOut(RecordOut):
    application_number: str
    first_name: str
    last_name: str
    date_of_birth: date
    gender: Gender
    class_applied: ClassName
    photo: Optional[str] = ""

    father_name: str
    father_phone: str
    father_email: Optional[str] = None
    father_occupation: Optional[str] = None
    mother_name: str
    mother_phone: Optional[str] = None
    mother_email: Optional[str] = None
    mother_occupation: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_relation: Optional[str] = None

    address: Address
    previous_school: Optional[str] = None
    previous_class: Optional[str] = None

    status: AdmissionStatus
    remarks: Optional[str] = None
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    application_fee: float = 0
    payment_status: ApplicationPaymentStatus
    payment_id: Optional[str] = None
    academic_year: str
