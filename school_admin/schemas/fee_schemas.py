# school_admin/schemas/fee_schemas.py
"""Pydantic schemas for the fee ledger."""
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator, model_validator

from .common import CamelModel, RecordOut
from .student_schemas import StudentSummary
from ..models.fee import FeeStatus, PaymentMode


class FeeStructureIn(CamelModel):
    """Named components plus any extra numeric ones (examFee, ...)"""
    model_config = ConfigDict(extra="allow")

    tuition_fee: float = Field(default=0, ge=0)
    development_fee: float = Field(default=0, ge=0)
    library_fee: float = Field(default=0, ge=0)
    laboratory_fee: float = Field(default=0, ge=0)
    sports_fee: float = Field(default=0, ge=0)
    transport_fee: float = Field(default=0, ge=0)
    other_fee: float = Field(default=0, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def null_is_zero(cls, v):
        return 0 if v is None else v

    @model_validator(mode="after")
    def extra_components_are_amounts(self):
        for key, value in (self.model_extra or {}).items():
            try:
                amount = float(value or 0)
            except (TypeError, ValueError):
                raise ValueError(f"{key} must be a number")
            if amount < 0:
                raise ValueError(f"{key} must not be negative")
            self.model_extra[key] = amount
        return self

    def as_components(self) -> Dict[str, float]:
        """Keyed by the wire names (tuitionFee, ...)"""
        return self.model_dump(by_alias=True)


class FeeCreate(CamelModel):
    student_id: UUID
    fee_structure: FeeStructureIn
    due_date: Optional[datetime] = None
    academic_year: Optional[str] = Field(default=None, max_length=10)


class PaymentOrderRequest(CamelModel):
    amount: float = Field(..., gt=0)


class VerifyPaymentRequest(CamelModel):
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    payment_mode: Optional[PaymentMode] = None
    remarks: Optional[str] = None


class ManualPaymentRequest(CamelModel):
    amount: Optional[float] = None
    payment_mode: Optional[PaymentMode] = None
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None


class PaymentOut(CamelModel):
    amount: float
    payment_date: datetime
    payment_mode: PaymentMode
    transaction_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    receipt_number: str
    remarks: Optional[str] = None


class FeeOut(RecordOut):
    student_id: Optional[UUID] = None
    student: Optional[StudentSummary] = None
    admission_number: str
    academic_year: str
    class_name: str = Field(..., alias="class")
    fee_structure: Dict[str, float]
    total_amount: float
    paid_amount: float
    pending_amount: float
    status: FeeStatus
    payments: List[PaymentOut] = []
    due_date: Optional[datetime] = None
    last_reminder: Optional[datetime] = None
