from sqlalchemy import Column, String, DateTime, Integer, Numeric, JSON, Text, ForeignKey, Uuid, Index, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from .base import Base, enum_column, utcnow

FEE_COMPONENTS = (
    "tuitionFee",
    "developmentFee",
    "libraryFee",
    "laboratoryFee",
    "sportsFee",
    "transportFee",
    "otherFee",
)


class FeeStatus(enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class PaymentMode(enum.Enum):
    CASH = "Cash"
    CHEQUE = "Cheque"
    ONLINE = "Online"
    CARD = "Card"


class Fee(Base):
    __tablename__ = "fees"

    # Nullable so fee history survives deletion of the student
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True)
    admission_number = Column(String(20), nullable=False)
    academic_year = Column(String(10), nullable=False)
    class_name = Column(String(20), nullable=False)

    # {tuitionFee, developmentFee, ...}; see FEE_COMPONENTS
    fee_structure = Column(JSON, nullable=False, default=dict)

    total_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    pending_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = enum_column(FeeStatus, default=FeeStatus.PENDING, nullable=False, index=True)

    due_date = Column(DateTime(timezone=True))
    last_reminder = Column(DateTime(timezone=True))

    version = Column(Integer, nullable=False, default=1)

    student = relationship("Student", lazy="selectin")
    payments = relationship(
        "Payment",
        back_populates="fee",
        order_by="Payment.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}
    __table_args__ = (
        Index("ix_fees_admission_number_year", "admission_number", "academic_year"),
    )


class Payment(Base):
    """Append-only ledger entry of a Fee"""
    __tablename__ = "fee_payments"

    fee_id = Column(Uuid, ForeignKey("fees.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    amount = Column(Numeric(12, 2), nullable=False)
    payment_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    payment_mode = enum_column(PaymentMode, nullable=False)
    transaction_id = Column(String(100))
    razorpay_order_id = Column(String(100))
    razorpay_payment_id = Column(String(100))
    receipt_number = Column(String(20), nullable=False, index=True)
    remarks = Column(Text)

    fee = relationship("Fee", back_populates="payments")

    __table_args__ = (
        UniqueConstraint("fee_id", "position", name="uq_fee_payments_fee_position"),
    )
