# school_admin/services/fee_service.py
"""Fee ledger: fee records, append-only payments, gateway orders and verification."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from .base_service import BaseService
from .fee_calculations import apply_payment, to_money, to_paise, total_from_structure
from .student_service import StudentService
from ..core.exceptions import ConfigurationError, ConflictError, PaymentVerificationError, ValidationError
from ..models.fee import Fee, FeeStatus, Payment, PaymentMode
from ..models.notification import NotificationPriority, NotificationType, RelatedModel
from ..schemas.fee_schemas import FeeCreate
from ..utils import identifiers

logger = logging.getLogger(__name__)


@dataclass
class GatewayVerification:
    order_id: str
    payment_id: str
    signature: str


def format_amount(amount: Decimal) -> str:
    text = f"{to_money(amount):.2f}"
    return text[:-3] if text.endswith(".00") else text


class FeeService(BaseService[Fee]):
    resource_name = "Fee record"

    def __init__(self, db: AsyncSession, payments=None, side_effects=None):
        super().__init__(Fee, db)
        self.payments = payments
        self.side_effects = side_effects

    async def create_fee_record(self, data: FeeCreate) -> Fee:
        student = await StudentService(self.db).get_or_404(data.student_id)

        components = data.fee_structure.as_components()
        total = total_from_structure(components)
        fee = await self.create({
            "student_id": student.id,
            "admission_number": student.admission_number,
            "academic_year": student.academic_year or data.academic_year,
            "class_name": student.class_name.value,
            "fee_structure": components,
            "total_amount": total,
            "paid_amount": Decimal("0.00"),
            "pending_amount": total,
            "status": FeeStatus.PENDING,
            "due_date": data.due_date,
        })
        logger.info(f"Fee record {fee.id} created for {fee.admission_number}: total {total}")
        return fee

    async def list_filtered(
        self,
        student_id: Optional[UUID] = None,
        admission_number: Optional[str] = None,
        status: Optional[FeeStatus] = None,
        academic_year: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        stmt = select(Fee)
        if student_id:
            stmt = stmt.where(Fee.student_id == student_id)
        if admission_number:
            stmt = stmt.where(Fee.admission_number == admission_number)
        if status:
            stmt = stmt.where(Fee.status == status)
        if academic_year:
            stmt = stmt.where(Fee.academic_year == academic_year)
        return await self.get_paginated(stmt, page=page, size=limit, order_by=(Fee.created_at.desc(),))

    async def create_payment_order(self, fee_id: UUID, amount: float) -> Dict[str, Any]:
        if self.payments is None:
            raise ConfigurationError("Razorpay not configured")

        fee = await self.get_or_404(fee_id)
        order = await self.payments.create_order(
            to_paise(amount),
            identifiers.receipt_number(),
            notes={"feeId": str(fee.id), "admissionNumber": fee.admission_number},
        )
        return {"orderId": order["id"], "amount": order["amount"], "currency": order["currency"]}

    async def record_payment(
        self,
        fee_id: UUID,
        amount: Optional[float],
        mode: Optional[PaymentMode],
        transaction_id: Optional[str] = None,
        remarks: Optional[str] = None,
        verification: Optional[GatewayVerification] = None,
    ) -> Tuple[Fee, str]:
        """Append one payment and recompute paid/pending/status.

        With `verification`, the gateway signature is checked before anything
        else and the payment defaults to mode Online with the gateway payment
        id as transaction id.
        """
        if verification is not None:
            if self.payments is None:
                raise ConfigurationError("Razorpay not configured")
            if not self.payments.verify_signature(verification.order_id, verification.payment_id, verification.signature):
                logger.warning(f"Signature mismatch for order {verification.order_id} on fee {fee_id}")
                raise PaymentVerificationError()
            mode = mode or PaymentMode.ONLINE
            transaction_id = verification.payment_id

        if not amount or mode is None:
            raise ValidationError("Amount and payment mode are required")
        if amount < 0:
            raise ValidationError("Amount must be greater than zero")

        fee = await self.get_or_404(fee_id)
        receipt = identifiers.receipt_number()
        paid, pending, status = apply_payment(fee.total_amount, fee.paid_amount, amount)
        if pending < 0:
            # Accepted as-is; there is no credit/refund handling
            logger.warning(f"Fee {fee.id} ({fee.admission_number}) overpaid by {-pending}")

        fee.payments.append(Payment(
            position=len(fee.payments),
            amount=to_money(amount),
            payment_mode=mode,
            transaction_id=transaction_id or receipt,
            razorpay_order_id=verification.order_id if verification else None,
            razorpay_payment_id=verification.payment_id if verification else None,
            receipt_number=receipt,
            remarks=remarks,
        ))
        fee.paid_amount = paid
        fee.pending_amount = pending
        fee.status = status

        try:
            await self.db.commit()
        except (StaleDataError, IntegrityError):
            await self.db.rollback()
            logger.warning(f"Concurrent payment on fee {fee_id}, rejected receipt {receipt}")
            raise ConflictError("Fee record was updated concurrently, please retry")

        await self.db.refresh(fee)
        logger.info(f"Recorded {mode.value} payment {receipt} of {amount} on fee {fee.id}: status {status.value}")

        if self.side_effects is not None:
            if verification is not None:
                title = "Fee Payment Received"
                message = f"Payment of ₹{format_amount(amount)} received for {fee.admission_number}"
            else:
                title = "Fee Payment Recorded"
                message = f"Payment of ₹{format_amount(amount)} recorded for {fee.admission_number} ({mode.value})"
            self.side_effects.notify(
                type=NotificationType.PAYMENT,
                title=title,
                message=message,
                link="/admin/fees",
                related_id=fee.id,
                related_model=RelatedModel.FEE,
                priority=NotificationPriority.MEDIUM,
            )
        return fee, receipt
