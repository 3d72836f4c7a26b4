from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_admin, require_admin
from ..core.database import get_db
from ..core.dependencies import get_payment_gateway, get_side_effects
from ..models.admin import Admin
from ..models.fee import FeeStatus
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.fee_schemas import (
    FeeCreate,
    FeeOut,
    ManualPaymentRequest,
    PaymentOrderRequest,
    VerifyPaymentRequest,
)
from ..services.fee_service import FeeService, GatewayVerification
from ..utils.forms import read_payload

router = APIRouter(prefix="/api/fees", tags=["Fees"])


@router.get("")
async def list_fees(
    student_id: Optional[UUID] = Query(None, alias="studentId"),
    admission_number: Optional[str] = Query(None, alias="admissionNumber"),
    status: Optional[FeeStatus] = Query(None),
    academic_year: Optional[str] = Query(None, alias="academicYear"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await FeeService(db).list_filtered(
        student_id=student_id,
        admission_number=admission_number,
        status=status,
        academic_year=academic_year,
        page=page,
        limit=limit,
    )
    return serialize_page(FeeOut, "fees", result)


@router.get("/{fee_id}")
async def get_fee(
    fee_id: UUID,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    fee = await FeeService(db).get_or_404(fee_id)
    return {"success": True, "fee": serialize(FeeOut, fee)}


@router.post("")
async def create_fee(
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(FeeCreate, fields)
    fee = await FeeService(db).create_fee_record(data)
    return JSONResponse(status_code=201, content={"success": True, "fee": serialize(FeeOut, fee)})


@router.post("/{fee_id}/payment")
async def create_payment_order(
    fee_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db),
    payments=Depends(get_payment_gateway),
):
    """Open a gateway order that the checkout page completes"""
    fields, _ = await read_payload(request)
    data = parse_payload(PaymentOrderRequest, fields)
    order = await FeeService(db, payments=payments).create_payment_order(fee_id, data.amount)
    return {"success": True, **order}


@router.post("/{fee_id}/verify-payment")
async def verify_payment(
    fee_id: UUID,
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    payments=Depends(get_payment_gateway),
    side_effects=Depends(get_side_effects),
):
    fields, _ = await read_payload(request)
    data = parse_payload(VerifyPaymentRequest, fields)

    service = FeeService(db, payments=payments, side_effects=side_effects)
    fee, receipt = await service.record_payment(
        fee_id,
        amount=data.amount,
        mode=data.payment_mode,
        remarks=data.remarks,
        verification=GatewayVerification(
            order_id=data.razorpay_order_id,
            payment_id=data.razorpay_payment_id,
            signature=data.razorpay_signature,
        ),
    )
    return {
        "success": True,
        "message": "Payment recorded successfully",
        "fee": serialize(FeeOut, fee),
        "receiptNumber": receipt,
    }


@router.post("/{fee_id}/manual-payment")
async def record_manual_payment(
    fee_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    side_effects=Depends(get_side_effects),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ManualPaymentRequest, fields)

    service = FeeService(db, side_effects=side_effects)
    fee, receipt = await service.record_payment(
        fee_id,
        amount=data.amount,
        mode=data.payment_mode,
        transaction_id=data.transaction_id,
        remarks=data.remarks,
    )
    return {
        "success": True,
        "message": "Payment recorded successfully",
        "fee": serialize(FeeOut, fee),
        "receiptNumber": receipt,
    }
