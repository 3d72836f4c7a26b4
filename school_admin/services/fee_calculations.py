# school_admin/services/fee_calculations.py
"""Pure ledger arithmetic shared by the fee service and its tests."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Tuple, Union

from ..models.fee import FeeStatus

Number = Union[int, float, Decimal, str]

_CENT = Decimal("0.01")


def to_money(value: Number) -> Decimal:
    return Decimal(str(value or 0)).quantize(_CENT, rounding=ROUND_HALF_UP)


def total_from_structure(structure: Mapping[str, Number]) -> Decimal:
    """Sum of every component in the breakdown; empty components count as zero"""
    return sum((to_money(value) for value in structure.values()), Decimal("0.00"))


def derive_status(paid: Decimal, pending: Decimal) -> FeeStatus:
    if pending <= 0:
        return FeeStatus.PAID
    if paid > 0:
        return FeeStatus.PARTIAL
    return FeeStatus.PENDING


def apply_payment(total: Number, paid: Number, amount: Number) -> Tuple[Decimal, Decimal, FeeStatus]:
    """New (paid, pending, status) after adding `amount`. Overpayment yields a negative pending."""
    new_paid = to_money(paid) + to_money(amount)
    new_pending = to_money(total) - new_paid
    return new_paid, new_pending, derive_status(new_paid, new_pending)


def to_paise(amount: Number) -> int:
    """Rupees to the smallest currency unit"""
    return int((to_money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))
