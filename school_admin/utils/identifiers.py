# school_admin/utils/identifiers.py
"""Human-readable record numbers: fixed prefix, current year, random digits."""
from datetime import datetime, timezone
from typing import Optional
import secrets


def _random_digits(low: int, high: int) -> int:
    """Uniform integer in [low, high]"""
    return low + secrets.randbelow(high - low + 1)


def _year(year: Optional[int]) -> int:
    return year if year is not None else datetime.now(timezone.utc).year


def application_number(year: Optional[int] = None) -> str:
    """DMPS2025 + 4 digits"""
    return f"DMPS{_year(year)}{_random_digits(1000, 9999)}"


def admission_number(year: Optional[int] = None) -> str:
    """ADM2025 + 5 digits"""
    return f"ADM{_year(year)}{_random_digits(10000, 99999)}"


def employee_id(year: Optional[int] = None) -> str:
    """EMP2025 + 4 digits"""
    return f"EMP{_year(year)}{_random_digits(1000, 9999)}"


def receipt_number(year: Optional[int] = None) -> str:
    """REC2025 + 6 digits"""
    return f"REC{_year(year)}{_random_digits(100000, 999999)}"
