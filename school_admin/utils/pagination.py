# school_admin/utils/pagination.py
"""Pagination utilities for consistent API responses."""
from math import ceil
from typing import Any, Dict


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def calculate_offset(page: int, size: int) -> int:
        """Calculate offset for database queries."""
        return (max(page, 1) - 1) * size

    @staticmethod
    def create_meta(page: int, size: int, total: int) -> Dict[str, Any]:
        """Pagination fields merged into list responses."""
        total_pages = ceil(total / size) if size > 0 else 0
        return {
            "total": total,
            "page": page,
            "pages": total_pages,
        }
