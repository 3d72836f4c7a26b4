# school_admin/core/exceptions.py
"""Custom exceptions for the school admin application."""
from typing import Optional


class SchoolAdminException(Exception):
    """Base exception; rendered as {success: false, message} with status_code."""
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(SchoolAdminException):
    """Exception raised for missing or malformed input."""
    status_code = 400


class ConflictError(SchoolAdminException):
    """Exception raised when the record is not in a state that allows the operation."""
    status_code = 400


class PaymentVerificationError(SchoolAdminException):
    status_code = 400

    def __init__(self, message: str = "Payment verification failed"):
        super().__init__(message)


class NotFoundError(SchoolAdminException):
    """Exception raised when a record is not found."""
    status_code = 404

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class Unauthenticated(SchoolAdminException):
    status_code = 401

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message)


class Forbidden(SchoolAdminException):
    status_code = 403

    def __init__(self, role: str):
        super().__init__(f"User role '{role}' is not authorized to access this route")


class UpstreamGatewayError(SchoolAdminException):
    """Exception raised when an external gateway (storage, payments) fails."""
    status_code = 500


class ConfigurationError(SchoolAdminException):
    """Exception raised when a required gateway has no credentials."""
    status_code = 500
