# school_admin/core/dependencies.py
"""FastAPI dependencies for the gateways built during application startup."""
from fastapi import Request


def get_storage(request: Request):
    """File storage gateway, or None when no credentials are configured"""
    return getattr(request.app.state, "storage", None)


def get_payment_gateway(request: Request):
    return getattr(request.app.state, "payments", None)


def get_side_effects(request: Request):
    return getattr(request.app.state, "side_effects", None)
