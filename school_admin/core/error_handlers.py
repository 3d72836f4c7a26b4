from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .exceptions import SchoolAdminException

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def school_admin_exception_handler(request: Request, exc: SchoolAdminException):
    """Handle application exceptions raised by services and dependencies"""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")
    else:
        logger.info(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")
    return _envelope(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body/query validation failures as 400 with a readable message"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid input"))
    message = "; ".join(messages) or "Invalid input"
    logger.info(f"Validation error: {message} - Path: {request.url.path}")
    return _envelope(400, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _envelope(exc.status_code, detail)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {str(exc)} - Path: {request.url.path}")
    return _envelope(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(SchoolAdminException, school_admin_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
