from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import AsyncBackgroundSessionLocal, close_db_connections
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging
from .gateways.payments import RazorpayGateway
from .gateways.storage import CloudinaryStorage
from .services.side_effects import SideEffects

# Import all routers
from .routers import (
    health, auth, admissions, fees, students, teachers,
    notices, gallery, contact, notifications, admin,
)

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting school admin API v{settings.app_version} ({settings.environment})")

    app.state.storage = CloudinaryStorage.from_settings(settings)
    if app.state.storage is None:
        logger.warning("Cloudinary credentials missing, file uploads will fail")
    app.state.payments = RazorpayGateway.from_settings(settings)
    if app.state.payments is None:
        logger.warning("Razorpay credentials missing, online payments are disabled")
    app.state.side_effects = SideEffects(AsyncBackgroundSessionLocal)

    yield

    logger.info("Shutting down school admin API")
    await app.state.side_effects.drain()
    for gateway in (app.state.storage, app.state.payments):
        if gateway is not None:
            await gateway.aclose()
    await close_db_connections()
    logger.info("Shutdown complete")


app = FastAPI(
    title="School Admin API",
    description="Admissions, fee ledger and site records for the school website",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

# Include all routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(admissions.router)
app.include_router(fees.router)
app.include_router(students.router)
app.include_router(teachers.router)
app.include_router(notices.router)
app.include_router(gallery.router)
app.include_router(contact.router)
app.include_router(notifications.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    return {
        "success": True,
        "message": f"{settings.school_name} API",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("school_admin.main:app", host="0.0.0.0", port=8000, reload=not settings.is_production)
