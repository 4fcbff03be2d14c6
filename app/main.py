"""
CitizenConnect - FastAPI Application Entry Point

Backend for the CitizenConnect municipal complaint app: citizens submit
reports (garbage, water, electricity, ...), administrators triage, assign
and resolve them.

DESIGN PRINCIPLES:
- Firestore is the system of record; services are thin over it
- Citizens edit only pending/assigned reports, delete only pending ones
- Every report mutation appends one timeline entry
- Failures surface to the caller; nothing is retried
"""

import asyncio
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.exceptions import AccountError, FieldValidationError, NotFoundError, StatusPermissionError
from app.core.settings import settings
from app.routes import admin, departments, health, notifications, reports, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen issue reporting: submission, triage, assignment and resolution",
    debug=settings.DEBUG
)


@app.exception_handler(StatusPermissionError)
async def permission_exception_handler(request: Request, exc: StatusPermissionError):
    logger.warning(f"Permission denied on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})


@app.exception_handler(FieldValidationError)
async def field_validation_exception_handler(request: Request, exc: FieldValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": exc.field},
    )


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(AccountError)
async def account_exception_handler(request: Request, exc: AccountError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log request validation errors before returning them."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()}
    )


# Global exception handler: any other failure is one generic error for the client
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🔥 Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something went wrong. Please try again."}
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Connect to the document store and make sure departments exist.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    def seed_departments_sync():
        from app.services.department_service import get_department_service

        try:
            service = get_department_service()
            if service.get_departments():
                return
            created = service.seed_defaults()
            logger.info(f"[STARTUP] Seeded {len(created)} default departments")
        except Exception as e:
            # Never block startup on seeding
            logger.warning(f"Warning: department seeding skipped: {e}")

    loop = asyncio.get_running_loop()
    loop.run_in_executor(None, seed_departments_sync)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(notifications.router)
app.include_router(users.router)
app.include_router(departments.router)
app.include_router(admin.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }
