import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    DATABASE_URL,
    FRONTEND_URL,
    ULTRAMSG_API_TOKEN,
    ULTRAMSG_API_URL,
    ULTRAMSG_INSTANCE_ID,
    WHATSAPP_CC_PHONES,
    WHATSAPP_COORDINATOR_PHONE,
    WHATSAPP_TIMEOUT,
)
from .database import Database
from .domain.audit.router import router as audit_router
from .domain.bookings.router import router as bookings_router
from .domain.notifications.router import router as notifications_router
from .domain.payments.router import router as payments_router
from .domain.ratings.router import router as ratings_router
from .domain.receipts.router import router as receipts_router
from .domain.reports.router import router as reports_router
from .domain.specialties.router import router as specialties_router
from .domain.staff.router import router as staff_router
from .domain.users.router import router as users_router
from .exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from .services.notification_service import NotificationDispatcher
from .services.whatsapp_service import WhatsAppGateway

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

ALLOWED_ORIGINS = [origin.strip() for origin in FRONTEND_URL.split(",") if origin.strip()]

DOMAIN_ERROR_STATUS = {
    ValidationError: 422,
    NotFoundError: 404,
    AuthorizationError: 403,
}


def build_dispatcher() -> NotificationDispatcher:
    gateway = WhatsAppGateway(
        ULTRAMSG_API_URL,
        ULTRAMSG_INSTANCE_ID,
        ULTRAMSG_API_TOKEN,
        timeout=WHATSAPP_TIMEOUT,
    )
    return NotificationDispatcher(gateway, WHATSAPP_COORDINATOR_PHONE, WHATSAPP_CC_PHONES)


def create_app(
    database: Optional[Database] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """Build the API around an explicit database handle and notification dispatcher"""
    database = database if database is not None else Database(DATABASE_URL)
    dispatcher = dispatcher if dispatcher is not None else build_dispatcher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting up...")
        try:
            database.create_all()
            logger.info("Database tables created successfully")
        except Exception as e:
            # Ignore "already exists" errors from race conditions between workers
            if "already exists" in str(e):
                logger.info("Database tables already exist (created by another worker)")
            else:
                logger.error(f"Failed to create database tables: {e}")
        yield
        logger.info("Application shutting down...")

    app = FastAPI(title="Sistema de Controle de Diaristas API", version="1.0.0", lifespan=lifespan)
    app.state.database = database
    app.state.dispatcher = dispatcher

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        status_code = DOMAIN_ERROR_STATUS.get(type(exc), 400)
        logger.warning(f"{type(exc).__name__} for {request.url.path}: {exc.detail}")
        return JSONResponse(status_code=status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Convert 422 validation errors from HTTPBearer to 401 authentication errors
        when the issue is with the Authorization header
        """
        for error in exc.errors():
            if error.get("loc") and "authorization" in str(error.get("loc")).lower():
                logger.warning(f"Authentication failed for {request.url.path}: Missing or invalid Authorization header")
                return JSONResponse(
                    status_code=401,
                    content={"detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."},
                )

        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(users_router)
    app.include_router(staff_router)
    app.include_router(specialties_router)
    app.include_router(bookings_router)
    app.include_router(payments_router)
    app.include_router(ratings_router)
    app.include_router(receipts_router)
    app.include_router(notifications_router)
    app.include_router(reports_router)
    app.include_router(audit_router)

    @app.get("/health")
    def health():
        return {"status": "healthy", "database": "configured" if database.available else "unavailable"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    # Pydantic errors may carry the raised ValueError in ctx
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors


app = create_app()
