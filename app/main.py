import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.dependencies import ServiceContainer, build_container
from app.api.routers.bookings import router as bookings_router
from app.api.routers.health import router as health_router
from app.api.routers.hotels import router as hotels_router
from app.api.routers.notifications import router as notifications_router
from app.api.routers.payments import router as payments_router
from app.api.routers.worker import router as worker_router
from app.config import Settings, get_settings
from app.domain.errors import DomainError

# Configure structured logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError):
    """
    Maps domain errors to HTTP answers.

    Client errors are returned as-is. Provider and store failures are logged
    with an ``error_id`` and the client only gets a generic message.
    """
    if exc.safe_to_expose:
        logger.info(
            "Request rejected",
            extra={"code": exc.code, "path": request.url.path, "detail": exc.message},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.message, "code": exc.code},
        )

    error_id = str(uuid.uuid4())
    logger.error(
        "Request failed",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "code": exc.code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.public_message, "code": exc.code, "error_id": error_id},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "code": "VALIDATION_ERROR", "errors": errors},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    # Log the full error with context for internal debugging
    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    # Return a generic error to the client without exposing internal details
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services = container or build_container(settings)
        # Schema is created before the first request is accepted
        await services.start()
        app.state.container = services
        yield
        await services.stop()

    app = FastAPI(
        title="Hotel Booking API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(hotels_router, tags=["Hotels"])
    app.include_router(bookings_router, tags=["Bookings"])
    app.include_router(payments_router, tags=["Payments"])
    app.include_router(notifications_router, tags=["Notifications"])
    app.include_router(worker_router, prefix="/api/v1", tags=["Worker"])
    return app


app = create_app()
