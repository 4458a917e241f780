"""
WellnessWave API

Rule-based wellness assistant for English, Hindi and Gujarati speakers:
- Symptom guidance with a localized disclaimer on every answer
- Meal, workout, appointment and tracking suggestions in one response
- Emergency escalation with local emergency numbers
- User profiles that seed the assistant's health context
"""

import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.config import Settings, get_settings
from config.logging_config import configure_logging, get_logger, log_request_context
from database.database import close_connection
from database.user_repository import UserRepository, get_user_repository
from models.api_models import ErrorResponse, HealthResponse, HealthStatus
from models.wellness_models import Language
from services import assistant_routes, user_routes
from services.rule_table import validate_rule_catalog
from services.session_store import get_session_store
from services.wellness_engine import get_wellness_engine

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the rule pipeline on startup; drop expired sessions and DB handles on shutdown."""
    settings = get_settings()
    logger.info("Starting", config=settings.get_safe_config_dict())
    get_wellness_engine()

    yield

    removed = get_session_store().cleanup_expired()
    if settings.user_store_backend == "arango":
        close_connection()
    logger.info("Stopped", expired_sessions_removed=removed)


def _error(request: Request, status_code: int, error: str, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Overrides the cached settings, e.g. in tests.

    Raises:
        RuleCatalogError: With strict translations on and a rule missing a language.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=__doc__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )
    app.state.catalog_problems = validate_rule_catalog(strict=settings.strict_translations)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Tag every request with an ID and log its duration."""
        request.state.request_id = request_id = uuid4().hex
        log_request_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time-Ms"] = str(elapsed_ms)
        logger.info("Request handled", status_code=response.status_code, elapsed_ms=elapsed_ms)
        return response

    @app.exception_handler(HTTPException)
    async def on_http_error(request: Request, exc: HTTPException):
        return _error(request, exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        fields = _field_errors(exc)
        logger.info("Request rejected", fields=[f["field"] for f in fields])
        return _error(request, 422, "VALIDATION_ERROR", "Request validation failed", {"fields": fields})

    @app.exception_handler(Exception)
    async def on_unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error", error=str(exc))
        return _error(request, 500, "INTERNAL_ERROR", "An unexpected error occurred")

    @app.get("/", tags=["Service"])
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "operational",
            "languages": [language.value for language in Language],
        }

    @app.get("/health", response_model=HealthResponse, tags=["Service"])
    async def health(
        request: Request,
        users: UserRepository = Depends(get_user_repository),
    ) -> HealthResponse:
        """Service health. Degraded when the rule catalog is incomplete or the user store is down."""
        checks = {
            "api": True,
            "rule_catalog_complete": not request.app.state.catalog_problems,
            "user_store": users.is_available(),
        }
        return HealthResponse(
            status=HealthStatus.HEALTHY if all(checks.values()) else HealthStatus.DEGRADED,
            version=settings.app_version,
            environment=settings.environment,
            checks=checks,
        )

    app.include_router(assistant_routes.router)
    app.include_router(user_routes.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
