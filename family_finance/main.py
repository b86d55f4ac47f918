"""
FastAPI application factory
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from family_finance.config import get_settings
from family_finance.infrastructure.db.session import check_db_connection
from family_finance.api.v1 import analytics, budget, networth, profile, savings
from family_finance.application.assets import AssetValidationError
from family_finance.application.categories import CategoryValidationError
from family_finance.application.goals import GoalValidationError
from family_finance.application.income import IncomeValidationError
from family_finance.application.ipp import IPPValidationError
from family_finance.application.profile import ProfileNotFoundError, ProfileValidationError
from family_finance.application.transactions import TransactionValidationError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VALIDATION_ERRORS = (
    ProfileValidationError,
    CategoryValidationError,
    TransactionValidationError,
    GoalValidationError,
    IPPValidationError,
    AssetValidationError,
    IncomeValidationError,
)


def create_app() -> FastAPI:
    """
    Application factory - builds and configures the FastAPI app

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="Family Finance",
        debug=settings.DEBUG,
    )

    # Error-logging middleware: catches everything the exception handlers don't
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.responses import Response

    class ErrorLoggingMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request, call_next):
            try:
                return await call_next(request)
            except Exception:
                logger.exception("Unhandled error on %s %s", request.method, request.url.path)
                return Response(content="Internal Server Error", status_code=500)

    app.add_middleware(ErrorLoggingMiddleware)

    # Use case errors -> HTTP
    async def validation_error_handler(request: Request, exc: ValueError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    async def profile_not_found_handler(request: Request, exc: ProfileNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    for error_cls in VALIDATION_ERRORS:
        app.add_exception_handler(error_cls, validation_error_handler)
    app.add_exception_handler(ProfileNotFoundError, profile_not_found_handler)

    # Routers
    app.include_router(profile.router)
    app.include_router(budget.router)
    app.include_router(savings.router)
    app.include_router(networth.router)
    app.include_router(analytics.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (checks the database is reachable)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "family_finance.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
