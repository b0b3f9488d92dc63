"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from macro_tracker.api.account import router as account_router
from macro_tracker.api.custom_foods import router as custom_foods_router
from macro_tracker.api.dashboard import router as dashboard_router
from macro_tracker.api.foods import router as foods_router
from macro_tracker.api.meals import router as meals_router
from macro_tracker.api.weights import router as weights_router
from macro_tracker.app_logging import configure_logging
from macro_tracker.containers import AppContainer
from macro_tracker.errors import NotFoundError, UnauthorizedError, ValidationError

INVALID_PAYLOAD_MESSAGE = "Invalid request payload."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(custom_foods_router)
    app.include_router(weights_router)
    app.include_router(account_router)
    app.include_router(dashboard_router)

    @app.exception_handler(UnauthorizedError)
    async def unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"error": exc.message}
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.message}
        )

    @app.exception_handler(ValidationError)
    async def invalid_input(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": INVALID_PAYLOAD_MESSAGE, "details": exc.details()},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": INVALID_PAYLOAD_MESSAGE,
                "details": jsonable_encoder(_error_details(exc)),
            },
        )

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": UNEXPECTED_ERROR_MESSAGE},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_details(exc: RequestValidationError) -> list[dict[str, object]]:
    """Drop echoed input and context, which may hold non-JSON values like NaN."""
    return [
        {key: value for key, value in error.items() if key not in {"input", "ctx"}}
        for error in exc.errors()
    ]
