"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from recipeai.api.routes import chat, cooking, health, images, recipes, shopping
from recipeai.config import settings
from recipeai.core.request_id import get_request_id
from recipeai.middleware.logging import RequestLoggingMiddleware
from recipeai.middleware.performance import PerformanceMiddleware
from recipeai.middleware.rate_limit import get_rate_limit_exceeded_handler, limiter
from recipeai.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from recipeai.utils.exceptions import (
    DevicePermissionError,
    ExtractionError,
    GeminiError,
    ImageProcessingError,
    RecipeAIException,
    ValidationError,
)
from recipeai.utils.logging_config import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("RecipeAI API starting up...")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Gemini model: {settings.gemini_model}, image model: {settings.gemini_image_model}")
    logger.info(f"Rate limit: {settings.rate_limit_per_hour} requests/hour")
    yield
    logger.info("RecipeAI API shutting down...")


app = FastAPI(
    title="RecipeAI API",
    description="Food photo recognition and recipe assistant using Gemini",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()

    logger.warning(
        f"Validation error: {str(exc)}",
        extra={"path": request.url.path, "method": request.method, "errors": exc.errors()},
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": exc.errors(),
            "request_id": request_id,
            "message": "Request validation failed. Check the 'detail' field for specific errors.",
        },
    )


_EXCEPTION_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation error"),
    (ImageProcessingError, status.HTTP_400_BAD_REQUEST, "Image processing error"),
    (DevicePermissionError, status.HTTP_400_BAD_REQUEST, "Device unavailable"),
    (GeminiError, status.HTTP_502_BAD_GATEWAY, "Gemini API error"),
    (ExtractionError, status.HTTP_502_BAD_GATEWAY, "Unreadable model response"),
)


@app.exception_handler(RecipeAIException)
async def recipeai_exception_handler(request: Request, exc: RecipeAIException) -> JSONResponse:
    """Handle RecipeAI exceptions that escaped a route."""
    status_code, error_message = status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    for exc_type, code, message in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            status_code, error_message = code, message
            break

    logger.error(f"Exception: {error_message}", extra={"exception": str(exc)}, exc_info=True)

    return JSONResponse(
        status_code=status_code,
        content={"error": error_message, "detail": str(exc), "request_id": get_request_id()},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": get_request_id(),
        },
    )


# Add middleware (order matters: the last added runs first)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0, very_slow_request_threshold=5.0)
app.add_middleware(RequestLoggingMiddleware)
setup_compression(app)
setup_cors(app)

app.include_router(health.router)
app.include_router(recipes.router)
app.include_router(shopping.router)
app.include_router(chat.router)
app.include_router(cooking.router)
app.include_router(images.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "RecipeAI API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("recipeai.main:app", host=settings.host, port=settings.port)
