from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.exceptions import (
    AIRateLimitError,
    AIServiceError,
    MalformedInputError,
    NoEntryFileFoundError,
    NotAFolderError,
    PathNotFoundError,
    ScaffoldError,
    ValidationError,
    error_response,
)
from app.core.logging_config import logger
from app.core.middleware import RequestLoggingMiddleware
from app.core.rate_limiter import limiter, rate_limit_exceeded_handler
from app.api.v1.router import api_router


# Checked in order, so subclasses come before their bases
ERROR_STATUS_CODES = [
    (AIRateLimitError, 429),
    (AIServiceError, 502),
    (MalformedInputError, 422),
    (PathNotFoundError, 404),
    (NoEntryFileFoundError, 404),
    (NotAFolderError, 400),
    (ValidationError, 400),
]


def status_code_for(error: ScaffoldError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup banner and a warning when AI routes cannot work"""
    logger.info(
        f"[Startup] {settings.APP_NAME} api/{settings.API_VERSION} ({settings.ENVIRONMENT})",
        extra={"event_type": "startup", "ai_enabled": settings.AI_ENABLED}
    )
    if not settings.AI_ENABLED:
        logger.warning("[Startup] ANTHROPIC_API_KEY is not set, AI generation routes will fail")

    yield

    logger.info(f"[Shutdown] {settings.APP_NAME} stopped")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="AI-assisted project scaffolding over a virtual file tree",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(ScaffoldError)
async def scaffold_exception_handler(request: Request, exc: ScaffoldError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    else:
        logger.warning(f"[API] {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if settings.DEBUG else "An error occurred",
                "details": {}
            }
        }
    )


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"/api/{settings.API_VERSION}/health"
    }


# Include API router
app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
