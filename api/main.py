"""
Classi - FastAPI Application

Main entry point for the scoring API server.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from config import settings
from api.routes import scoring
from api.schemas import HealthResponse


# =============================================================================
# MIDDLEWARE
# =============================================================================
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject uploads larger than MAX_UPLOAD_SIZE before reading them."""

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > settings.MAX_UPLOAD_SIZE:
                return Response(
                    content='{"detail": "Request body too large"}',
                    status_code=413,
                    media_type="application/json"
                )
        return await call_next(request)


# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Reference file: {settings.REFERENCE_FILE}")

    yield

    logger.info("Shutting down...")
    scoring.reset_reference_tree()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Classification result scoring service",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

app.add_middleware(RequestSizeLimitMiddleware)

# WARNING: CORS_ORIGINS="*" is insecure for production!
cors_origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
if settings.CORS_ORIGINS == "*" and not settings.DEBUG:
    logger.warning("CORS_ORIGINS='*' is insecure for production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-Requested-With"],
)

app.include_router(scoring.router, prefix="/api/scoring", tags=["Scoring"])


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    reference = scoring.peek_reference_tree()
    return HealthResponse(
        status="healthy",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        reference_loaded=reference is not None,
        reference_fields=reference.leaf_count() if reference is not None else 0,
    )
