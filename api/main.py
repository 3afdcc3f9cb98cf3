"""
Exam Prep API - FastAPI Application
Main application with CORS, rate limiting, and routes
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
import logging
import time

from api.limiter import limiter
from api.models import HealthResponse, ErrorResponse
from api.routes.exams import router as exams_router
from config.logging import configure_logging
from config.settings import get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown"""
    configure_logging()
    logger.info("Exam Prep API starting")

    # Firebase is optional at boot; the first Firestore read retries it
    try:
        from src.database.firebase import get_firebase_app
        get_firebase_app()
        logger.info("Firebase Admin SDK ready")
    except Exception as e:
        logger.warning(f"Firebase not initialized at startup: {e}")

    yield

    logger.info("Exam Prep API shutting down")


# Create app
app = FastAPI(
    title="Exam Prep API",
    description="""
    Exam preparation backend

    Assembles randomized practice exams from weighted chapters.

    ## Features
    - Weighted per-exam question quotas
    - Multi-part question sets are never split
    - Global question cap
    - Reproducible output with a seed
    """,
    version=API_VERSION,
    lifespan=lifespan
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if _settings.debug else [_settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ================== MIDDLEWARE ==================

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add X-Process-Time header to all responses"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


# ================== ERROR HANDLERS ==================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    settings = get_settings()
    logger.error(f"Unhandled server error on {request.url.path}: {exc}", exc_info=exc)

    error_detail = str(exc) if settings.debug else "Internal Server Error"

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            detail=error_detail,
            status_code=500
        ).model_dump()
    )


# ================== ROUTES ==================

app.include_router(exams_router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": "Exam Prep API",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
@limiter.limit("10/minute")
async def health_check(request: Request):
    """
    Health check endpoint.

    Reports configuration state only; no upstream I/O.
    """
    from src.database.firebase import is_firebase_initialized

    services = {
        "firebase": "initialized" if is_firebase_initialized() else "not_initialized"
    }

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        services=services
    )


# ================== RUN ==================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
