"""RentConnect tenant backend - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import RentConnectException
from .core.logging import RequestIdMiddleware, get_logger, setup_logging, shutdown_logging
from .core.result import ResultStatus

# Import routers
from .modules.tenant_management import router as tenants_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(settings)
    logger.info("Starting RentConnect application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Debug mode: {settings.app_debug}")
    yield
    # Shutdown
    logger.info("Shutting down RentConnect application...")
    shutdown_logging()


# Create FastAPI application
app = FastAPI(
    title="RentConnect API",
    description="Tenant households, onboarding and rental agreements",
    version=settings.app_version,
    docs_url="/api/docs" if settings.app_debug else None,
    redoc_url="/api/redoc" if settings.app_debug else None,
    openapi_url="/api/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID middleware for request tracing
app.add_middleware(RequestIdMiddleware)


# Global exception handler
@app.exception_handler(RentConnectException)
async def rentconnect_exception_handler(request: Request, exc: RentConnectException):
    """Handle RentConnect-specific exceptions raised outside a service boundary."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "status": (
                ResultStatus.NOT_FOUND if exc.status_code == 404 else ResultStatus.FAILURE
            ).value,
            "message": exc.message,
            "error": exc.message,
            "data": None,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "status": ResultStatus.FAILURE.value,
            "message": "Internal server error",
            "error": str(exc) if settings.app_debug else "Internal server error",
            "data": None,
        },
    )


# Health check endpoint
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "env": settings.app_env,
    }


# Register routers with /api prefix
API_PREFIX = "/api"

# Tenant Management routes
app.include_router(tenants_router, prefix=API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rentconnect_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
