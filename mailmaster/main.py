"""
Mailmaster API - FastAPI application entry point.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import engine, Base
from .logging_config import api_logger, log_request
from .middleware import SecurityHeadersMiddleware
from .responses import register_exception_handlers
from . import models  # noqa: F401  registers every table on Base.metadata
from .routes import (
    auth_router,
    newsletters_router,
    subscribers_router,
    campaigns_router,
)

settings = get_settings()

# Create tables (in production, use migrations instead)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    description="Newsletters, subscribers and campaigns with per-subscriber open tracking",
    version="1.0.0",
    docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
    redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
)

register_exception_handlers(app)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(log_request(api_logger))

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)

# Routes
app.include_router(auth_router)
app.include_router(newsletters_router)
app.include_router(subscribers_router)
app.include_router(campaigns_router)


@app.get(f"{settings.api_prefix}/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": "1.0.0",
    }


@app.get("/")
def root():
    return {
        "message": settings.app_name,
        "docs": f"{settings.api_prefix}/docs" if settings.debug else "Disabled in production",
    }
