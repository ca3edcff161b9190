"""
FastAPI Application
===================

Main FastAPI app setup with all routes and middleware.
Serves the neighbour lending workflow: loan requests, offers, agreements
and the handover / return lifecycle.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lending.api.v1 import loan_request_router, loan_router
from lending.api.v1.error_handlers import add_error_handlers
from lending.core.config import Settings
from lending.di.container import DIContainer

logger = logging.getLogger(__name__)


def create_application(container: Optional[DIContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application.
    
    This function sets up the FastAPI application with:
    - Logging configuration
    - CORS middleware configuration
    - Error handlers mapping lending errors to HTTP status codes
    - API route registration
    - Startup/shutdown handlers for indexes and connections
    
    Args:
        container: DI container to serve from; a default one is built if omitted
    
    Returns:
        Configured FastAPI application instance
    """
    container = container or DIContainer()
    settings = container.get(Settings)
    
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the indexes the lending queries rely on; release connections on exit."""
        container.get("mongo_client").ensure_indexes()
        logger.info("Lending API started")
        yield
        container.shutdown()
        logger.info("Lending API stopped")
    
    application = FastAPI(
        title="Condo Lending API",
        description="Peer-to-peer lending between residents of a condominium",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.container = container
    
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    add_error_handlers(application)
    
    # Register API routers
    application.include_router(loan_request_router, prefix="/loan-requests")
    application.include_router(loan_router)
    
    @application.get("/")
    async def root():
        """Root endpoint - service banner."""
        return {
            "status": "running",
            "service": "Condo Lending API",
            "version": "1.0.0",
            "docs": "/docs"
        }
    
    @application.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}
    
    return application


# Create application instance
app = create_application()
