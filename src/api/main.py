"""Main FastAPI application for the Mermaid generation API."""

from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import httpx
import uvicorn

from utils.logger import setup_logger
from . import __version__
from .models.config import APIConfig
from .models.responses import ErrorResponse
from .routes import health, generate


logger = setup_logger(__name__)

# Global config instance
config = APIConfig.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info(f"Starting Mermaid Generation API v{app.version}")
    logger.info(f"Configuration: {config.public_dict()}")

    # Upstream connections are pooled across sessions
    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.upstream_timeout_seconds)
    )

    yield

    # Shutdown
    await app.state.http_client.aclose()
    logger.info("API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Mermaid Generation API",
    description="HTTP API for streaming Mermaid diagrams generated from text",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with structured error responses."""

    # If detail is already a dict (from our endpoints), use it directly
    if isinstance(exc.detail, dict):
        error_detail = exc.detail
    else:
        error_detail = {
            "code": "HTTP_ERROR",
            "message": str(exc.detail),
            "details": None
        }

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=error_detail,
            timestamp=datetime.now()
        ).model_dump(mode="json")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error={
                "code": "INTERNAL_ERROR",
                "message": f"Error while processing request: {exc}",
                "details": None
            },
            timestamp=datetime.now()
        ).model_dump(mode="json")
    )


# Include routers
app.include_router(health.router)
app.include_router(generate.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Mermaid Generation API",
        "version": __version__,
        "description": "HTTP API for streaming Mermaid diagrams generated from text",
        "docs": "/docs",
        "health": "/health",
        "generate": "/api/generate-mermaid"
    }


if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=True,
        log_level="info"
    )
