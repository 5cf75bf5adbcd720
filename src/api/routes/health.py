"""Health check endpoint."""

from fastapi import APIRouter, Depends

from ..models.config import APIConfig
from ..models.responses import HealthResponse
from .generate import get_config
from .. import __version__

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(config: APIConfig = Depends(get_config)):
    """Report service status and whether default upstream credentials are set."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        default_upstream_configured=bool(
            config.ai_api_url and config.ai_api_key and config.ai_model_name
        )
    )
