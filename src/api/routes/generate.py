"""Generation endpoint streaming Mermaid code as Server-Sent Events."""

from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.responses import StreamingResponse

from core.errors import ConfigurationError
from utils.text_utils import is_within_char_limit
from ..models.config import APIConfig
from ..models.requests import GenerateRequest
from ..services.generation import GenerationService, SSE_HEADERS


router = APIRouter(prefix="/api")


def get_config() -> APIConfig:
    """Get API configuration."""
    return APIConfig.from_env()


def get_generation_service(
    request: Request,
    config: APIConfig = Depends(get_config)
) -> GenerationService:
    """Get generation service instance, sharing the app's HTTP client when running."""
    client = getattr(request.app.state, "http_client", None)
    return GenerationService(config, client=client)


@router.post("/generate-mermaid")
async def generate_mermaid(
    request: GenerateRequest,
    config: APIConfig = Depends(get_config),
    generation_service: GenerationService = Depends(get_generation_service)
):
    """
    Generate a Mermaid diagram from text, streamed as it is produced.

    The response is a text/event-stream of `data: <json>` records: `chunk`
    events carrying diagram code as it is discovered, then exactly one
    `final` (complete code) or `error` event.
    """

    if not request.text:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "MISSING_TEXT",
                "message": "Please provide text content",
                "details": None
            }
        )

    if not is_within_char_limit(request.text, config.max_input_chars):
        raise HTTPException(
            status_code=413,
            detail={
                "code": "TEXT_TOO_LONG",
                "message": f"Text exceeds limit of {config.max_input_chars} characters",
                "details": f"Received text length: {len(request.text)}"
            }
        )

    try:
        controller = generation_service.create_session(request)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "code": e.code,
                "message": e.message,
                "details": e.details
            }
        )

    return StreamingResponse(
        generation_service.stream(controller),
        media_type="text/event-stream",
        headers=SSE_HEADERS
    )
