"""Generation service that wires requests to streaming sessions."""

import json
from typing import AsyncIterator, Optional

import httpx

from core.controller import SessionController
from core.events import StreamEvent
from core.upstream import build_messages
from utils.prompts import build_mermaid_system_prompt
from utils.text_utils import clean_text
from utils.logger import setup_logger

from ..models.config import APIConfig
from ..models.requests import GenerateRequest
from .credentials import resolve_upstream_settings


logger = setup_logger(__name__)


SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse(event: StreamEvent) -> str:
    """Encode one event as an SSE `data:` record."""
    return f"data: {json.dumps(event.to_dict(), ensure_ascii=False)}\n\n"


class GenerationService:
    """Service for turning text into a streamed Mermaid diagram."""

    def __init__(self, config: APIConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client

    def create_session(self, request: GenerateRequest) -> SessionController:
        """
        Resolve credentials and build the upstream conversation for a request.

        Raises:
            ConfigurationError: If no usable credentials can be resolved
        """
        settings = resolve_upstream_settings(request, self.config)

        system_prompt = build_mermaid_system_prompt(
            diagram_type=request.diagram_type or "auto",
            language=self.config.prompt_language,
        )
        messages = build_messages(system_prompt, clean_text(request.text or ""))

        return SessionController(
            settings=settings,
            messages=messages,
            client=self.client,
            timeout_seconds=self.config.upstream_timeout_seconds,
        )

    async def stream(self, controller: SessionController) -> AsyncIterator[str]:
        """Yield SSE records for every event of a session."""
        async for event in controller.events():
            yield format_sse(event)
