"""
Session Controller

Drives one generation session end to end: opens the streaming completion
request, feeds upstream chunks through the frame decoder and fence
extractor, and turns the result into downstream events.

Every session ends with exactly one terminal event (`FinalEvent` or
`ErrorEvent`). The controller is an async generator that only reads the
next upstream chunk when the consumer asks for the next event, so a slow
consumer stalls upstream reads instead of growing a buffer. Closing the
generator early (client disconnect) exits the `async with` blocks, which
closes the upstream response and any client the controller owns.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

import httpx

from core.errors import TransportError, UpstreamError
from core.events import ChunkEvent, ErrorEvent, FinalEvent, StreamEvent
from core.session import StreamSession
from core.syntax_advisory import advise
from core.upstream import UpstreamSettings, build_completions_url, open_completion_stream
from utils.logger import setup_logger
from utils.text_utils import truncate_text


logger = setup_logger(__name__)


DEFAULT_TIMEOUT_SECONDS = 120.0


def describe_error(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class SessionController:
    """
    Runs one upstream stream into one downstream event stream.

    Example:
        >>> controller = SessionController(settings, messages)
        >>> async for event in controller.events():
        ...     print(event.to_dict())
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        messages: List[Dict[str, str]],
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        language: Optional[str] = None,
        carry_limit: Optional[int] = None
    ):
        """
        Initialize controller.

        Args:
            settings: Resolved upstream credentials
            messages: Chat messages sent upstream
            client: Shared HTTP client; when omitted the controller opens and
                closes its own
            timeout_seconds: Upstream timeout when the controller owns the client
            language: Fence language tag to prefer, defaults to Config.FENCE_LANGUAGE
            carry_limit: Decoder carry cap, defaults to Config.DECODE_CARRY_LIMIT
        """
        self.settings = settings
        self.messages = messages
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.session = StreamSession.create(language=language, carry_limit=carry_limit)
        self.terminated = False

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield chunk events as code is discovered, then one terminal event."""
        logger.info(f"Using AI config: url={build_completions_url(self.settings.api_url)}, "
                    f"model={self.settings.model_name}, has_api_key={bool(self.settings.api_key)}")

        error_event = None
        try:
            async with self._client_scope() as client:
                try:
                    async with open_completion_stream(client, self.settings, self.messages) as response:
                        if not response.is_success:
                            body = await response.aread()
                            raise UpstreamError(response.status_code,
                                                body.decode("utf-8", errors="replace"))

                        async for chunk in response.aiter_bytes():
                            for increment in self.session.feed(chunk):
                                yield ChunkEvent(increment)
                except httpx.HTTPError as exc:
                    raise TransportError(describe_error(exc)) from exc

            for increment in self.session.finish():
                yield ChunkEvent(increment)

            final_code = self.session.final_code()
            self._log_advisory(final_code)
            yield self._terminate(FinalEvent(final_code))

        except UpstreamError as exc:
            logger.error(f"AI API Error: {exc.status_code} {truncate_text(exc.body, 500)}")
            error_event = ErrorEvent(str(exc))
        except TransportError as exc:
            logger.error(f"Streaming transport error: {exc}")
            error_event = ErrorEvent(f"Error while processing request: {exc}")
        except Exception as exc:
            logger.exception("Streaming error")
            error_event = ErrorEvent(f"Error while processing request: {describe_error(exc)}")

        if error_event is not None and not self.terminated:
            yield self._terminate(error_event)

    def _terminate(self, event: StreamEvent) -> StreamEvent:
        self.terminated = True
        return event

    @asynccontextmanager
    async def _client_scope(self):
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds)) as client:
            yield client

    @staticmethod
    def _log_advisory(code: str) -> None:
        if not code:
            return
        warnings = advise(code)
        if warnings:
            logger.warning(f"Mermaid syntax warnings: {'; '.join(warnings)}")
