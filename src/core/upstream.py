"""Request construction for the OpenAI-compatible chat-completion service."""

from dataclasses import dataclass
from typing import Any, Dict, List

import httpx


@dataclass(frozen=True)
class UpstreamSettings:
    """Resolved credentials for one session, passed in at construction."""
    api_url: str
    api_key: str
    model_name: str

    def is_complete(self) -> bool:
        return bool(self.api_url and self.api_key and self.model_name)

    def __repr__(self) -> str:
        return (f"UpstreamSettings(api_url={self.api_url!r}, model_name={self.model_name!r}, "
                f"has_api_key={bool(self.api_key)})")


def build_completions_url(api_url: str) -> str:
    """
    Build the chat completions endpoint for a base URL.

    URLs that already carry a version segment (v1 or v3) only get
    `/chat/completions` appended; everything else gets `/v1/chat/completions`.
    """
    base = api_url.rstrip("/")
    if "v1" in base or "v3" in base:
        return f"{base}/chat/completions"
    return f"{base}/v1/chat/completions"


def build_messages(system_prompt: str, user_text: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_text},
    ]


def build_payload(settings: UpstreamSettings, messages: List[Dict[str, str]]) -> Dict[str, Any]:
    return {
        "model": settings.model_name,
        "messages": messages,
        "stream": True,
    }


def build_headers(settings: UpstreamSettings) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.api_key}",
    }


def open_completion_stream(client: httpx.AsyncClient,
                           settings: UpstreamSettings,
                           messages: List[Dict[str, str]]):
    """Open a streaming completion request; use as `async with`."""
    return client.stream(
        "POST",
        build_completions_url(settings.api_url),
        headers=build_headers(settings),
        json=build_payload(settings, messages),
    )
