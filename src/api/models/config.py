"""Configuration models for the API."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
import os


SECRET_FIELDS = {"ai_api_key", "access_password"}


class APIConfig(BaseModel):
    """API configuration settings."""

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8000, description="Port to bind to")

    # Default upstream credentials
    ai_api_url: Optional[str] = Field(default=None, description="Default chat-completion base URL")
    ai_api_key: Optional[str] = Field(default=None, description="Default chat-completion API key")
    ai_model_name: Optional[str] = Field(default=None, description="Default model name")
    access_password: Optional[str] = Field(default=None, description="Password unlocking the default credentials")

    # Processing limits
    upstream_timeout_seconds: float = Field(default=120.0, description="Upstream request timeout in seconds")
    max_input_chars: int = Field(default=20000, description="Maximum input text length in characters")
    prompt_language: str = Field(default="zh", description="System prompt language (zh or en)")

    # Security
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")

    def public_dict(self) -> Dict[str, Any]:
        """Configuration safe for logging."""
        data = self.model_dump(exclude=SECRET_FIELDS)
        data["has_ai_api_key"] = bool(self.ai_api_key)
        data["has_access_password"] = bool(self.access_password)
        return data

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            ai_api_url=os.getenv("AI_API_URL") or None,
            ai_api_key=os.getenv("AI_API_KEY") or None,
            ai_model_name=os.getenv("AI_MODEL_NAME") or None,
            access_password=os.getenv("ACCESS_PASSWORD") or None,
            upstream_timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "120")),
            max_input_chars=int(os.getenv("MAX_INPUT_CHARS", "20000")),
            prompt_language=os.getenv("PROMPT_LANGUAGE", "zh"),
            cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        )
