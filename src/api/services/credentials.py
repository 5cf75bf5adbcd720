"""Resolution of the upstream credentials used for one request."""

import hmac

from core.errors import ConfigurationError
from core.upstream import UpstreamSettings
from ..models.config import APIConfig
from ..models.requests import GenerateRequest


def resolve_upstream_settings(request: GenerateRequest, config: APIConfig) -> UpstreamSettings:
    """
    Pick the credentials for a request.

    A complete caller-supplied aiConfig wins outright. Otherwise an access
    password, when given, must match the configured one, and the server
    defaults are used with selectedModel overriding the default model.

    Raises:
        ConfigurationError: Wrong access password (401) or incomplete
            resulting configuration (400)
    """
    ai_config = request.ai_config
    if ai_config is not None and ai_config.is_complete():
        return UpstreamSettings(
            api_url=ai_config.api_url,
            api_key=ai_config.api_key,
            model_name=ai_config.model_name,
        )

    if request.access_password:
        expected = config.access_password
        if not expected or not hmac.compare_digest(request.access_password.encode("utf-8"),
                                                   expected.encode("utf-8")):
            raise ConfigurationError(
                "Invalid access password",
                code="INVALID_ACCESS_PASSWORD",
                status_code=401,
            )

    settings = UpstreamSettings(
        api_url=config.ai_api_url or "",
        api_key=config.ai_api_key or "",
        model_name=request.selected_model or config.ai_model_name or "",
    )
    if not settings.is_complete():
        raise ConfigurationError(
            "AI configuration is incomplete, please configure API URL, API Key and model name",
            code="INCOMPLETE_AI_CONFIG",
            status_code=400,
        )
    return settings
