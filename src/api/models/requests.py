"""Request models for the API."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AIConfig(BaseModel):
    """Caller-supplied upstream credentials."""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    api_url: Optional[str] = Field(default=None, alias="apiUrl")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    model_name: Optional[str] = Field(default=None, alias="modelName")

    def is_complete(self) -> bool:
        return bool(self.api_url and self.api_key and self.model_name)


class GenerateRequest(BaseModel):
    """Request body for Mermaid generation."""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    # Optional here so a missing text gets the structured 400 instead of a 422
    text: Optional[str] = Field(default=None, description="Text to turn into a diagram")
    diagram_type: Optional[str] = Field(default="auto", alias="diagramType",
                                        description="auto, flowchart, sequence or class")
    ai_config: Optional[AIConfig] = Field(default=None, alias="aiConfig")
    access_password: Optional[str] = Field(default=None, alias="accessPassword")
    selected_model: Optional[str] = Field(default=None, alias="selectedModel")
