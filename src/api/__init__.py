"""
HTTP API for streaming Mermaid diagram generation.

This module provides a FastAPI-based service that asks an OpenAI-compatible
chat-completion endpoint for a diagram and streams the extracted Mermaid
code back to the caller as Server-Sent Events.
"""

__version__ = "1.0.0"
