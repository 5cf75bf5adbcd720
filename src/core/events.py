"""Downstream events produced by a generation session."""

from dataclasses import dataclass, field
from typing import Dict, Any, Union


@dataclass(frozen=True)
class ChunkEvent:
    """Interior code content as it is discovered."""
    data: str
    type: str = field(default="chunk", init=False)
    terminal = False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": self.data}


@dataclass(frozen=True)
class FinalEvent:
    """The complete extracted (or raw fallback) result; always last."""
    data: str
    ok: bool = True
    type: str = field(default="final", init=False)
    terminal = True

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": self.data, "ok": self.ok}


@dataclass(frozen=True)
class ErrorEvent:
    """Terminal failure; no final event follows it."""
    message: str
    ok: bool = False
    type: str = field(default="error", init=False)
    terminal = True

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "ok": self.ok}


StreamEvent = Union[ChunkEvent, FinalEvent, ErrorEvent]
