"""
Frame Decoder

Turns the raw byte stream of an OpenAI-style streaming chat completion into
the incremental content strings it carries. Records look like

    data: {"choices":[{"delta":{"content":"..."}}]}

separated by newlines and terminated by `data: [DONE]`. Chunks from the
transport do not respect record boundaries, so partial records and partial
JSON payloads are buffered until they can be completed.
"""

import codecs
import json
from typing import List, Optional, Any

from core.buffers import BoundedBuffer
from utils.config import Config
from utils.logger import setup_logger


logger = setup_logger(__name__)


DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def extract_delta_content(message: Any) -> str:
    """Return choices[0].delta.content from a parsed payload, or "" if absent."""
    if not isinstance(message, dict):
        return ""
    choices = message.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


class FrameDecoder:
    """Decodes upstream byte chunks into content deltas."""

    def __init__(self, carry_limit: Optional[int] = None, line_limit: Optional[int] = None):
        """
        Initialize decoder.

        Args:
            carry_limit: Max characters of unparsed payload kept between
                records, defaults to Config.DECODE_CARRY_LIMIT
            line_limit: Max characters of an unterminated record kept between
                chunks, defaults to Config.DECODE_LINE_LIMIT
        """
        self.json_carry = BoundedBuffer(
            "json_carry", carry_limit or Config.DECODE_CARRY_LIMIT,
            on_overflow=self._carry_overflow
        )
        self.line_tail = BoundedBuffer(
            "line_tail", line_limit or Config.DECODE_LINE_LIMIT,
            on_overflow=self._line_overflow
        )
        self._text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, chunk: bytes) -> List[str]:
        """
        Decode one transport chunk.

        Args:
            chunk: Raw bytes as delivered by the transport

        Returns:
            Content deltas completed by this chunk, in arrival order
            (possibly empty)
        """
        text = self._text_decoder.decode(chunk)
        if not text:
            return []

        records = (self.line_tail.take() + text).split("\n")
        # The last piece has no terminating newline yet
        self.line_tail.set(records.pop())

        deltas = []
        for record in records:
            content = self._process_record(record)
            if content:
                deltas.append(content)
        return deltas

    def flush(self) -> List[str]:
        """Process whatever is left once the transport reports end of stream."""
        tail = self.line_tail.take() + self._text_decoder.decode(b"", final=True)
        self._text_decoder.reset()

        deltas = []
        for record in tail.split("\n"):
            content = self._process_record(record)
            if content:
                deltas.append(content)
        self.json_carry.clear()
        return deltas

    def _process_record(self, record: str) -> str:
        record = record.strip()
        if not record or not record.startswith(DATA_PREFIX):
            return ""

        payload = record[len(DATA_PREFIX):].strip()
        if not payload or payload == DONE_SENTINEL:
            self.json_carry.clear()
            return ""

        candidate = self.json_carry.value + payload
        try:
            message = json.loads(candidate)
        except (ValueError, RecursionError):
            # Assume the payload continues in the next record; nesting too
            # deep to decode is carried the same way until the cap drops it
            self.json_carry.set(candidate)
            return ""

        self.json_carry.clear()
        return extract_delta_content(message)

    @staticmethod
    def _carry_overflow(name: str, dropped_length: int) -> None:
        logger.error(f"Error parsing upstream chunk (buffer overflow): "
                     f"dropped {dropped_length} characters of unparsed payload")

    @staticmethod
    def _line_overflow(name: str, dropped_length: int) -> None:
        logger.error(f"Upstream record exceeded line limit: dropped {dropped_length} characters")
