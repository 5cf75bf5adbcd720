"""
Bounded text buffers with an explicit overflow recovery policy.

Stream decoding keeps partial data between deliveries. Those buffers must
not grow without limit when upstream sends something that never completes,
so each one is capped: appending past the cap discards the whole buffer and
reports the overflow instead of raising.
"""

from typing import Callable, Optional

from utils.logger import setup_logger


logger = setup_logger(__name__)


class BoundedBuffer:
    """
    Accumulates text up to a fixed limit.

    Example:
        >>> buf = BoundedBuffer("carry", limit=8)
        >>> buf.append("abcd")
        True
        >>> buf.append("efghij")
        False
        >>> buf.value
        ''
    """

    def __init__(self, name: str, limit: int,
                 on_overflow: Optional[Callable[[str, int], None]] = None):
        """
        Initialize buffer.

        Args:
            name: Label used when reporting overflow
            limit: Maximum number of characters kept
            on_overflow: Called with (name, dropped_length) when the buffer is
                discarded; defaults to logging a warning
        """
        if limit <= 0:
            raise ValueError(f"Buffer limit must be positive, got {limit}")
        self.name = name
        self.limit = limit
        self.overflow_count = 0
        self._on_overflow = on_overflow or self._log_overflow
        self._value = ""

    @property
    def value(self) -> str:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def set(self, text: str) -> bool:
        """Replace the contents; returns False if the text was dropped for size."""
        if len(text) > self.limit:
            self._drop(len(text))
            return False
        self._value = text
        return True

    def append(self, text: str) -> bool:
        """Append text; returns False if the combined contents were dropped for size."""
        return self.set(self._value + text)

    def take(self) -> str:
        """Return the contents and clear the buffer."""
        value, self._value = self._value, ""
        return value

    def clear(self) -> None:
        self._value = ""

    def _drop(self, dropped_length: int) -> None:
        self._value = ""
        self.overflow_count += 1
        self._on_overflow(self.name, dropped_length)

    @staticmethod
    def _log_overflow(name: str, dropped_length: int) -> None:
        logger.warning(f"Buffer '{name}' overflow: dropped {dropped_length} characters")
