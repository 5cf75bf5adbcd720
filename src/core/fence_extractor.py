"""
Fence Extraction

Incrementally isolates the interior of the first fenced code block in a
stream of model output. Text before the opening fence line and everything
from the closing fence on is discarded; interior content is released as
soon as it arrives instead of waiting for the closing fence.
"""

from enum import Enum
from typing import List, Optional

from core.errors import InvalidTransition
from utils.config import Config


class FenceState(Enum):
    """Extraction states, in the only order they may be entered."""
    SEARCH = 0
    COLLECT = 1
    DONE = 2


class FenceExtractor:
    """
    Three-state machine over accumulated text.

    Example:
        >>> extractor = FenceExtractor()
        >>> extractor.process("Here you go:\\n```mermaid\\nflowchart TD\\n")
        ['flowchart TD\\n']
        >>> extractor.process("A --> B\\n```\\nDone.")
        ['A --> B\\n']
        >>> extractor.state
        <FenceState.DONE: 2>
    """

    def __init__(self, language: Optional[str] = None):
        self.marker = Config.FENCE_MARKER
        self.tagged_marker = self.marker + (language or Config.FENCE_LANGUAGE)
        self.pending = ""
        self._state = FenceState.SEARCH

    @property
    def state(self) -> FenceState:
        return self._state

    def process(self, text: str) -> List[str]:
        """
        Feed the next piece of text.

        Args:
            text: Content delta in arrival order

        Returns:
            Interior content increments made available by this text
        """
        if self._state is FenceState.DONE:
            return []

        self.pending += text
        increments = []

        while True:
            if self._state is FenceState.SEARCH:
                if not self._open_fence():
                    break
            elif self._state is FenceState.COLLECT:
                if not self._collect(increments):
                    break
            else:
                self.pending = ""
                break

        return increments

    def flush(self) -> List[str]:
        """Release text held back at end of stream."""
        if self._state is FenceState.COLLECT and self.pending:
            remainder, self.pending = self.pending, ""
            return [remainder]
        return []

    def _transition(self, target: FenceState) -> None:
        if target.value <= self._state.value:
            raise InvalidTransition(f"Cannot move from {self._state.name} to {target.name}")
        self._state = target

    def _find_opener(self) -> int:
        idx_tagged = self.pending.find(self.tagged_marker)
        idx_bare = self.pending.find(self.marker)
        # A bare match at the same index is the tagged fence itself
        if idx_tagged != -1 and (idx_bare == -1 or idx_tagged <= idx_bare):
            return idx_tagged
        return idx_bare

    def _open_fence(self) -> bool:
        """Try to consume an opening fence line; True when COLLECT was entered."""
        idx = self._find_opener()
        if idx == -1:
            # Keep only what could still be the start of a fence
            self.pending = self.pending[-(len(self.marker) - 1):]
            return False

        newline_idx = self.pending.find("\n", idx)
        if newline_idx == -1:
            self.pending = self.pending[idx:]
            return False

        self.pending = self.pending[newline_idx + 1:]
        self._transition(FenceState.COLLECT)
        return True

    def _collect(self, increments: List[str]) -> bool:
        """Release interior text; True when the closing fence moved us to DONE."""
        close_idx = self.pending.find(self.marker)
        if close_idx == -1:
            # Trailing backticks may be the start of a closing fence
            held = len(self.pending) - len(self.pending.rstrip("`"))
            release_to = len(self.pending) - min(held, len(self.marker) - 1)
            if release_to > 0:
                increments.append(self.pending[:release_to])
                self.pending = self.pending[release_to:]
            return False

        if close_idx > 0:
            increments.append(self.pending[:close_idx])
        self.pending = ""
        self._transition(FenceState.DONE)
        return True
