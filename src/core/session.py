"""Per-request stream state: decoding, fence extraction and result assembly."""

from dataclasses import dataclass, field
from typing import List, Optional

from core.fence_extractor import FenceExtractor, FenceState
from core.frame_decoder import FrameDecoder


@dataclass
class StreamSession:
    """
    All mutable state of one generation session.

    Owned by a single controller and never shared between requests.
    `collected` joins to the extracted code; `raw_all` keeps every content
    delta as a fallback for output that never contained a fence.
    """
    decoder: FrameDecoder = field(default_factory=FrameDecoder)
    extractor: FenceExtractor = field(default_factory=FenceExtractor)
    collected: List[str] = field(default_factory=list)
    raw_all: List[str] = field(default_factory=list)

    @classmethod
    def create(cls, language: Optional[str] = None,
               carry_limit: Optional[int] = None) -> "StreamSession":
        return cls(
            decoder=FrameDecoder(carry_limit=carry_limit),
            extractor=FenceExtractor(language=language),
        )

    @property
    def mode(self) -> FenceState:
        return self.extractor.state

    def feed(self, chunk: bytes) -> List[str]:
        """Process one upstream chunk and return the increments it produced."""
        return self._accept(self.decoder.feed(chunk))

    def finish(self) -> List[str]:
        """Flush decoder and extractor tails once upstream has ended."""
        increments = self._accept(self.decoder.flush())
        for increment in self.extractor.flush():
            self.collected.append(increment)
            increments.append(increment)
        return increments

    def final_code(self) -> str:
        return "".join(self.collected).strip() or "".join(self.raw_all).strip()

    def _accept(self, deltas: List[str]) -> List[str]:
        increments = []
        for delta in deltas:
            self.raw_all.append(delta)
            for increment in self.extractor.process(delta):
                self.collected.append(increment)
                increments.append(increment)
        return increments
