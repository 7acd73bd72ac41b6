from __future__ import annotations

"""Core data types for snippet highlighting."""

from dataclasses import dataclass
from typing import Iterable, Iterator

TRUNCATION_MARKER = "..."


@dataclass(frozen=True)
class Segment:
    """Piece of rendered body text."""
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class TokenSequence:
    """Ordered body tokens; never holds an empty or missing token."""
    tokens: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for token in self.tokens:
            if not isinstance(token, str) or not token:
                raise ValueError("TokenSequence cannot hold empty or missing tokens")

    @classmethod
    def from_parts(cls, parts: Iterable[str | None]) -> TokenSequence:
        """Build a sequence from raw split output, skipping absent and empty parts."""
        return cls(tuple(part for part in parts if part))

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass(frozen=True)
class SnippetResult:
    """Highlighted, length-bounded rendering of one post body."""
    segments: tuple[Segment, ...] = ()
    truncated: bool = False

    @property
    def content_segments(self) -> tuple[Segment, ...]:
        if self.truncated:
            return self.segments[:-1]
        return self.segments

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.content_segments)
