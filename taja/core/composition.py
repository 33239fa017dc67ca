"""Detection of transient input-method fragments.

Multi-stage input methods (Hangul, for instance) emit intermediate code
points while a syllable is still being composed.  Those keystrokes do not
represent a finished character and must never be compared against the
target text.  The ranges are kept as named data so the policy can be read,
swapped, or disabled per input-method ecosystem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

MAX_CODE_POINT = 0x10FFFF


@dataclass(frozen=True)
class CodePointRange:
    """Inclusive range of code points with a human-readable name."""

    name: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end > MAX_CODE_POINT:
            raise ValueError(f"{self.name}: range outside U+0000..U+10FFFF")
        if self.start > self.end:
            raise ValueError(f"{self.name}: start U+{self.start:04X} is after end U+{self.end:04X}")

    def __contains__(self, code: int) -> bool:
        return self.start <= code <= self.end


HANGUL_JAMO_RANGES: Tuple[CodePointRange, ...] = (
    CodePointRange("Hangul Jamo", 0x1100, 0x11FF),
    CodePointRange("Hangul Compatibility Jamo", 0x3130, 0x318F),
    CodePointRange("Hangul Jamo Extended-A", 0xA960, 0xA97F),
    CodePointRange("Hangul Jamo Extended-B", 0xD7B0, 0xD7FF),
)


class CompositionFilter:
    """Deny-list of code-point ranges treated as composition fragments."""

    def __init__(self, ranges: Optional[Iterable[CodePointRange]] = None) -> None:
        self._ranges = tuple(HANGUL_JAMO_RANGES if ranges is None else ranges)

    @classmethod
    def none(cls) -> "CompositionFilter":
        """A filter that lets every character through."""
        return cls(())

    @property
    def ranges(self) -> Tuple[CodePointRange, ...]:
        return self._ranges

    def is_fragment(self, ch: str) -> bool:
        """Return True if ``ch`` is a single code point inside a denied range."""
        if len(ch) != 1:
            return False
        code = ord(ch)
        return any(code in r for r in self._ranges)

    def matching_range(self, ch: str) -> Optional[CodePointRange]:
        """Return the first range containing ``ch``, if any."""
        if len(ch) != 1:
            return None
        code = ord(ch)
        for r in self._ranges:
            if code in r:
                return r
        return None
