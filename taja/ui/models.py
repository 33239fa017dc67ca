"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from taja.core.session import StepKind, StepResult, TypingSession


def clamp_percent(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > 100.0:
        return 100.0
    return value


def next_wrong_hint(current: Optional[str], result: StepResult) -> Optional[str]:
    """Wrong-input hint to show after ``result``.

    ``WRONG`` shows the offending character, ``IGNORED`` keeps whatever was
    shown, and any accepted step clears it.
    """
    if result.kind is StepKind.WRONG:
        return result.char
    if result.clears_hint:
        return None
    return current


@dataclass(frozen=True)
class SessionView:
    """Display values for one frame, derived from a session's read-only state."""

    hp_percent: float
    progress_percent: float
    cursor: int
    total_chars: int
    line_index: int
    line_count: int
    line_text: str
    typed_len: int
    message: str
    wrong_char: Optional[str] = None

    @classmethod
    def from_session(cls, session: TypingSession, wrong_char: Optional[str] = None) -> "SessionView":
        line_idx, typed_len = session.line_state()
        lines = session.lines
        line_text = lines[line_idx] if lines else ""
        return cls(
            hp_percent=clamp_percent(session.health),
            progress_percent=clamp_percent(session.progress_percent),
            cursor=session.cursor,
            total_chars=session.total_chars,
            line_index=line_idx,
            line_count=len(lines),
            line_text=line_text,
            typed_len=typed_len,
            message=session.message,
            wrong_char=wrong_char,
        )

    @property
    def hp_ratio(self) -> float:
        return self.hp_percent / 100.0

    @property
    def progress_ratio(self) -> float:
        return self.progress_percent / 100.0

    @property
    def hp_label(self) -> str:
        return f"{self.hp_percent:>5.1f}%"

    @property
    def progress_label(self) -> str:
        return f"{self.progress_percent:>5.1f}% ({self.cursor}/{self.total_chars})"

    @property
    def line_label(self) -> str:
        return f"현재 줄 {self.line_index + 1}/{self.line_count}"

    @property
    def position_label(self) -> str:
        return f"위치 {self.typed_len}/{len(self.line_text)}"
