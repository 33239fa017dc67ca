from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from taja.core.composition import CompositionFilter

logger = logging.getLogger(__name__)

FULL_HEALTH = 100.0

PROMPT_MESSAGE = "가사를 모두 입력해 보스를 처치하세요."
LIVE_INPUT_MESSAGE = "실시간 입력 활성화. 가사를 이어서 입력하세요."
CORRECT_MESSAGE = "정확!"
WRONG_MESSAGE = "틀렸습니다."
VICTORY_MESSAGE = "승리! 스페이스로 다시 시작합니다."
RESTARTED_MESSAGE = "다시 시작했습니다. 계속 입력하세요."

RESTART_CHAR = " "
LINE_BREAKS = ("\n", "\r")
# str.isspace() also accepts the ASCII information separators, which are not
# Unicode White_Space.
INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_unicode_whitespace(ch: str) -> bool:
    """True for characters with the Unicode White_Space property."""
    return ch.isspace() and ch not in INFORMATION_SEPARATORS


class StepKind(Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    IGNORED = "ignored"
    VICTORY = "victory"
    RESTARTED = "restarted"


@dataclass(frozen=True)
class StepResult:
    """Outcome of feeding one character to a session.

    ``char`` carries the offending character for ``WRONG`` and is ``None``
    for every other kind.
    """

    kind: StepKind
    char: Optional[str] = None

    @property
    def clears_hint(self) -> bool:
        """True when a pending "wrong input" hint should be cleared."""
        return self.kind in (StepKind.CORRECT, StepKind.VICTORY, StepKind.RESTARTED)


CORRECT = StepResult(StepKind.CORRECT)
IGNORED = StepResult(StepKind.IGNORED)
VICTORY = StepResult(StepKind.VICTORY)
RESTARTED = StepResult(StepKind.RESTARTED)


def wrong(ch: str) -> StepResult:
    return StepResult(StepKind.WRONG, ch)


class TypingSession:
    """Character-by-character typing state machine with a boss health bar.

    The target lines are flattened into one character sequence.  Each
    correct character moves the cursor forward and takes ``100 / N`` off
    the boss health; a wrong character only blocks progress.  Once the
    cursor reaches the end the session waits for a space to start over.
    """

    def __init__(
        self,
        lines: Iterable[str],
        composition_filter: Optional[CompositionFilter] = None,
    ) -> None:
        self._lines: Tuple[str, ...] = tuple(lines)
        self._chars: List[str] = []
        self._char_meta: List[Tuple[int, int]] = []
        for line_idx, line in enumerate(self._lines):
            for pos, ch in enumerate(line):
                self._chars.append(ch)
                self._char_meta.append((line_idx, pos))

        self._total = len(self._chars)
        self._damage = FULL_HEALTH / self._total if self._total else 0.0
        self._filter = composition_filter if composition_filter is not None else CompositionFilter()

        self._cursor = 0
        self._health = FULL_HEALTH
        self._awaiting_restart = self._total == 0
        self.message = VICTORY_MESSAGE if self._awaiting_restart else PROMPT_MESSAGE

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    @property
    def cursor(self) -> int:
        """Index of the next expected character; equals ``total_chars`` when done."""
        return self._cursor

    @property
    def health(self) -> float:
        return self._health

    @property
    def damage(self) -> float:
        """Health removed by each correct character."""
        return self._damage

    @property
    def total_chars(self) -> int:
        return self._total

    @property
    def awaiting_restart(self) -> bool:
        return self._awaiting_restart

    @property
    def progress_percent(self) -> float:
        if not self._total:
            return 0.0
        return self._cursor / self._total * 100.0

    def is_complete(self) -> bool:
        return self._cursor >= self._total

    def expected_char(self) -> Optional[str]:
        """Return the character the player must type next, or None when done."""
        if self._cursor >= self._total:
            return None
        return self._chars[self._cursor]

    def reset(self) -> None:
        self._cursor = 0
        self._health = FULL_HEALTH
        # An empty script has nothing to type, so it is complete again at once.
        self._awaiting_restart = self._total == 0
        self.message = RESTARTED_MESSAGE

    def submit(self, ch: str) -> StepResult:
        """Feed a single logical character and classify the outcome."""
        if self._awaiting_restart:
            if ch == RESTART_CHAR:
                self.reset()
                logger.info("Session restarted")
                return RESTARTED
            return IGNORED

        if ch in LINE_BREAKS or len(ch) != 1:
            return IGNORED

        expected = self.expected_char()
        if expected is None:
            return self._win()

        if self._filter.is_fragment(ch):
            return IGNORED

        if is_unicode_whitespace(ch) and ch != " " and expected != " ":
            return IGNORED

        if ch != expected:
            self.message = WRONG_MESSAGE
            logger.debug("Wrong key %r at %d (expected %r)", ch, self._cursor, expected)
            return wrong(ch)

        self._cursor += 1
        self._health = max(self._health - self._damage, 0.0)
        if self._cursor >= self._total:
            return self._win()
        self.message = CORRECT_MESSAGE
        return CORRECT

    def line_state(self) -> Tuple[int, int]:
        """Return (line index, characters typed within that line)."""
        if self._cursor >= self._total:
            if not self._lines:
                return (0, 0)
            last = len(self._lines) - 1
            return (last, len(self._lines[last]))
        return self._char_meta[self._cursor]

    def _win(self) -> StepResult:
        # Float drift may leave a sliver of health after N subtractions.
        self._health = 0.0
        self._awaiting_restart = True
        self.message = VICTORY_MESSAGE
        logger.info("Boss defeated after %d characters", self._total)
        return VICTORY
