from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QEvent, QTimer
from PySide6.QtGui import QCloseEvent, QInputMethodEvent, QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QVBoxLayout,
)

from taja.core.script import Script
from taja.core.session import LIVE_INPUT_MESSAGE, StepKind, StepResult, TypingSession
from taja.ui.colors import BattleColors, health_color
from taja.ui.keys import is_quit_key, key_to_char
from taja.ui.models import SessionView, next_wrong_hint
from taja.ui.widgets import ArenaBackground, FlashOverlay, GaugeBar, GlassCard, ScriptLineWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Battle screen: boss health, progress, the current line, and status messages.

    The window owns the single ``TypingSession`` and is the only thing that
    mutates it.  Key presses and input-method commits are turned into
    logical characters and fed to the session one at a time; the returned
    ``StepResult`` drives the transient "wrong input" hint.
    """

    def __init__(self, script: Script, session: Optional[TypingSession] = None) -> None:
        super().__init__()
        self._script = script
        self._session = session if session is not None else TypingSession(script.lines)
        if not self._session.awaiting_restart:
            self._session.message = LIVE_INPUT_MESSAGE
        self._wrong_char: Optional[str] = None
        self._preedit = ""

        self._arena: Optional[ArenaBackground] = None
        self._hp_gauge: Optional[GaugeBar] = None
        self._progress_gauge: Optional[GaugeBar] = None
        self._line_label: Optional[QLabel] = None
        self._position_label: Optional[QLabel] = None
        self._script_line: Optional[ScriptLineWidget] = None
        self._preedit_label: Optional[QLabel] = None
        self._message_label: Optional[QLabel] = None

        self._flash: Optional[FlashOverlay] = None

        self._build_ui()
        self._render()
        QTimer.singleShot(0, self._arena.setFocus)

    def _build_ui(self) -> None:
        """Construct the widget tree: header, gauges, script line, message, flash overlay."""
        self.setWindowTitle(f"Taja - {self._script.title}")
        self.setMinimumSize(900, 560)

        self._arena = ArenaBackground()
        self._arena.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._arena.setAttribute(Qt.WidgetAttribute.WA_InputMethodEnabled, True)
        self._arena.installEventFilter(self)
        self.setCentralWidget(self._arena)

        outer = QVBoxLayout(self._arena)
        outer.setContentsMargins(60, 40, 60, 40)
        outer.setSpacing(16)

        header = GlassCard()
        header_layout = QVBoxLayout(header)
        header_layout.setContentsMargins(16, 12, 16, 12)
        title = QLabel("Mk.04 Typing Practice")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(
            f"color: {BattleColors.TEXT_PRIMARY}; font-size: 22px; font-weight: 800; "
            "background: transparent; border: none;"
        )
        subtitle = QLabel(self._script.title)
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet(self._muted_style(13))
        header_layout.addWidget(title)
        header_layout.addWidget(subtitle)
        outer.addWidget(header)

        stats_row = QHBoxLayout()
        stats_row.setSpacing(16)
        hp_card, self._hp_gauge = self._gauge_card(
            "보스 체력", BattleColors.HEALTH_FULL, BattleColors.HEALTH_FULL, accent=BattleColors.HEALTH_CRITICAL
        )
        progress_card, self._progress_gauge = self._gauge_card(
            "진행도", BattleColors.PROGRESS_START, BattleColors.PROGRESS_END
        )
        stats_row.addWidget(hp_card, 65)
        stats_row.addWidget(progress_card, 35)
        outer.addLayout(stats_row)

        lyrics_card = GlassCard()
        lyrics_layout = QVBoxLayout(lyrics_card)
        lyrics_layout.setContentsMargins(20, 16, 20, 16)
        lyrics_layout.setSpacing(10)
        lyrics_layout.addWidget(self._card_title("가사 진행"))

        line_header = QHBoxLayout()
        line_header.addStretch(1)
        self._line_label = QLabel()
        self._line_label.setStyleSheet(
            f"color: {BattleColors.CURRENT}; font-size: 14px; background: transparent; border: none;"
        )
        self._position_label = QLabel()
        self._position_label.setStyleSheet(self._muted_style(14))
        line_header.addWidget(self._line_label)
        line_header.addSpacing(24)
        line_header.addWidget(self._position_label)
        line_header.addStretch(1)
        lyrics_layout.addLayout(line_header)

        self._script_line = ScriptLineWidget()
        lyrics_layout.addWidget(self._script_line, 1)

        self._preedit_label = QLabel()
        self._preedit_label.setAlignment(Qt.AlignCenter)
        self._preedit_label.setStyleSheet(self._muted_style(16))
        lyrics_layout.addWidget(self._preedit_label)
        outer.addWidget(lyrics_card, 1)

        message_card = GlassCard()
        message_layout = QVBoxLayout(message_card)
        message_layout.setContentsMargins(20, 12, 20, 12)
        message_layout.addWidget(self._card_title("메시지"))
        self._message_label = QLabel()
        self._message_label.setAlignment(Qt.AlignCenter)
        self._message_label.setWordWrap(True)
        self._message_label.setStyleSheet(
            f"color: {BattleColors.TEXT_PRIMARY}; font-size: 16px; background: transparent; border: none;"
        )
        message_layout.addWidget(self._message_label)
        outer.addWidget(message_card)

        self._flash = FlashOverlay(self)

    def _gauge_card(
        self, title: str, color_start: str, color_end: str, accent: Optional[str] = None
    ) -> tuple[GlassCard, GaugeBar]:
        card = GlassCard(accent=accent)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(16, 12, 16, 14)
        layout.setSpacing(8)
        layout.addWidget(self._card_title(title))
        gauge = GaugeBar(color_start=color_start, color_end=color_end)
        layout.addWidget(gauge)
        return card, gauge

    def _card_title(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setStyleSheet(
            f"color: {BattleColors.TEXT_SECONDARY}; font-size: 12px; font-weight: 700; "
            "background: transparent; border: none;"
        )
        return label

    @staticmethod
    def _muted_style(size: int) -> str:
        return f"color: {BattleColors.TEXT_MUTED}; font-size: {size}px; background: transparent; border: none;"

    def eventFilter(self, obj, event) -> bool:
        """Route key presses and input-method commits on the arena into the session."""
        if obj == self._arena:
            if event.type() == QEvent.Type.KeyPress:
                return self._on_key_press(event)
            if event.type() == QEvent.Type.InputMethod:
                self._on_input_method(event)
                return True
        return super().eventFilter(obj, event)

    def _on_key_press(self, event: QKeyEvent) -> bool:
        if is_quit_key(event.key(), event.modifiers()):
            self.close()
            return True
        ch = key_to_char(event.key(), event.text())
        if ch is None:
            return False
        self.feed(ch)
        return True

    def _on_input_method(self, event: QInputMethodEvent) -> None:
        self._preedit = event.preeditString()
        commit = event.commitString()
        for ch in commit:
            self.feed(ch, render=False)
        self._render()

    def feed(self, ch: str, render: bool = True) -> StepResult:
        """Submit one character to the session and update the wrong-input hint."""
        result = self._session.submit(ch)
        self._wrong_char = next_wrong_hint(self._wrong_char, result)
        if result.kind is StepKind.WRONG:
            self._flash.flash()
        if render:
            self._render()
        return result

    def _render(self) -> None:
        view = SessionView.from_session(self._session, self._wrong_char)
        self._hp_gauge.set_ratio(view.hp_ratio, view.hp_label, color_end=health_color(view.hp_ratio))
        self._progress_gauge.set_ratio(view.progress_ratio, view.progress_label)
        self._line_label.setText(view.line_label)
        self._position_label.setText(view.position_label)
        self._script_line.set_line(view.line_text, view.typed_len, wrong=view.wrong_char is not None)
        self._preedit_label.setText(self._preedit)
        self._message_label.setText(view.message)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if self._flash is not None:
            self._flash.cover_parent()

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info(
            "Closing at %d/%d characters, boss health %.1f%%",
            self._session.cursor,
            self._session.total_chars,
            self._session.health,
        )
        super().closeEvent(event)
