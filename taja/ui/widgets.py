"""Battle screen widgets: background, cards, gauges and the current script line."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QPoint, QPropertyAnimation
from PySide6.QtGui import QColor, QFont, QFontMetrics, QLinearGradient, QPainter, QRadialGradient
from PySide6.QtWidgets import QFrame, QGraphicsDropShadowEffect, QGraphicsOpacityEffect, QWidget

from taja.ui.colors import BattleColors


class ArenaBackground(QWidget):
    """Dark gradient background with a faint glow behind the boss gauge."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, QColor(BattleColors.BG_TOP))
        gradient.setColorAt(1.0, QColor(BattleColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        radius = max(120, self.width() // 4)
        glow = QRadialGradient(self.width() * 0.5, self.height() * 0.2, radius)
        glow.setColorAt(0, QColor(229, 57, 53, 45))
        glow.setColorAt(1, QColor(229, 57, 53, 0))
        painter.setBrush(glow)
        painter.drawEllipse(QPoint(int(self.width() * 0.5), int(self.height() * 0.2)), radius, radius)


class GlassCard(QFrame):
    """Translucent panel; ``accent`` tints the border of important cards."""

    def __init__(self, parent: Optional[QWidget] = None, *, accent: Optional[str] = None, radius: int = 16) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        border = accent or BattleColors.CARD_BORDER
        self.setStyleSheet(
            f"QFrame#glassCard {{ background: {BattleColors.CARD_BG}; "
            f"border: 1px solid {border}; border-radius: {radius}px; }}"
        )
        glow = QGraphicsDropShadowEffect(self)
        glow.setBlurRadius(24)
        glow.setOffset(0, 6)
        glow.setColor(QColor(0, 0, 0, 90))
        self.setGraphicsEffect(glow)


class FlashOverlay(QWidget):
    """Full-window tint that pulses once per ``flash()`` and then hides itself."""

    PEAK_OPACITY = 0.28

    def __init__(self, parent: QWidget, color: str = BattleColors.FLASH, duration_ms: int = 200) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setStyleSheet(f"background-color: {color};")
        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(0.0)
        self.setGraphicsEffect(self._effect)
        self._pulse = QPropertyAnimation(self._effect, b"opacity", self)
        self._pulse.setDuration(duration_ms)
        self._pulse.setKeyValueAt(0.0, 0.0)
        self._pulse.setKeyValueAt(0.2, self.PEAK_OPACITY)
        self._pulse.setKeyValueAt(1.0, 0.0)
        self._pulse.finished.connect(self.hide)
        self.hide()

    def cover_parent(self) -> None:
        self.setGeometry(self.parentWidget().rect())

    def flash(self) -> None:
        self._pulse.stop()
        self.cover_parent()
        self.show()
        self.raise_()
        self._pulse.start()


class GaugeBar(QWidget):
    """Rounded gradient gauge with a centered label."""

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        color_start: str = BattleColors.PROGRESS_START,
        color_end: str = BattleColors.PROGRESS_END,
        height: int = 26,
    ) -> None:
        super().__init__(parent)
        self._ratio = 0.0
        self._label = ""
        self._color_start = color_start
        self._color_end = color_end
        self.setFixedHeight(height)
        self.setMinimumWidth(100)

    def set_ratio(
        self,
        ratio: float,
        label: str = "",
        color_start: Optional[str] = None,
        color_end: Optional[str] = None,
    ) -> None:
        self._ratio = max(0.0, min(1.0, float(ratio)))
        self._label = label
        if color_start:
            self._color_start = color_start
        if color_end:
            self._color_end = color_end
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.TextAntialiasing, True)

        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(BattleColors.GAUGE_TRACK))
        radius = min(8, self.height() // 2)
        painter.drawRoundedRect(0, 0, self.width(), self.height(), radius, radius)

        fill_width = int(self._ratio * self.width())
        if fill_width > 0:
            gradient = QLinearGradient(0, 0, fill_width, 0)
            gradient.setColorAt(0, QColor(self._color_start))
            gradient.setColorAt(1, QColor(self._color_end))
            painter.setBrush(gradient)
            painter.drawRoundedRect(0, 0, fill_width, self.height(), radius, radius)

        if self._label:
            font = painter.font()
            font.setPointSize(max(9, self.height() // 2))
            font.setWeight(QFont.Weight.DemiBold)
            painter.setFont(font)
            painter.setPen(QColor(BattleColors.TEXT_PRIMARY))
            painter.drawText(self.rect(), Qt.AlignCenter, self._label)


class ScriptLineWidget(QWidget):
    """One line of the script: typed (green), current (yellow or red), upcoming (gray)."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._line = ""
        self._typed_len = 0
        self._wrong = False
        self._point_size = 26
        self.setMinimumHeight(70)
        self.setMinimumWidth(200)

    def set_line(self, line: str, typed_len: int, wrong: bool = False) -> None:
        self._line = line
        self._typed_len = max(0, min(typed_len, len(line)))
        self._wrong = wrong
        self.update()

    def char_color(self, idx: int) -> str:
        """Color of the character at ``idx`` for the current state."""
        if idx < self._typed_len:
            return BattleColors.TYPED
        if idx == self._typed_len:
            return BattleColors.WRONG if self._wrong else BattleColors.CURRENT
        return BattleColors.UPCOMING

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._line:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.TextAntialiasing, True)

        font = painter.font()
        font.setPointSize(self._point_size)
        metrics = QFontMetrics(font)
        total_width = metrics.horizontalAdvance(self._line)
        # Shrink until the whole line fits
        while total_width > self.width() and font.pointSize() > 10:
            font.setPointSize(font.pointSize() - 1)
            metrics = QFontMetrics(font)
            total_width = metrics.horizontalAdvance(self._line)

        x = max(0, (self.width() - total_width) // 2)
        baseline = (self.height() + metrics.ascent() - metrics.descent()) // 2
        for idx, ch in enumerate(self._line):
            is_current = idx == self._typed_len
            font.setBold(is_current)
            painter.setFont(font)
            painter.setPen(QColor(self.char_color(idx)))
            painter.drawText(x, baseline, ch)
            x += QFontMetrics(font).horizontalAdvance(ch)
