"""Theme colors and color utilities for the UI."""

from __future__ import annotations


class BattleColors:
    """Dark arena palette used by the battle screen."""

    BG_TOP = "#1b1f2a"
    BG_BOTTOM = "#0f1218"

    CARD_BG = "rgba(255, 255, 255, 0.06)"
    CARD_BORDER = "rgba(255, 255, 255, 0.18)"

    TEXT_PRIMARY = "#f5f7fa"
    TEXT_SECONDARY = "#b0bec5"
    TEXT_MUTED = "#5f6b7a"

    # Characters of the current line
    TYPED = "#66bb6a"
    CURRENT = "#ffd54f"
    WRONG = "#ef5350"
    UPCOMING = "#5f6b7a"

    # Boss health fades from full to critical as it drains
    HEALTH_FULL = "#43A047"
    HEALTH_CRITICAL = "#E53935"
    PROGRESS_START = "#4DD0E1"
    PROGRESS_END = "#0097A7"
    GAUGE_TRACK = "#2a3140"

    FLASH = "#EF6060"


def _rgb(color: str) -> tuple[int, int, int]:
    digits = color.strip().lstrip("#")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def blend_hex(a: str, b: str, t: float) -> str:
    """Mix two palette colors channel by channel. t=0 -> a, t=1 -> b."""
    t = max(0.0, min(1.0, t))
    mixed = (int(x + (y - x) * t) for x, y in zip(_rgb(a), _rgb(b)))
    return "#" + "".join(f"{c:02X}" for c in mixed)


def health_color(ratio: float) -> str:
    """Gauge color for a health ratio in [0, 1]: green when full, red when empty."""
    return blend_hex(BattleColors.HEALTH_CRITICAL, BattleColors.HEALTH_FULL, ratio)
