"""
Phi-ratio colour generation.
Hue step n rotates the base colour by n / phi turns, so neighbouring
steps never land on similar colours and similar colours only recur
after Fibonacci-sized periods.
"""

from PySide6.QtGui import QColor

from Engine.style_keys import ErrorStyle

PHI = (1 + 5 ** 0.5) / 2
ERROR_ALPHA = 0x88


def generate(base: QColor, hue: int) -> QColor:
    """Rotate the HSL hue of base by hue / phi turns; saturation and lightness are kept."""
    h, s, l, _ = base.getHslF()
    if h < 0:
        # achromatic colours report hue -1
        h = 0.0
    return QColor.fromHslF((h + hue / PHI) % 1.0, s, l)


def background_color(style, error_base: str) -> QColor:
    """The background colour a style key renders with (alpha included)."""
    if isinstance(style, ErrorStyle):
        color = QColor(error_base)
        color.setAlpha(ERROR_ALPHA)
        return color
    color = generate(QColor(style.base), style.hue)
    color.setAlpha(style.alpha)
    return color


def color_for_style_sheet(color: QColor) -> str:
    """#rrggbbaa notation (alpha last), as written in settings and style sheets."""
    return color.name() + f"{color.alpha():02x}"
