"""
Spans and the style keys they are grouped by.
"""

from dataclasses import dataclass
from typing import Union

DEFAULT_BASE_COLOR = "#cc6666"


@dataclass(frozen=True)
class HueStyle:
    """Background tinted from the base colour, rotated by hue steps."""
    base: str
    hue: int
    alpha: int


@dataclass(frozen=True)
class ErrorStyle:
    """Malformed indentation and trailing whitespace."""


StyleKey = Union[HueStyle, ErrorStyle]

ERROR_STYLE = ErrorStyle()


@dataclass(frozen=True)
class Span:
    start: int
    length: int
    style: StyleKey

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class DecorationSettings:
    """Resolved configuration values the annotators need for one pass."""
    base_color: str = DEFAULT_BASE_COLOR
    indent_alpha: int = 0x11
    indent_active_alpha: int = 0x33
    symbol_alpha: int = 0x44
    token_alpha: int = 0x33
    token_active_alpha: int = 0x66

    def hue_style(self, hue: int, alpha: int) -> HueStyle:
        # Hue 0 is the bare base colour; every classifier starts one step above it.
        return HueStyle(self.base_color, hue + 1, alpha)
