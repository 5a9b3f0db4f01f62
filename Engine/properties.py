"""
Named, bounded configuration values.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Property:
    """A tunable value with optional bounds and default; value holds the last resolution."""
    name: str
    default_value: Any = None
    min_value: Optional[Any] = None
    max_value: Optional[Any] = None
    value: Any = None

    def resolve(self, raw=None):
        """
        Resolve a raw setting: absent means the default, present values are
        clamped into [min_value, max_value]. The default itself is never clamped.
        """
        if raw is None:
            result = self.default_value
        elif self.min_value is not None and raw < self.min_value:
            result = self.min_value
        elif self.max_value is not None and self.max_value < raw:
            result = self.max_value
        else:
            result = raw
        self.value = result
        return result


def int_or_none(value):
    """Integer form of a JSON number setting, or None when it is not a usable number."""
    # bool is an int subclass; JSON true/false is not a number setting.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.load accepts NaN and Infinity
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def alpha_property(name: str, default_value: int) -> Property:
    return Property(name, default_value, 0, 255)
