"""
array.py — Sortable Array
==========================
Bars for the sorting visualizer.  `value` is what gets sorted; `color`
is presentation only and is re-derived on every step.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

from structures.errors import InvalidInput


SIZE_MIN:     int = 5
SIZE_MAX:     int = 30
SIZE_DEFAULT: int = 15
VALUE_MIN:    int = 10
VALUE_MAX:    int = 109


class BarColor(Enum):
    NEUTRAL   = "neutral"
    COMPARING = "comparing"
    SWAPPING  = "swapping"
    SORTED    = "sorted"
    PIVOT     = "pivot"


@dataclass(frozen=True)
class Bar:
    value: int
    color: BarColor = BarColor.NEUTRAL

    def to_dict(self) -> dict:
        return {"value": self.value, "color": self.color.value}


def as_int(value: Any) -> int:
    """`value` as an int.  Bools and fractional floats are rejected, numeric strings accepted."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidInput(f"Value must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"Value must be an integer, got {value!r}") from None


def check_values(values: Any) -> List[int]:
    """A fresh list of ints from a list / tuple, or InvalidInput."""
    if not isinstance(values, (list, tuple)):
        raise InvalidInput(f"Values must be a list of integers, got {type(values).__name__}")
    return [as_int(v) for v in values]


def bars_from(values: Sequence[int]) -> List[Bar]:
    return [Bar(v) for v in values]


def random_values(size: int = SIZE_DEFAULT, rng: Optional[random.Random] = None) -> List[int]:
    if not SIZE_MIN <= size <= SIZE_MAX:
        raise InvalidInput(f"Array size must be between {SIZE_MIN} and {SIZE_MAX}, got {size}")
    rng = rng or random.Random()
    return [rng.randint(VALUE_MIN, VALUE_MAX) for _ in range(size)]
