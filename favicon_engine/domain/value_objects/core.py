"""Domain value objects for the favicon engine.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class HexColor:
    """Value object for a ``#RRGGBB`` color.

    Only the six-digit form is accepted; shorthand (``#FFF``) and named
    colors are rejected so colors can be interpolated into SVG verbatim.
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = _HEX_COLOR_RE

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise ValueError(
                f"Color must be a #RRGGBB hex string, got {self.value!r}"
            )

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Return True if value is a #RRGGBB hex string."""
        return isinstance(value, str) and bool(cls.PATTERN.match(value))

    def rgb(self) -> tuple[int, int, int]:
        """Return the (red, green, blue) components as ints 0-255."""
        digits = self.value[1:]
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

    def __str__(self) -> str:
        return self.value
