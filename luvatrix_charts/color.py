from __future__ import annotations

from dataclasses import dataclass, replace
import string


_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0 or value > 255:
                raise ValueError(f"color component `{name}` must be an int in [0, 255], got {value!r}")

    @classmethod
    def parse(cls, text: str) -> "Color":
        """Parse `#RRGGBB` or `#RGB`.

        The short form takes one hex digit per channel as the channel value (`#123` is
        (1, 2, 3)), it is not doubled. Malformed digits read as 0 and text without a
        leading `#` is transparent black.
        """
        if not text.startswith("#"):
            return cls(0, 0, 0, 0)
        digits = text[1:]
        if len(digits) == 3:
            groups = (digits[0:1], digits[1:2], digits[2:3])
        else:
            groups = (digits[0:2], digits[2:4], digits[4:6])
        r, g, b = (_parse_hex(group) for group in groups)
        return cls(r, g, b, 255)

    @classmethod
    def from_tuple(cls, values: tuple[int, int, int] | tuple[int, int, int, int]) -> "Color":
        if len(values) == 3:
            r, g, b = values
            return cls(int(r), int(g), int(b))
        r, g, b, a = values
        return cls(int(r), int(g), int(b), int(a))

    @classmethod
    def white(cls) -> "Color":
        return cls(255, 255, 255)

    @classmethod
    def black(cls) -> "Color":
        return cls(0, 0, 0)

    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def rgba(self) -> str:
        return f"rgba({self.r},{self.g},{self.b},{self.opacity():.1f})"

    def opacity(self) -> float:
        return self.a / 255.0

    def is_zero(self) -> bool:
        return self.r == 0 and self.g == 0 and self.b == 0 and self.a == 0

    def is_transparent(self) -> bool:
        return self.a == 0

    def is_nontransparent(self) -> bool:
        return self.a == 255

    def with_alpha(self, a: int) -> "Color":
        return replace(self, a=a)


def coerce_color(value: Color | str | tuple[int, ...]) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.parse(value)
    return Color.from_tuple(value)  # type: ignore[arg-type]


def _parse_hex(group: str) -> int:
    if not group or any(ch not in _HEX_DIGITS for ch in group):
        return 0
    return int(group, 16)
