from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Any, Literal, Sequence

from luvatrix_charts.adapters import normalize_values


Align = Literal["left", "center", "right"]
Position = Literal["left", "top", "right", "bottom"]
SeriesCategory = Literal["bar", "line"]
LegendCategory = Literal["normal", "rect"]
Symbol = Literal["circle"]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Box:
    """Margin box; nested boxes compose by component-wise sum."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def __add__(self, other: "Box") -> "Box":
        return Box(
            left=self.left + other.left,
            top=self.top + other.top,
            right=self.right + other.right,
            bottom=self.bottom + other.bottom,
        )


@dataclass(frozen=True)
class Series:
    name: str
    data: tuple[float, ...] = ()
    category: SeriesCategory | None = None
    index: int | None = None
    label_show: bool = False

    @classmethod
    def new(
        cls,
        name: str,
        data: Any,
        *,
        category: SeriesCategory | None = None,
        label_show: bool = False,
    ) -> "Series":
        values = normalize_values(data, label=name)
        return cls(name=name, data=tuple(float(v) for v in values.tolist()), category=category, label_show=label_show)

    @property
    def is_line(self) -> bool:
        return self.category == "line"

    def value_at(self, i: int) -> float | None:
        if i < 0 or i >= len(self.data):
            return None
        value = self.data[i]
        if not math.isfinite(value):
            return None
        return value


def assign_series_indices(series_list: Sequence[Series]) -> list[Series]:
    """Give every series without an index its position in the list."""
    return [s if s.index is not None else replace(s, index=i) for i, s in enumerate(series_list)]


def format_float(value: float) -> str:
    """Shared fixed-precision number formatter: one decimal, `.0` dropped."""
    out = f"{float(value):.1f}"
    if out.endswith(".0"):
        out = out[:-2]
    if out == "-0":
        out = "0"
    return out
