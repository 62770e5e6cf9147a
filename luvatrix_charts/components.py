from __future__ import annotations

from dataclasses import dataclass, replace
from html import escape
from typing import Sequence, TypeAlias

from luvatrix_charts.color import Color
from luvatrix_charts.common import Point, format_float
from luvatrix_charts.path import close_to_baseline, smooth_path, straight_path


SVG_XMLNS = "http://www.w3.org/2000/svg"

Attrs: TypeAlias = list[tuple[str, str]]


def _format_optional(value: float | None) -> str:
    return "" if value is None else format_float(value)


def _opacity(color: Color) -> str:
    if color.is_nontransparent():
        return ""
    return format_float(color.opacity())


def _stroke_attrs(color: Color | None) -> Attrs:
    if color is None:
        return []
    return [("stroke", color.hex()), ("stroke-opacity", _opacity(color))]


def _fill_attrs(color: Color | None) -> Attrs:
    if color is None:
        return []
    return [("fill", color.hex()), ("fill-opacity", _opacity(color))]


def _format_points(points: Sequence[Point]) -> str:
    return " ".join(f"{format_float(p.x)},{format_float(p.y)}" for p in points)


def _shift_points(points: Sequence[Point], dx: float, dy: float) -> tuple[Point, ...]:
    return tuple(Point(p.x + dx, p.y + dy) for p in points)


def svg_tag(tag: str, attrs: Attrs, data: str | None = None) -> str:
    """Encode one element; attributes with an empty value are left out."""
    parts = [f"<{tag}"]
    for key, value in attrs:
        if not key or value == "":
            continue
        parts.append(f' {key}="{escape(value, quote=True)}"')
    if data is None:
        parts.append("/>")
        return "".join(parts)
    parts.append(f">\n{data}\n</{tag}>")
    return "".join(parts)


def generate_svg(width: float, height: float, data: str) -> str:
    w = format_float(width)
    h = format_float(height)
    return svg_tag(
        "svg",
        [
            ("width", w),
            ("height", h),
            ("viewBox", f"0 0 {w} {h}"),
            ("xmlns", SVG_XMLNS),
        ],
        data,
    )


@dataclass(frozen=True)
class Line:
    left: float
    top: float
    right: float
    bottom: float
    color: Color | None = None
    stroke_width: float = 1.0

    def translate(self, dx: float, dy: float) -> "Line":
        return replace(self, left=self.left + dx, top=self.top + dy, right=self.right + dx, bottom=self.bottom + dy)

    def render(self) -> str:
        if self.stroke_width <= 0:
            return ""
        attrs: Attrs = [
            ("stroke-width", format_float(self.stroke_width)),
            ("x1", format_float(self.left)),
            ("y1", format_float(self.top)),
            ("x2", format_float(self.right)),
            ("y2", format_float(self.bottom)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        return svg_tag("line", attrs)


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float
    color: Color | None = None
    fill: Color | None = None
    rx: float | None = None
    ry: float | None = None

    def translate(self, dx: float, dy: float) -> "Rect":
        return replace(self, left=self.left + dx, top=self.top + dy)

    def render(self) -> str:
        attrs: Attrs = [
            ("x", format_float(self.left)),
            ("y", format_float(self.top)),
            ("width", format_float(self.width)),
            ("height", format_float(self.height)),
            ("rx", _format_optional(self.rx)),
            ("ry", _format_optional(self.ry)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        attrs.extend(_fill_attrs(self.fill))
        return svg_tag("rect", attrs)


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    color: Color | None = None
    stroke_width: float = 1.0

    def translate(self, dx: float, dy: float) -> "Polyline":
        return replace(self, points=_shift_points(self.points, dx, dy))

    def render(self) -> str:
        if self.stroke_width <= 0:
            return ""
        attrs: Attrs = [
            ("fill", "none"),
            ("stroke-width", format_float(self.stroke_width)),
            ("points", _format_points(self.points)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        return svg_tag("polyline", attrs)


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    color: Color | None = None
    fill: Color | None = None
    stroke_width: float = 1.0

    def translate(self, dx: float, dy: float) -> "Circle":
        return replace(self, cx=self.cx + dx, cy=self.cy + dy)

    def render(self) -> str:
        attrs: Attrs = [
            ("cx", format_float(self.cx)),
            ("cy", format_float(self.cy)),
            ("r", format_float(self.r)),
            ("stroke-width", format_float(self.stroke_width)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        if self.fill is None:
            attrs.append(("fill", "none"))
        else:
            attrs.extend(_fill_attrs(self.fill))
        return svg_tag("circle", attrs)


@dataclass(frozen=True)
class Polygon:
    points: tuple[Point, ...]
    color: Color | None = None
    fill: Color | None = None

    def translate(self, dx: float, dy: float) -> "Polygon":
        return replace(self, points=_shift_points(self.points, dx, dy))

    def render(self) -> str:
        if not self.points:
            return ""
        attrs: Attrs = [("points", _format_points(self.points))]
        attrs.extend(_stroke_attrs(self.color))
        attrs.extend(_fill_attrs(self.fill))
        return svg_tag("polygon", attrs)


@dataclass(frozen=True)
class Text:
    text: str
    font_family: str = ""
    font_size: float = 14.0
    fill: Color | None = None
    x: float | None = None
    y: float | None = None
    dx: float | None = None
    dy: float | None = None
    font_weight: str | None = None
    transform: str | None = None
    anchor: str | None = None
    rotate: float | None = None

    def translate(self, dx: float, dy: float) -> "Text":
        return replace(self, x=(self.x or 0.0) + dx, y=(self.y or 0.0) + dy)

    def render(self) -> str:
        if not self.text:
            return ""
        attrs: Attrs = [
            ("font-family", self.font_family),
            ("font-size", format_float(self.font_size)),
            ("x", _format_optional(self.x)),
            ("y", _format_optional(self.y)),
            ("dx", _format_optional(self.dx)),
            ("dy", _format_optional(self.dy)),
            ("font-weight", self.font_weight or ""),
            ("transform", self._transform()),
            ("text-anchor", self.anchor or ""),
        ]
        if self.fill is not None:
            attrs.append(("fill", self.fill.hex()))
            attrs.append(("opacity", _opacity(self.fill)))
        return svg_tag("text", attrs, escape(self.text, quote=False))

    def _transform(self) -> str:
        if self.transform:
            return self.transform
        if not self.rotate:
            return ""
        # pivot on the anchor point
        x = format_float(self.x or 0.0)
        y = format_float(self.y or 0.0)
        return f"rotate({format_float(self.rotate)},{x},{y})"


@dataclass(frozen=True)
class SmoothLine:
    points: tuple[Point, ...]
    color: Color | None = None
    stroke_width: float = 1.0

    def translate(self, dx: float, dy: float) -> "SmoothLine":
        return replace(self, points=_shift_points(self.points, dx, dy))

    def render(self) -> str:
        if not self.points or self.stroke_width <= 0:
            return ""
        attrs: Attrs = [
            ("fill", "none"),
            ("stroke-width", format_float(self.stroke_width)),
            ("d", smooth_path(self.points)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        return svg_tag("path", attrs)


@dataclass(frozen=True)
class StraightLine:
    points: tuple[Point, ...]
    color: Color | None = None
    stroke_width: float = 1.0

    def translate(self, dx: float, dy: float) -> "StraightLine":
        return replace(self, points=_shift_points(self.points, dx, dy))

    def render(self) -> str:
        if not self.points or self.stroke_width <= 0:
            return ""
        attrs: Attrs = [
            ("fill", "none"),
            ("stroke-width", format_float(self.stroke_width)),
            ("d", straight_path(self.points)),
        ]
        attrs.extend(_stroke_attrs(self.color))
        return svg_tag("path", attrs)


@dataclass(frozen=True)
class SmoothLineFill:
    points: tuple[Point, ...]
    fill: Color
    bottom: float

    def translate(self, dx: float, dy: float) -> "SmoothLineFill":
        return replace(self, points=_shift_points(self.points, dx, dy), bottom=self.bottom + dy)

    def render(self) -> str:
        if not self.points or self.fill.is_transparent():
            return ""
        path = close_to_baseline(smooth_path(self.points), self.points, self.bottom)
        return svg_tag("path", [("d", path), *_fill_attrs(self.fill)])


@dataclass(frozen=True)
class StraightLineFill:
    points: tuple[Point, ...]
    fill: Color
    bottom: float

    def translate(self, dx: float, dy: float) -> "StraightLineFill":
        return replace(self, points=_shift_points(self.points, dx, dy), bottom=self.bottom + dy)

    def render(self) -> str:
        if not self.points or self.fill.is_transparent():
            return ""
        path = close_to_baseline(straight_path(self.points), self.points, self.bottom)
        return svg_tag("path", [("d", path), *_fill_attrs(self.fill)])


@dataclass(frozen=True)
class Grid:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    color: Color | None = None
    stroke_width: float = 1.0
    verticals: int = 0
    hidden_verticals: tuple[int, ...] = ()
    horizontals: int = 0
    hidden_horizontals: tuple[int, ...] = ()

    def translate(self, dx: float, dy: float) -> "Grid":
        return replace(self, left=self.left + dx, top=self.top + dy, right=self.right + dx, bottom=self.bottom + dy)

    def render(self) -> str:
        if (self.verticals <= 0 and self.horizontals <= 0) or self.stroke_width <= 0:
            return ""
        lines: list[Line] = []
        if self.verticals > 0:
            unit = (self.right - self.left) / self.verticals
            for i in range(self.verticals + 1):
                if i in self.hidden_verticals:
                    continue
                x = self.left + unit * i
                lines.append(Line(left=x, top=self.top, right=x, bottom=self.bottom, stroke_width=self.stroke_width))
        if self.horizontals > 0:
            unit = (self.bottom - self.top) / self.horizontals
            for i in range(self.horizontals + 1):
                if i in self.hidden_horizontals:
                    continue
                y = self.top + unit * i
                lines.append(Line(left=self.left, top=y, right=self.right, bottom=y, stroke_width=self.stroke_width))
        return svg_tag("g", _stroke_attrs(self.color), "\n".join(line.render() for line in lines))


Component: TypeAlias = (
    Line
    | Rect
    | Polyline
    | Circle
    | Polygon
    | Text
    | SmoothLine
    | StraightLine
    | SmoothLineFill
    | StraightLineFill
    | Grid
)

_COMPONENT_TYPES = (
    Line,
    Rect,
    Polyline,
    Circle,
    Polygon,
    Text,
    SmoothLine,
    StraightLine,
    SmoothLineFill,
    StraightLineFill,
    Grid,
)


def render_component(component: Component) -> str:
    if not isinstance(component, _COMPONENT_TYPES):
        raise TypeError(f"Unsupported component: {type(component)!r}")
    return component.render()
