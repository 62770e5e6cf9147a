from __future__ import annotations

from dataclasses import dataclass, field, replace

from luvatrix_charts.color import Color
from luvatrix_charts.common import Box, LegendCategory, Position
from luvatrix_charts.components import (
    Circle,
    Component,
    Grid,
    Line,
    Polygon,
    Polyline,
    Rect,
    SmoothLine,
    SmoothLineFill,
    StraightLine,
    StraightLineFill,
    Text,
    generate_svg,
    render_component,
    svg_tag,
)
from luvatrix_charts.errors import ChartRenderError
from luvatrix_charts.text import PillowTextMeasurer, TextMeasurer, TextMetrics


LEGEND_WIDTH = 25.0
LEGEND_HEIGHT = 20.0
LEGEND_TEXT_MARGIN = 3.0
LEGEND_MARGIN = 8.0


@dataclass
class FragmentBuilder:
    """Insertion-ordered markup shared by a canvas and every view derived from it."""

    fragments: list[str] = field(default_factory=list)
    finalized: bool = False

    def push(self, fragment: str) -> None:
        if self.finalized:
            raise ChartRenderError("canvas already finalized")
        if fragment:
            self.fragments.append(fragment)


@dataclass(frozen=True)
class Axis:
    position: Position = "bottom"
    width: float = 0.0
    height: float = 0.0
    split_number: int = 0
    data: tuple[str, ...] = ()
    font_family: str = ""
    font_size: float = 14.0
    font_color: Color | None = None
    stroke_color: Color | None = None
    stroke_width: float = 1.0
    tick_length: float = 5.0
    name_gap: float = 5.0
    name_rotate: float = 0.0
    # True: one label per slot, centred between ticks. False: one label per tick.
    boundary_gap: bool = True


@dataclass(frozen=True)
class Legend:
    text: str
    color: Color
    left: float = 0.0
    top: float = 0.0
    font_family: str = ""
    font_size: float = 14.0
    font_color: Color | None = None
    category: LegendCategory = "normal"


@dataclass
class Canvas:
    """Offset view onto one shared fragment list.

    `width`/`height` are the document size; drawing goes through `margin`, the sum of
    every box passed to `child()` on the way down, so callers use local coordinates.
    """

    width: float
    height: float
    margin: Box = field(default_factory=Box)
    measurer: TextMeasurer | None = None
    builder: FragmentBuilder = field(default_factory=FragmentBuilder)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width and height must be > 0")
        if self.measurer is None:
            self.measurer = PillowTextMeasurer()

    @property
    def inner_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    def child(self, box: Box) -> "Canvas":
        return replace(self, margin=self.margin + box)

    def measure(self, text: str, font_family: str, font_size: float) -> TextMetrics:
        return self.measurer.measure(text, font_family, font_size)

    def draw(self, component: Component) -> Box:
        """Append `component` shifted into this view; returns its bounds in document space."""
        moved = component.translate(self.margin.left, self.margin.top)
        self.builder.push(render_component(moved))
        return _bounds(moved)

    def line(self, line: Line) -> Box:
        return self.draw(line)

    def rect(self, rect: Rect) -> Box:
        return self.draw(rect)

    def polyline(self, polyline: Polyline) -> Box:
        return self.draw(polyline)

    def circle(self, circle: Circle) -> Box:
        return self.draw(circle)

    def polygon(self, polygon: Polygon) -> Box:
        return self.draw(polygon)

    def smooth_line(self, line: SmoothLine) -> Box:
        return self.draw(line)

    def straight_line(self, line: StraightLine) -> Box:
        return self.draw(line)

    def smooth_line_fill(self, fill: SmoothLineFill) -> Box:
        return self.draw(fill)

    def straight_line_fill(self, fill: StraightLineFill) -> Box:
        return self.draw(fill)

    def grid(self, grid: Grid) -> Box:
        return self.draw(grid)

    def text(self, text: Text) -> Box:
        """Draw `text` and return its measured box in document space (bottom is the baseline)."""
        moved = text.translate(self.margin.left, self.margin.top)
        self.builder.push(render_component(moved))
        metrics = self.measure(text.text, text.font_family, text.font_size)
        x = (moved.x or 0.0) + (moved.dx or 0.0)
        y = (moved.y or 0.0) + (moved.dy or 0.0)
        return Box(left=x, top=y - metrics.height, right=x + metrics.width, bottom=y)

    def legend(self, legend: Legend) -> Box:
        metrics = self.measure(legend.text, legend.font_family, legend.font_size)
        left = legend.left
        top = legend.top
        middle = top + LEGEND_HEIGHT / 2.0
        parts: list[Component] = []
        if legend.category == "rect":
            parts.append(
                Rect(left=left, top=middle - 5.0, width=LEGEND_WIDTH, height=10.0, fill=legend.color, rx=2.0, ry=2.0)
            )
        else:
            parts.append(Line(left=left, top=middle, right=left + LEGEND_WIDTH, bottom=middle, color=legend.color, stroke_width=3.0))
            parts.append(
                Circle(cx=left + LEGEND_WIDTH / 2.0, cy=middle, r=5.5, color=legend.color, fill=Color.white(), stroke_width=3.0)
            )
        parts.append(
            Text(
                text=legend.text,
                font_family=legend.font_family,
                font_size=legend.font_size,
                fill=legend.font_color,
                x=left + LEGEND_WIDTH + LEGEND_TEXT_MARGIN,
                y=middle + metrics.height / 2.0 - 2.0,
            )
        )
        self._push_group(parts)
        box = Box(left=left, top=top, right=left + LEGEND_WIDTH + LEGEND_TEXT_MARGIN + metrics.width, bottom=top + LEGEND_HEIGHT)
        return _shift_box(box, self.margin)

    def axis(self, axis: Axis) -> None:
        parts: list[Component] = []
        count = max(1, axis.split_number)
        horizontal = axis.position in ("top", "bottom")
        extent = axis.width if horizontal else axis.height
        unit = extent / count

        # axis rule along the edge facing the plot
        if axis.position == "bottom":
            rule = Line(left=0.0, top=0.0, right=axis.width, bottom=0.0)
        elif axis.position == "top":
            rule = Line(left=0.0, top=axis.height, right=axis.width, bottom=axis.height)
        elif axis.position == "left":
            rule = Line(left=axis.width, top=0.0, right=axis.width, bottom=axis.height)
        else:
            rule = Line(left=0.0, top=0.0, right=0.0, bottom=axis.height)
        parts.append(replace(rule, color=axis.stroke_color, stroke_width=axis.stroke_width))

        for i in range(count + 1):
            pos = unit * i
            if axis.position == "bottom":
                tick = Line(left=pos, top=0.0, right=pos, bottom=axis.tick_length)
            elif axis.position == "top":
                tick = Line(left=pos, top=axis.height - axis.tick_length, right=pos, bottom=axis.height)
            elif axis.position == "left":
                tick = Line(left=axis.width - axis.tick_length, top=pos, right=axis.width, bottom=pos)
            else:
                tick = Line(left=0.0, top=pos, right=axis.tick_length, bottom=pos)
            parts.append(replace(tick, color=axis.stroke_color, stroke_width=axis.stroke_width))

        for i, label in enumerate(axis.data):
            pos = unit * i + unit / 2.0 if axis.boundary_gap else unit * i
            metrics = self.measure(label, axis.font_family, axis.font_size)
            if axis.position == "bottom":
                x = pos - metrics.width / 2.0
                y = axis.tick_length + axis.name_gap + metrics.height
            elif axis.position == "top":
                x = pos - metrics.width / 2.0
                y = axis.height - axis.tick_length - axis.name_gap
            elif axis.position == "left":
                x = axis.width - axis.tick_length - axis.name_gap - metrics.width
                y = pos + metrics.height / 2.0
            else:
                x = axis.tick_length + axis.name_gap
                y = pos + metrics.height / 2.0
            parts.append(
                Text(
                    text=label,
                    font_family=axis.font_family,
                    font_size=axis.font_size,
                    fill=axis.font_color,
                    x=x,
                    y=y,
                    rotate=axis.name_rotate or None,
                )
            )
        self._push_group(parts)

    def finalize(self) -> str:
        if self.builder.finalized:
            raise ChartRenderError("canvas already finalized")
        self.builder.finalized = True
        return generate_svg(self.width, self.height, "\n".join(self.builder.fragments))

    def _push_group(self, parts: list[Component]) -> None:
        rendered = [render_component(part.translate(self.margin.left, self.margin.top)) for part in parts]
        self.builder.push(svg_tag("g", [], "\n".join(r for r in rendered if r)))



def _shift_box(box: Box, margin: Box) -> Box:
    return Box(
        left=box.left + margin.left,
        top=box.top + margin.top,
        right=box.right + margin.left,
        bottom=box.bottom + margin.top,
    )


def _points_box(xs: list[float], ys: list[float]) -> Box:
    if not xs:
        return Box()
    return Box(left=min(xs), top=min(ys), right=max(xs), bottom=max(ys))


def _bounds(component: Component) -> Box:
    if isinstance(component, Line):
        return _points_box([component.left, component.right], [component.top, component.bottom])
    if isinstance(component, Rect):
        return Box(
            left=component.left,
            top=component.top,
            right=component.left + component.width,
            bottom=component.top + component.height,
        )
    if isinstance(component, Circle):
        r = component.r
        return Box(left=component.cx - r, top=component.cy - r, right=component.cx + r, bottom=component.cy + r)
    if isinstance(component, (SmoothLineFill, StraightLineFill)):
        if not component.points:
            return Box()
        xs = [p.x for p in component.points]
        ys = [p.y for p in component.points] + [component.bottom]
        return _points_box(xs, ys)
    if isinstance(component, (Polyline, Polygon, SmoothLine, StraightLine)):
        return _points_box([p.x for p in component.points], [p.y for p in component.points])
    if isinstance(component, Grid):
        return Box(left=component.left, top=component.top, right=component.right, bottom=component.bottom)
    if isinstance(component, Text):
        x = (component.x or 0.0) + (component.dx or 0.0)
        y = (component.y or 0.0) + (component.dy or 0.0)
        return Box(left=x, top=y - component.font_size, right=x, bottom=y)
    raise TypeError(f"Unsupported component: {type(component)!r}")
