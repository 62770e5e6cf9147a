from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
import math
from typing import Sequence

from luvatrix_charts.canvas import LEGEND_HEIGHT, LEGEND_MARGIN, LEGEND_TEXT_MARGIN, LEGEND_WIDTH, Axis, Canvas, Legend
from luvatrix_charts.color import Color, coerce_color
from luvatrix_charts.common import Align, Box, LegendCategory, Point, Series, Symbol, assign_series_indices, format_float
from luvatrix_charts.components import Circle, Grid, Rect, SmoothLine, SmoothLineFill, StraightLine, StraightLineFill, Text
from luvatrix_charts.errors import ChartRenderError
from luvatrix_charts.scales import AxisValues, compute_axis_values
from luvatrix_charts.text import PillowTextMeasurer, TextMeasurer
from luvatrix_charts.theme import DEFAULT_THEME, fill_unset, theme_defaults


LOGGER = logging.getLogger(__name__)

AXIS_TICK_LENGTH = 5.0
LINE_FILL_ALPHA = 100
SYMBOL_RADIUS = 3.0

_RENDER_FAILURES = (ArithmeticError, IndexError, KeyError, TypeError, ValueError)


@dataclass
class BaseChart:
    """Configuration shared by every chart family.

    Style fields left as `None` are unset and get filled from `theme` when rendering.
    """

    series_list: list[Series] = field(default_factory=list)
    x_axis_data: list[str] = field(default_factory=list)
    theme: str = DEFAULT_THEME

    width: float | None = None
    height: float | None = None
    margin: Box | None = None
    font_family: str | None = None
    background_color: Color | None = None

    title_text: str = ""
    title_font_size: float | None = None
    title_font_color: Color | None = None
    title_font_weight: str | None = None
    title_margin: Box | None = None
    title_align: Align | None = None

    sub_title_text: str = ""
    sub_title_font_size: float | None = None
    sub_title_font_color: Color | None = None
    sub_title_margin: Box | None = None
    sub_title_align: Align | None = None

    legend_font_size: float | None = None
    legend_font_color: Color | None = None
    legend_align: Align | None = None
    legend_margin: Box | None = None
    legend_category: LegendCategory | None = None
    legend_show: bool | None = None

    x_axis_height: float | None = None
    x_axis_stroke_color: Color | None = None
    x_axis_font_size: float | None = None
    x_axis_font_color: Color | None = None
    x_axis_name_gap: float | None = None
    x_axis_name_rotate: float | None = None
    x_boundary_gap: bool | None = None

    y_axis_font_size: float | None = None
    y_axis_font_color: Color | None = None
    y_axis_stroke_color: Color | None = None
    y_axis_width: float | None = None
    y_axis_split_number: int | None = None
    y_axis_name_gap: float | None = None
    y_axis_formatter: str | None = None

    grid_stroke_color: Color | None = None
    grid_stroke_width: float | None = None

    series_stroke_width: float | None = None
    series_colors: tuple[Color, ...] | None = None
    series_label_font_color: Color | None = None
    series_label_font_size: float | None = None
    series_symbol: Symbol | None = None
    series_smooth: bool = False
    series_fill: bool = False

    chart_name = "chart"

    def __post_init__(self) -> None:
        self.series_list = assign_series_indices(self.series_list)
        self.x_axis_data = [str(label) for label in self.x_axis_data]
        # colors may be given as hex strings or rgb(a) tuples
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name.endswith("_color"):
                setattr(self, f.name, coerce_color(value))
            elif f.name == "series_colors":
                self.series_colors = tuple(coerce_color(v) for v in value)

    def resolved(self):
        """Copy with every unset style field taken from the theme."""
        return fill_unset(self, theme_defaults(self.theme))

    def svg(self, measurer: TextMeasurer | None = None) -> str:
        try:
            chart = self.resolved()
            canvas = Canvas(chart.width, chart.height, measurer=measurer or PillowTextMeasurer())
            return chart._render(canvas)
        except ChartRenderError as exc:
            if exc.chart:
                raise
            raise ChartRenderError(str(exc), chart=self.chart_name) from exc
        except _RENDER_FAILURES as exc:
            raise ChartRenderError(f"{type(exc).__name__}: {exc}", chart=self.chart_name) from exc

    def _render(self, c: Canvas) -> str:
        raise NotImplementedError

    def category_count(self) -> int:
        if self.x_axis_data:
            return len(self.x_axis_data)
        return max((len(s.data) for s in self.series_list), default=0)

    def series_color(self, series: Series, position: int) -> Color:
        palette = self.series_colors or ()
        index = series.index if series.index is not None else position
        if 0 <= index < len(palette):
            return palette[index]
        LOGGER.debug("series %r color index %s outside palette, using first color", series.name, index)
        return palette[0]

    def _render_background(self, c: Canvas) -> None:
        if self.background_color is None or self.background_color.is_transparent():
            return
        c.rect(Rect(left=0.0, top=0.0, width=c.width, height=c.height, fill=self.background_color))

    def _render_title(self, c: Canvas) -> float:
        if not self.title_text and not self.sub_title_text:
            return 0.0
        height = 0.0
        if self.title_text:
            height = self._render_heading(
                c,
                self.title_text,
                font_size=self.title_font_size,
                font_color=self.title_font_color,
                font_weight=self.title_font_weight,
                margin=self.title_margin,
                align=self.title_align,
                top=0.0,
            )
        if self.sub_title_text:
            height = self._render_heading(
                c,
                self.sub_title_text,
                font_size=self.sub_title_font_size,
                font_color=self.sub_title_font_color,
                font_weight=None,
                margin=self.sub_title_margin,
                align=self.sub_title_align,
                top=height,
            )
        return height

    def _render_heading(
        self,
        c: Canvas,
        text: str,
        *,
        font_size: float | None,
        font_color: Color | None,
        font_weight: str | None,
        margin: Box | None,
        align: Align | None,
        top: float,
    ) -> float:
        margin = margin or Box()
        size = font_size or 14.0
        metrics = c.measure(text, self.font_family or "", size)
        x = _align_offset(align, c.inner_width, metrics.width, margin)
        y = top + margin.top + metrics.height
        c.text(
            Text(
                text=text,
                font_family=self.font_family or "",
                font_size=size,
                fill=font_color,
                font_weight=font_weight,
                x=x,
                y=y,
            )
        )
        return y + margin.bottom

    def _render_legend(self, c: Canvas) -> float:
        if not self.legend_show or not self.series_list:
            return 0.0
        margin = self.legend_margin or Box()
        font_size = self.legend_font_size or 14.0
        available = c.inner_width - margin.left - margin.right
        widths = [
            LEGEND_WIDTH + LEGEND_TEXT_MARGIN + c.measure(s.name, self.font_family or "", font_size).width
            for s in self.series_list
        ]
        rows: list[list[int]] = [[]]
        row_width = 0.0
        for i, w in enumerate(widths):
            needed = w if not rows[-1] else row_width + LEGEND_MARGIN + w
            if rows[-1] and needed > available:
                rows.append([i])
                row_width = w
            else:
                rows[-1].append(i)
                row_width = needed

        top = margin.top
        for row in rows:
            row_total = sum(widths[i] for i in row) + LEGEND_MARGIN * (len(row) - 1)
            left = _align_offset(self.legend_align, c.inner_width, row_total, margin)
            for i in row:
                series = self.series_list[i]
                c.legend(
                    Legend(
                        text=series.name,
                        color=self.series_color(series, i),
                        left=left,
                        top=top,
                        font_family=self.font_family or "",
                        font_size=font_size,
                        font_color=self.legend_font_color,
                        category=self.legend_category or "normal",
                    )
                )
                left += widths[i] + LEGEND_MARGIN
            top += LEGEND_HEIGHT + LEGEND_MARGIN
        return top - LEGEND_MARGIN + margin.bottom

    def _value_axis(self, data_list: Sequence[float]) -> AxisValues:
        return compute_axis_values(
            data_list,
            self.y_axis_split_number or 0,
            formatter=self.y_axis_formatter,
        )

    def _labels_width(self, c: Canvas, labels: Sequence[str], font_size: float | None, name_gap: float | None) -> float:
        if self.y_axis_width is not None:
            return self.y_axis_width
        widest = max((c.measure(label, self.font_family or "", font_size or 14.0).width for label in labels), default=0.0)
        return float(math.ceil(widest + (name_gap or 0.0) + AXIS_TICK_LENGTH))

    def _render_y_value_axis(self, c: Canvas, values: AxisValues, width: float, height: float) -> None:
        c.axis(
            Axis(
                position="left",
                width=width,
                height=height,
                split_number=len(values.ticks) - 1,
                data=tuple(reversed(values.data)),
                font_family=self.font_family or "",
                font_size=self.y_axis_font_size or 14.0,
                font_color=self.y_axis_font_color,
                stroke_color=self.y_axis_stroke_color,
                tick_length=AXIS_TICK_LENGTH,
                name_gap=self.y_axis_name_gap or 0.0,
                boundary_gap=False,
            )
        )

    def _render_x_category_axis(self, c: Canvas, width: float, count: int, boundary_gap: bool) -> None:
        c.axis(
            Axis(
                position="bottom",
                width=width,
                height=self.x_axis_height or 0.0,
                split_number=count if boundary_gap else max(1, count - 1),
                data=tuple(self.x_axis_data),
                font_family=self.font_family or "",
                font_size=self.x_axis_font_size or 14.0,
                font_color=self.x_axis_font_color,
                stroke_color=self.x_axis_stroke_color,
                tick_length=AXIS_TICK_LENGTH,
                name_gap=self.x_axis_name_gap or 0.0,
                name_rotate=self.x_axis_name_rotate or 0.0,
                boundary_gap=boundary_gap,
            )
        )

    def _render_horizontal_grid(self, c: Canvas, width: float, height: float, split_number: int) -> None:
        c.grid(
            Grid(
                right=width,
                bottom=height,
                color=self.grid_stroke_color,
                stroke_width=self.grid_stroke_width or 0.0,
                horizontals=split_number,
                hidden_horizontals=(split_number,),
            )
        )

    def _render_lines(
        self,
        c: Canvas,
        series_list: Sequence[Series],
        values: AxisValues,
        axis_width: float,
        axis_height: float,
        count: int,
        boundary_gap: bool,
    ) -> None:
        if count <= 0:
            return
        unit = axis_width / count if boundary_gap else axis_width / max(1, count - 1)
        stroke_width = self.series_stroke_width or 0.0
        for position, series in enumerate(series_list):
            color = self.series_color(series, position)
            points: list[Point] = []
            labels: list[float] = []
            for i in range(min(len(series.data), count)):
                value = series.value_at(i)
                if value is None:
                    continue
                x = unit * i + unit / 2.0 if boundary_gap else unit * i
                points.append(Point(x, values.offset_from_end(value, axis_height)))
                labels.append(value)
            if not points:
                continue
            pts = tuple(points)
            if self.series_fill:
                fill = color.with_alpha(LINE_FILL_ALPHA)
                if self.series_smooth:
                    c.smooth_line_fill(SmoothLineFill(points=pts, fill=fill, bottom=axis_height))
                else:
                    c.straight_line_fill(StraightLineFill(points=pts, fill=fill, bottom=axis_height))
            if self.series_smooth:
                c.smooth_line(SmoothLine(points=pts, color=color, stroke_width=stroke_width))
            else:
                c.straight_line(StraightLine(points=pts, color=color, stroke_width=stroke_width))
            if self.series_symbol == "circle":
                for p in pts:
                    c.circle(
                        Circle(cx=p.x, cy=p.y, r=SYMBOL_RADIUS, color=color, fill=self.background_color, stroke_width=stroke_width)
                    )
            if series.label_show:
                for p, value in zip(pts, labels):
                    self._render_value_label(c, value, center_x=p.x, bottom=p.y - SYMBOL_RADIUS - 2.0)

    def _render_value_label(self, c: Canvas, value: float, *, center_x: float, bottom: float) -> None:
        text = format_float(value)
        font_size = self.series_label_font_size or 12.0
        metrics = c.measure(text, self.font_family or "", font_size)
        c.text(
            Text(
                text=text,
                font_family=self.font_family or "",
                font_size=font_size,
                fill=self.series_label_font_color,
                x=center_x - metrics.width / 2.0,
                y=bottom,
            )
        )


def _align_offset(align: Align | None, extent: float, width: float, margin: Box) -> float:
    if align == "left":
        return margin.left
    if align == "right":
        return extent - width - margin.right
    return (extent - width) / 2.0
