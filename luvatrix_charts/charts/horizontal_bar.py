from __future__ import annotations

from dataclasses import dataclass
import logging

from luvatrix_charts.canvas import Axis, Canvas
from luvatrix_charts.charts.base import AXIS_TICK_LENGTH, BaseChart
from luvatrix_charts.common import Box, format_float
from luvatrix_charts.components import Grid, Rect, Text
from luvatrix_charts.scales import AxisValues


LOGGER = logging.getLogger(__name__)

LABEL_OFFSET = 3.0


@dataclass
class HorizontalBarChart(BaseChart):
    """Categories stacked on the left axis, bars growing right from zero along the bottom value axis.

    The first entry of `x_axis_data` is drawn at the bottom.
    """

    bar_margin: float = 5.0
    bar_gap: float = 3.0
    bar_radius: float | None = None

    chart_name = "horizontal_bar"

    def _render(self, c: Canvas) -> str:
        self._render_background(c)
        c = c.child(self.margin or Box())
        axis_top = max(self._render_title(c), self._render_legend(c))

        count = self.category_count()
        if not self.series_list or count == 0:
            return c.finalize()

        values = self._value_axis([v for s in self.series_list for v in s.data])
        split_number = len(values.ticks) - 1
        categories = self.x_axis_data or [str(i) for i in range(count)]
        left_width = self._labels_width(c, categories, self.x_axis_font_size, self.x_axis_name_gap)
        axis_height = c.inner_height - axis_top - (self.x_axis_height or 0.0)
        axis_width = c.inner_width - left_width
        if axis_height <= 0 or axis_width <= 0:
            raise ValueError(f"no room left for the plot area ({axis_width}x{axis_height})")

        body = c.child(Box(top=axis_top))
        plot = body.child(Box(left=left_width))
        plot.grid(
            Grid(
                right=axis_width,
                bottom=axis_height,
                color=self.grid_stroke_color,
                stroke_width=self.grid_stroke_width or 0.0,
                verticals=split_number,
                hidden_verticals=(0,),
            )
        )
        body.axis(
            Axis(
                position="left",
                width=left_width,
                height=axis_height,
                split_number=count,
                data=tuple(reversed(categories)),
                font_family=self.font_family or "",
                font_size=self.x_axis_font_size or 14.0,
                font_color=self.x_axis_font_color,
                stroke_color=self.x_axis_stroke_color,
                tick_length=AXIS_TICK_LENGTH,
                name_gap=self.x_axis_name_gap or 0.0,
                boundary_gap=True,
            )
        )
        plot.child(Box(top=axis_height)).axis(
            Axis(
                position="bottom",
                width=axis_width,
                height=self.x_axis_height or 0.0,
                split_number=split_number,
                data=values.data,
                font_family=self.font_family or "",
                font_size=self.y_axis_font_size or 14.0,
                font_color=self.y_axis_font_color,
                stroke_color=self.y_axis_stroke_color,
                tick_length=AXIS_TICK_LENGTH,
                name_gap=self.y_axis_name_gap or 0.0,
                boundary_gap=False,
            )
        )
        self._render_bars(plot, values, axis_width, axis_height, count)
        return c.finalize()

    def bar_height(self, unit_height: float, bar_count: int) -> float:
        if bar_count <= 0:
            return 0.0
        return (unit_height - 2.0 * self.bar_margin - self.bar_gap * (bar_count - 1)) / bar_count

    def _render_bars(self, c: Canvas, values: AxisValues, axis_width: float, axis_height: float, count: int) -> None:
        unit_height = axis_height / count
        bar_height = self.bar_height(unit_height, len(self.series_list))
        if bar_height <= 0:
            LOGGER.debug("category slot %.1f too short for %d bars, skipping bars", unit_height, len(self.series_list))
            return
        zero = values.offset(0.0, axis_width)
        label_size = self.series_label_font_size or 12.0
        for position, series in enumerate(self.series_list):
            color = self.series_color(series, position)
            for i in range(min(len(series.data), count)):
                value = series.value_at(i)
                if value is None:
                    continue
                x = values.offset(value, axis_width)
                top = unit_height * (count - i - 1) + self.bar_margin + (bar_height + self.bar_gap) * position
                c.rect(
                    Rect(
                        left=min(x, zero),
                        top=top,
                        width=abs(x - zero),
                        height=bar_height,
                        fill=color,
                        rx=self.bar_radius,
                        ry=self.bar_radius,
                    )
                )
                if not series.label_show:
                    continue
                text = format_float(value)
                metrics = c.measure(text, self.font_family or "", label_size)
                # negative bars carry their label on the left end
                if value >= 0:
                    label_x, dx = x, LABEL_OFFSET
                else:
                    label_x, dx = x - metrics.width, -LABEL_OFFSET
                c.text(
                    Text(
                        text=text,
                        font_family=self.font_family or "",
                        font_size=label_size,
                        fill=self.series_label_font_color,
                        x=label_x,
                        y=top + bar_height / 2.0,
                        dx=dx,
                        dy=metrics.height / 2.0 - 2.0,
                    )
                )
