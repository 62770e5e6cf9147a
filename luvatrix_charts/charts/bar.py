from __future__ import annotations

from dataclasses import dataclass
import logging

from luvatrix_charts.canvas import Canvas
from luvatrix_charts.charts.base import BaseChart
from luvatrix_charts.common import Box, Series
from luvatrix_charts.components import Rect
from luvatrix_charts.scales import AxisValues


LOGGER = logging.getLogger(__name__)


@dataclass
class BarChart(BaseChart):
    """Vertical bars per category; series with category "line" are drawn as lines on the same axis."""

    bar_margin: float = 5.0
    bar_gap: float = 3.0
    bar_radius: float | None = None

    chart_name = "bar"

    def _render(self, c: Canvas) -> str:
        self._render_background(c)
        c = c.child(self.margin or Box())
        axis_top = max(self._render_title(c), self._render_legend(c))

        count = self.category_count()
        if not self.series_list or count == 0:
            return c.finalize()

        values = self._value_axis([v for s in self.series_list for v in s.data])
        split_number = len(values.ticks) - 1
        y_axis_width = self._labels_width(c, values.data, self.y_axis_font_size, self.y_axis_name_gap)
        axis_height = c.inner_height - axis_top - (self.x_axis_height or 0.0)
        axis_width = c.inner_width - y_axis_width
        if axis_height <= 0 or axis_width <= 0:
            raise ValueError(f"no room left for the plot area ({axis_width}x{axis_height})")

        body = c.child(Box(top=axis_top))
        plot = body.child(Box(left=y_axis_width))
        self._render_horizontal_grid(plot, axis_width, axis_height, split_number)
        self._render_y_value_axis(body, values, y_axis_width, axis_height)
        self._render_x_category_axis(plot.child(Box(top=axis_height)), axis_width, count, True)

        bar_series = [s for s in self.series_list if not s.is_line]
        line_series = [s for s in self.series_list if s.is_line]
        self._render_bars(plot, bar_series, values, axis_width, axis_height, count)
        self._render_lines(plot, line_series, values, axis_width, axis_height, count, True)
        return c.finalize()

    def bar_width(self, unit_width: float, bar_count: int) -> float:
        """Width of one bar when `bar_count` bars share a category slot."""
        if bar_count <= 0:
            return 0.0
        return (unit_width - 2.0 * self.bar_margin - self.bar_gap * (bar_count - 1)) / bar_count

    def _render_bars(
        self,
        c: Canvas,
        series_list: list[Series],
        values: AxisValues,
        axis_width: float,
        axis_height: float,
        count: int,
    ) -> None:
        if not series_list:
            return
        unit_width = axis_width / count
        bar_width = self.bar_width(unit_width, len(series_list))
        if bar_width <= 0:
            LOGGER.debug("category slot %.1f too narrow for %d bars, skipping bars", unit_width, len(series_list))
            return
        zero = values.offset_from_end(0.0, axis_height)
        for position, series in enumerate(series_list):
            color = self.series_color(series, position)
            for i in range(min(len(series.data), count)):
                value = series.value_at(i)
                if value is None:
                    continue
                y = values.offset_from_end(value, axis_height)
                left = unit_width * i + self.bar_margin + (bar_width + self.bar_gap) * position
                top = min(y, zero)
                c.rect(
                    Rect(
                        left=left,
                        top=top,
                        width=bar_width,
                        height=abs(zero - y),
                        fill=color,
                        rx=self.bar_radius,
                        ry=self.bar_radius,
                    )
                )
                if series.label_show:
                    self._render_value_label(c, value, center_x=left + bar_width / 2.0, bottom=top - 3.0)
