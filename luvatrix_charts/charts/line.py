from __future__ import annotations

from dataclasses import dataclass

from luvatrix_charts.canvas import Canvas
from luvatrix_charts.charts.base import BaseChart
from luvatrix_charts.common import Box, Symbol


@dataclass
class LineChart(BaseChart):
    series_symbol: Symbol | None = "circle"

    chart_name = "line"

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

        boundary_gap = self.x_boundary_gap is not False
        body = c.child(Box(top=axis_top))
        plot = body.child(Box(left=y_axis_width))
        self._render_horizontal_grid(plot, axis_width, axis_height, split_number)
        self._render_y_value_axis(body, values, y_axis_width, axis_height)
        self._render_x_category_axis(plot.child(Box(top=axis_height)), axis_width, count, boundary_gap)
        self._render_lines(plot, self.series_list, values, axis_width, axis_height, count, boundary_gap)
        return c.finalize()
