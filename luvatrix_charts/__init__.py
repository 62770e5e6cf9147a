from luvatrix_charts.canvas import Axis, Canvas, Legend
from luvatrix_charts.charts import BarChart, HorizontalBarChart, LineChart
from luvatrix_charts.color import Color
from luvatrix_charts.common import Box, Point, Series
from luvatrix_charts.errors import ChartDataError, ChartRenderError
from luvatrix_charts.scales import AxisValues, compute_axis_values
from luvatrix_charts.text import ApproximateTextMeasurer, PillowTextMeasurer, TextMeasurer, TextMetrics
from luvatrix_charts.theme import get_theme, list_themes, register_theme

__all__ = [
    "ApproximateTextMeasurer",
    "Axis",
    "AxisValues",
    "BarChart",
    "Box",
    "Canvas",
    "ChartDataError",
    "ChartRenderError",
    "Color",
    "HorizontalBarChart",
    "Legend",
    "LineChart",
    "PillowTextMeasurer",
    "Point",
    "Series",
    "TextMeasurer",
    "TextMetrics",
    "compute_axis_values",
    "get_theme",
    "list_themes",
    "register_theme",
]
