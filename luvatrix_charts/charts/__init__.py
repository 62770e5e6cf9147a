from luvatrix_charts.charts.bar import BarChart
from luvatrix_charts.charts.base import BaseChart
from luvatrix_charts.charts.horizontal_bar import HorizontalBarChart
from luvatrix_charts.charts.line import LineChart

__all__ = ["BarChart", "BaseChart", "HorizontalBarChart", "LineChart"]
