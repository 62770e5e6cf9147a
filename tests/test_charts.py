import math
import re
import unittest

from luvatrix_charts import ApproximateTextMeasurer, BarChart, ChartRenderError, HorizontalBarChart, LineChart, Series
from luvatrix_charts.common import format_float


MEASURER = ApproximateTextMeasurer()
WEEK = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
RECT_WIDTH = re.compile(r'<rect x="[^"]*" y="([^"]*)" width="([^"]*)"')


def week_series() -> list[Series]:
    return [
        Series.new("Email", [120, 132, 101, 134, 90, 230, 210]),
        Series.new("Union Ads", [220, 182, 191, 234, 290, 330, 310]),
        Series.new("Direct", [320, 332, 301, 334, 390, 330, 320]),
        Series.new("Search Engine", [820, 932, 901, 934, 1290, 1330, 1320]),
    ]


def text_labels(svg: str) -> list[str]:
    return re.findall(r"<text[^>]*>\n(.*?)\n</text>", svg)


class BarChartTests(unittest.TestCase):
    def test_bar_scenario(self) -> None:
        svg = BarChart(series_list=week_series(), x_axis_data=WEEK).svg(MEASURER)
        self.assertTrue(svg.startswith('<svg width="600" height="400" viewBox="0 0 600 400"'))
        # background plus one bar per series and category
        self.assertEqual(svg.count("<rect"), 1 + 4 * 7)
        labels = text_labels(svg)
        for day in WEEK:
            self.assertEqual(labels.count(day), 1)
        for tick in ("0", "500", "1000", "1500", "2000", "2500", "3000"):
            self.assertEqual(labels.count(tick), 1)
        self.assertEqual(len(labels), 4 + 7 + 7)

    def test_bars_use_series_palette(self) -> None:
        svg = BarChart(series_list=week_series(), x_axis_data=WEEK, legend_show=False).svg(MEASURER)
        self.assertEqual(svg.count('fill="#5470C6"'), 7)
        self.assertEqual(svg.count('fill="#EE6666"'), 7)

    def test_line_mix_scenario(self) -> None:
        series = week_series()
        series[3] = Series.new("Search Engine", series[3].data, category="line")
        chart = BarChart(series_list=series, x_axis_data=WEEK, legend_category="rect")
        svg = chart.svg(MEASURER)

        y_axis_width = math.ceil(len("3000") * 14 * 0.6 + 8 + 5)
        unit_width = (600 - 10 - y_axis_width) / 7
        expected = format_float(chart.bar_width(unit_width, 3))
        widths = [w for _, w in RECT_WIDTH.findall(svg)]
        self.assertEqual(widths.count(expected), 3 * 7)
        self.assertEqual(svg.count("<path"), 1)

    def test_line_series_options(self) -> None:
        series = week_series()[:2]
        series[1] = Series.new("Union Ads", series[1].data, category="line", label_show=True)
        svg = BarChart(
            series_list=series,
            x_axis_data=WEEK,
            series_smooth=True,
            series_fill=True,
            series_symbol="circle",
        ).svg(MEASURER)
        self.assertEqual(svg.count("<path"), 2)
        self.assertIn(" C ", svg)
        self.assertIn('fill-opacity="0.4"', svg)
        # legend swatches draw two circles on top of the seven symbols
        self.assertEqual(svg.count("<circle"), 7 + 2)
        self.assertIn("\n330\n</text>", svg)

    def test_missing_values_suppress_bars(self) -> None:
        chart = BarChart(
            series_list=[Series.new("a", [1, None, 3])],
            x_axis_data=["x", "y", "z"],
            legend_show=False,
        )
        self.assertEqual(chart.svg(MEASURER).count("<rect"), 1 + 2)

    def test_negative_bars_hang_from_zero(self) -> None:
        chart = BarChart(series_list=[Series.new("a", [-50, 50])], x_axis_data=["x", "y"], legend_show=False)
        rows = RECT_WIDTH.findall(chart.svg(MEASURER))[1:]
        heights = re.findall(r'<rect [^>]*height="([^"]*)" fill="#5470C6"', chart.svg(MEASURER))
        self.assertEqual(len(rows), 2)
        self.assertEqual(heights[0], heights[1])
        self.assertGreater(float(rows[0][0]), float(rows[1][0]))

    def test_label_show_draws_values(self) -> None:
        chart = BarChart(series_list=[Series.new("a", [12.5, 7], label_show=True)], x_axis_data=["x", "y"])
        labels = text_labels(chart.svg(MEASURER))
        self.assertIn("12.5", labels)
        self.assertIn("7", labels)

    def test_single_split_axis_across_zero(self) -> None:
        chart = BarChart(
            series_list=[Series.new("a", [-5, 5])],
            x_axis_data=["x", "y"],
            y_axis_split_number=1,
            legend_show=False,
        )
        svg = chart.svg(MEASURER)
        self.assertNotIn("nan", svg)
        self.assertNotIn("inf", svg)
        labels = text_labels(svg)
        self.assertIn("-5", labels)
        self.assertIn("5", labels)
        self.assertEqual(svg.count("<rect"), 1 + 2)

    def test_render_is_deterministic(self) -> None:
        chart = BarChart(series_list=week_series(), x_axis_data=WEEK, title_text="Weekly", sub_title_text="visits")
        self.assertEqual(chart.svg(MEASURER), chart.svg(MEASURER))
        again = BarChart(series_list=week_series(), x_axis_data=WEEK, title_text="Weekly", sub_title_text="visits")
        self.assertEqual(chart.svg(MEASURER), again.svg(MEASURER))

    def test_empty_chart_is_minimal_document(self) -> None:
        svg = BarChart().svg(MEASURER)
        self.assertTrue(svg.startswith('<svg width="600" height="400"'))
        self.assertEqual(svg.count("<rect"), 1)
        self.assertNotIn("<line", svg)

        titled = BarChart(title_text="Nothing yet").svg(MEASURER)
        self.assertEqual(text_labels(titled), ["Nothing yet"])

    def test_palette_index_out_of_range_uses_first_color(self) -> None:
        chart = BarChart(series_list=[Series("a", (1.0, 2.0), index=20)], x_axis_data=["x", "y"], legend_show=False)
        resolved = chart.resolved()
        self.assertEqual(resolved.series_color(resolved.series_list[0], 0), resolved.series_colors[0])
        self.assertEqual(chart.svg(MEASURER).count('fill="#5470C6"'), 2)

    def test_colors_accept_hex_strings(self) -> None:
        chart = BarChart(
            series_list=[Series.new("a", [1])],
            x_axis_data=["x"],
            background_color="#000000",
            series_colors=["#123456"],
        )
        svg = chart.svg(MEASURER)
        self.assertIn('fill="#000000"', svg)
        self.assertIn('fill="#123456"', svg)

    def test_dark_theme_background(self) -> None:
        svg = BarChart(series_list=week_series(), x_axis_data=WEEK, theme="dark").svg(MEASURER)
        self.assertIn('fill="#100C2A"', svg)

    def test_y_axis_formatter(self) -> None:
        svg = BarChart(series_list=week_series(), x_axis_data=WEEK, y_axis_formatter="{c} ml").svg(MEASURER)
        self.assertIn("1500 ml", text_labels(svg))

    def test_failures_surface_as_render_error(self) -> None:
        with self.assertRaises(ChartRenderError) as ctx:
            BarChart(width=-1).svg(MEASURER)
        self.assertEqual(ctx.exception.chart, "bar")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

        with self.assertRaises(ChartRenderError):
            BarChart(series_list=[Series.new("a", [1])], series_colors=()).svg(MEASURER)

        with self.assertRaisesRegex(ChartRenderError, "no room"):
            BarChart(series_list=[Series.new("a", [1])], height=20).svg(MEASURER)


class HorizontalBarChartTests(unittest.TestCase):
    def test_bar_lengths_are_proportional(self) -> None:
        chart = HorizontalBarChart(
            series_list=[Series.new("a", [100, 200, 400])],
            x_axis_data=["A", "B", "C"],
            legend_show=False,
        )
        rows = RECT_WIDTH.findall(chart.svg(MEASURER))[1:]
        self.assertEqual(len(rows), 3)
        widths = [float(w) for _, w in rows]
        self.assertAlmostEqual(widths[1] / widths[0], 2.0, delta=0.01)
        self.assertAlmostEqual(widths[2] / widths[0], 4.0, delta=0.01)
        # first category sits at the bottom
        tops = [float(y) for y, _ in rows]
        self.assertGreater(tops[0], tops[1])
        self.assertGreater(tops[1], tops[2])

    def test_series_share_category_slot(self) -> None:
        chart = HorizontalBarChart(
            series_list=[Series.new("a", [1, 2]), Series.new("b", [3, 4])],
            x_axis_data=["A", "B"],
        )
        svg = chart.svg(MEASURER)
        self.assertEqual(svg.count("<rect"), 1 + 4)
        self.assertIn('fill="#91CC75"', svg)

    def test_value_labels_at_bar_end(self) -> None:
        chart = HorizontalBarChart(
            series_list=[Series.new("a", [100, 200], label_show=True)],
            x_axis_data=["A", "B"],
            legend_show=False,
        )
        svg = chart.svg(MEASURER)
        self.assertIn('dx="3"', svg)
        labels = text_labels(svg)
        self.assertIn("100", labels)
        self.assertIn("200", labels)

    def test_render_error_names_chart(self) -> None:
        with self.assertRaises(ChartRenderError) as ctx:
            HorizontalBarChart(height=0).svg(MEASURER)
        self.assertEqual(ctx.exception.chart, "horizontal_bar")


class LineChartTests(unittest.TestCase):
    def test_one_path_per_series_with_symbols(self) -> None:
        svg = LineChart(series_list=week_series()[:2], x_axis_data=WEEK, legend_show=False).svg(MEASURER)
        self.assertEqual(svg.count("<path"), 2)
        self.assertEqual(svg.count("<circle"), 14)

    def test_boundary_gap_moves_points_onto_ticks(self) -> None:
        series = [Series.new("a", [1, 2, 3])]
        gapped = LineChart(series_list=series, x_axis_data=["x", "y", "z"], legend_show=False, series_symbol=None)
        flush = LineChart(
            series_list=series,
            x_axis_data=["x", "y", "z"],
            legend_show=False,
            series_symbol=None,
            x_boundary_gap=False,
        )
        first_x = re.compile(r'd="M ([^ ]*) ')
        gap_x = float(first_x.search(gapped.svg(MEASURER)).group(1))
        flush_x = float(first_x.search(flush.svg(MEASURER)).group(1))
        self.assertGreater(gap_x, flush_x)

    def test_missing_points_are_skipped(self) -> None:
        chart = LineChart(series_list=[Series.new("a", [1, None, 3])], x_axis_data=["x", "y", "z"], legend_show=False)
        svg = chart.svg(MEASURER)
        self.assertEqual(svg.count("<circle"), 2)
        self.assertEqual(re.search(r'd="([^"]*)"', svg).group(1).count("L "), 1)


if __name__ == "__main__":
    unittest.main()
