import unittest

from luvatrix_charts.color import Color
from luvatrix_charts.common import Point, format_float
from luvatrix_charts.components import (
    Circle,
    Grid,
    Line,
    Polygon,
    Polyline,
    Rect,
    SmoothLine,
    StraightLine,
    StraightLineFill,
    Text,
    generate_svg,
    render_component,
    svg_tag,
)


class FormatFloatTests(unittest.TestCase):
    def test_one_decimal_without_trailing_zero(self) -> None:
        self.assertEqual(format_float(1.0), "1")
        self.assertEqual(format_float(1.25), "1.2")
        self.assertEqual(format_float(20.5238), "20.5")
        self.assertEqual(format_float(-0.01), "0")


class SvgTagTests(unittest.TestCase):
    def test_empty_attribute_values_are_left_out(self) -> None:
        out = svg_tag("rect", [("x", "1"), ("rx", ""), ("fill", "#FFFFFF")])
        self.assertEqual(out, '<rect x="1" fill="#FFFFFF"/>')

    def test_data_is_wrapped_on_own_lines(self) -> None:
        self.assertEqual(svg_tag("g", [], "<line/>"), "<g>\n<line/>\n</g>")

    def test_attribute_values_are_escaped(self) -> None:
        self.assertEqual(svg_tag("text", [("font-family", 'A "B"')]), '<text font-family="A &quot;B&quot;"/>')

    def test_generate_svg_header(self) -> None:
        out = generate_svg(600, 400, "")
        self.assertTrue(
            out.startswith('<svg width="600" height="400" viewBox="0 0 600 400" xmlns="http://www.w3.org/2000/svg">')
        )
        self.assertTrue(out.endswith("</svg>"))


class ShapeTests(unittest.TestCase):
    def test_line_render(self) -> None:
        out = Line(left=0, top=0.25, right=10, bottom=0.25, color=Color.black()).render()
        self.assertEqual(out, '<line stroke-width="1" x1="0" y1="0.2" x2="10" y2="0.2" stroke="#000000"/>')

    def test_zero_stroke_width_renders_nothing(self) -> None:
        self.assertEqual(Line(0, 0, 10, 10, stroke_width=0).render(), "")
        self.assertEqual(Polyline(points=(Point(0, 0), Point(1, 1)), stroke_width=0).render(), "")
        self.assertEqual(StraightLine(points=(Point(0, 0),), stroke_width=0).render(), "")
        self.assertEqual(Grid(right=10, bottom=10, horizontals=2, stroke_width=0).render(), "")

    def test_opacity_attribute_only_when_not_opaque(self) -> None:
        opaque = Rect(left=0, top=0, width=10, height=5, fill=Color.parse("#5470C6")).render()
        self.assertIn('fill="#5470C6"', opaque)
        self.assertNotIn("fill-opacity", opaque)

        half = Rect(left=0, top=0, width=10, height=5, fill=Color(84, 112, 198, 128)).render()
        self.assertIn('fill-opacity="0.5"', half)

    def test_rect_radius_optional(self) -> None:
        self.assertNotIn("rx=", Rect(0, 0, 1, 1).render())
        self.assertIn('rx="4"', Rect(0, 0, 1, 1, rx=4).render())

    def test_circle_without_fill_is_hollow(self) -> None:
        out = Circle(cx=5, cy=5, r=3, color=Color.black()).render()
        self.assertIn('fill="none"', out)
        filled = Circle(cx=5, cy=5, r=3, fill=Color.white()).render()
        self.assertIn('fill="#FFFFFF"', filled)
        half = Circle(cx=5, cy=5, r=3, fill=Color(255, 255, 255, 128)).render()
        self.assertTrue(half.endswith(' fill="#FFFFFF" fill-opacity="0.5"/>'))

    def test_polygon_points(self) -> None:
        out = Polygon(points=(Point(0, 0), Point(10, 0), Point(5, 5)), fill=Color.black()).render()
        self.assertIn('points="0,0 10,0 5,5"', out)
        self.assertEqual(Polygon(points=()).render(), "")

    def test_text_escapes_content_and_rotates_on_anchor(self) -> None:
        out = Text(text="a < b", x=10, y=20, rotate=-45, fill=Color.black()).render()
        self.assertIn("\na &lt; b\n</text>", out)
        self.assertIn('transform="rotate(-45,10,20)"', out)
        self.assertEqual(Text(text="").render(), "")

    def test_paths_have_no_fill(self) -> None:
        pts = (Point(0, 10), Point(10, 0))
        self.assertIn('fill="none"', SmoothLine(points=pts).render())
        self.assertIn('d="M 0 10 L 10 0"', StraightLine(points=pts).render())

    def test_line_fill_closes_to_bottom(self) -> None:
        pts = (Point(0, 10), Point(10, 0))
        out = StraightLineFill(points=pts, fill=Color(1, 2, 3, 100), bottom=20).render()
        self.assertIn('d="M 0 10 L 10 0 L 10 20 L 0 20 L 0 10"', out)
        self.assertEqual(StraightLineFill(points=pts, fill=Color(1, 2, 3, 0), bottom=20).render(), "")

    def test_grid_skips_hidden_lines(self) -> None:
        out = Grid(right=100, bottom=60, color=Color.black(), horizontals=3, hidden_horizontals=(3,)).render()
        self.assertTrue(out.startswith('<g stroke="#000000">'))
        self.assertEqual(out.count("<line"), 3)

    def test_translate_moves_geometry(self) -> None:
        moved = Rect(left=1, top=2, width=3, height=4).translate(10, 20)
        self.assertEqual((moved.left, moved.top, moved.width, moved.height), (11, 22, 3, 4))

    def test_render_component_rejects_unknown(self) -> None:
        with self.assertRaisesRegex(TypeError, "Unsupported component"):
            render_component(object())  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
