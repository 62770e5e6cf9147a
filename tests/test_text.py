import unittest
from unittest import mock

from PIL import features

from luvatrix_charts import text as text_module
from luvatrix_charts.text import ApproximateTextMeasurer, PillowTextMeasurer, TextMetrics


class TextMeasurerTests(unittest.TestCase):
    def test_approximate_measurer_is_fixed_advance(self) -> None:
        m = ApproximateTextMeasurer(char_width_ratio=0.5)
        self.assertEqual(m.measure("abcd", "Roboto", 10), TextMetrics(width=20.0, height=10.0))
        self.assertEqual(m.measure("", "Roboto", 10).width, 0.0)

    def test_approximate_measurer_rejects_non_positive_ratio(self) -> None:
        with self.assertRaisesRegex(ValueError, "must be > 0"):
            ApproximateTextMeasurer(char_width_ratio=0)

    def test_pillow_measurer_grows_with_text(self) -> None:
        m = PillowTextMeasurer()
        short = m.measure("ab", "Roboto", 14)
        long = m.measure("abababab", "Roboto", 14)
        self.assertGreater(short.width, 0.0)
        self.assertGreater(long.width, short.width)
        self.assertGreater(short.height, 0.0)
        self.assertEqual(m.measure("", "Roboto", 14).width, 0.0)

    @unittest.skipUnless(features.check("freetype2"), "Pillow built without FreeType")
    def test_default_font_fallback_honours_size(self) -> None:
        text_module._load_font.cache_clear()
        try:
            with mock.patch.object(text_module, "_resolve_font_path", return_value=None):
                m = PillowTextMeasurer()
                small = m.measure("Weekly report", "NoSuchFont", 10)
                large = m.measure("Weekly report", "NoSuchFont", 40)
        finally:
            text_module._load_font.cache_clear()
        self.assertGreater(large.height, small.height * 2)
        self.assertGreater(large.width, small.width * 2)


if __name__ == "__main__":
    unittest.main()
