from __future__ import annotations


class ChartDataError(ValueError):
    """Series input that cannot be coerced into numeric values."""


class ChartRenderError(RuntimeError):
    """Raised by a chart's `svg()` when markup could not be assembled.

    Rendering is all-or-nothing: when this is raised no document was produced.
    """

    def __init__(self, message: str, *, chart: str = "") -> None:
        super().__init__(f"{chart}: {message}" if chart else message)
        self.chart = chart
