from __future__ import annotations

import dataclasses
from dataclasses import dataclass, replace
import logging
import re
from typing import Any, Mapping, TypeVar

from luvatrix_charts.color import Color
from luvatrix_charts.common import Box


LOGGER = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_GRAFANA = "grafana"
DEFAULT_THEME = THEME_LIGHT

ConfigT = TypeVar("ConfigT")


@dataclass(frozen=True)
class Theme:
    """Style defaults for every chart family.

    Field names match the chart configuration fields they fill; colors are hex tokens.
    """

    is_light: bool = True
    font_family: str = "Roboto"
    width: float = 600.0
    height: float = 400.0
    margin: Box = Box(left=5.0, top=5.0, right=5.0, bottom=5.0)
    background_color: str = "#FFFFFF"

    title_font_color: str = "#464646"
    title_font_size: float = 18.0
    title_font_weight: str = "bold"
    title_margin: Box = Box()
    title_align: str = "left"

    sub_title_font_color: str = "#464646"
    sub_title_font_size: float = 14.0
    sub_title_margin: Box = Box()
    sub_title_align: str = "left"

    legend_font_size: float = 14.0
    legend_font_color: str = "#464646"
    legend_align: str = "right"
    legend_margin: Box = Box()
    legend_category: str = "normal"
    legend_show: bool = True

    x_axis_font_size: float = 14.0
    x_axis_font_color: str = "#6E7079"
    x_axis_stroke_color: str = "#6E7079"
    x_axis_height: float = 30.0
    x_axis_name_gap: float = 5.0
    x_axis_name_rotate: float = 0.0
    x_boundary_gap: bool = True

    y_axis_font_size: float = 14.0
    y_axis_font_color: str = "#6E7079"
    y_axis_stroke_color: str = "#6E7079"
    y_axis_split_number: int = 6
    y_axis_name_gap: float = 8.0

    grid_stroke_color: str = "#E0E6F1"
    grid_stroke_width: float = 1.0

    series_stroke_width: float = 2.0
    series_label_font_color: str = "#464646"
    series_label_font_size: float = 12.0
    series_colors: tuple[str, ...] = (
        "#5470C6",
        "#91CC75",
        "#FAC858",
        "#EE6666",
        "#73C0DE",
        "#3BA272",
        "#FC8452",
        "#9A60B4",
        "#EA7CCC",
    )


LIGHT_THEME = Theme()

DARK_THEME = replace(
    LIGHT_THEME,
    is_light=False,
    background_color="#100C2A",
    title_font_color="#EEF1FA",
    sub_title_font_color="#B9B8CE",
    legend_font_color="#EEF1FA",
    x_axis_font_color="#B9B8CE",
    x_axis_stroke_color="#B9B8CE",
    y_axis_font_color="#B9B8CE",
    y_axis_stroke_color="#B9B8CE",
    grid_stroke_color="#484753",
    series_label_font_color="#EEF1FA",
    series_colors=(
        "#4992FF",
        "#7CFFB2",
        "#FDDD60",
        "#FF6E76",
        "#58D9F9",
        "#05C091",
        "#FF8A45",
        "#8D48E3",
        "#DD79FF",
    ),
)

GRAFANA_THEME = replace(
    DARK_THEME,
    background_color="#1F1D25",
    title_font_color="#D8D9DA",
    legend_font_color="#D8D9DA",
    grid_stroke_color="#44424A",
    series_colors=(
        "#7EB26D",
        "#EAB839",
        "#6ED0E0",
        "#EF843C",
        "#E24D42",
        "#1F78C1",
        "#BA43A9",
        "#705DA0",
        "#508642",
    ),
)

_THEMES: dict[str, Theme] = {
    THEME_LIGHT: LIGHT_THEME,
    THEME_DARK: DARK_THEME,
    THEME_GRAFANA: GRAFANA_THEME,
}


def list_themes() -> list[str]:
    return list(_THEMES)


def get_theme(name: str | None) -> Theme:
    if name is None:
        return _THEMES[DEFAULT_THEME]
    theme = _THEMES.get(name)
    if theme is None:
        LOGGER.warning("unknown theme %r, falling back to %r", name, DEFAULT_THEME)
        return _THEMES[DEFAULT_THEME]
    return theme


def register_theme(name: str, overrides: Mapping[str, Any] | None = None, *, base: str = DEFAULT_THEME) -> Theme:
    """Validate `overrides` against `base` and register the result under `name`."""
    if not name.strip():
        raise ValueError("theme name must be non-empty")
    theme = validate_theme(overrides, base=base)
    _THEMES[name] = theme
    return theme


def validate_theme(overrides: Mapping[str, Any] | None = None, *, base: str = DEFAULT_THEME) -> Theme:
    base_theme = get_theme(base)
    known = {f.name for f in dataclasses.fields(Theme)}
    raw: dict[str, Any] = {}
    if overrides:
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key, value in raw.items():
        if key.endswith("_color") and not _is_hex(value):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RGB)")
        if key.endswith("_font_size") and (not isinstance(value, (int, float)) or float(value) <= 0):
            raise ValueError(f"Token `{key}` must be a positive number")

    if "series_colors" in raw:
        colors = raw["series_colors"]
        if isinstance(colors, str) or not colors or not all(_is_hex(c) for c in colors):
            raise ValueError("Token `series_colors` must be a non-empty sequence of hex colors")
        raw["series_colors"] = tuple(colors)

    if "font_family" in raw and (not isinstance(raw["font_family"], str) or not raw["font_family"].strip()):
        raise ValueError("Token `font_family` must be a non-empty string")

    return replace(base_theme, **raw)


def theme_defaults(name: str | None = DEFAULT_THEME) -> dict[str, Any]:
    """Partial chart configuration carrying every style default of the theme."""
    theme = get_theme(name)
    out: dict[str, Any] = {}
    for f in dataclasses.fields(Theme):
        value = getattr(theme, f.name)
        if f.name == "series_colors":
            value = tuple(Color.parse(c) for c in value)
        elif f.name.endswith("_color"):
            value = Color.parse(value)
        out[f.name] = value
    return out


def fill_unset(config: ConfigT, defaults: Mapping[str, Any]) -> ConfigT:
    """Copy of `config` with every `None` field taken from `defaults` when present."""
    updates = {
        f.name: defaults[f.name]
        for f in dataclasses.fields(config)  # type: ignore[arg-type]
        if f.init and getattr(config, f.name) is None and f.name in defaults
    }
    if not updates:
        return config
    return replace(config, **updates)  # type: ignore[type-var]


def _is_hex(value: Any) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))
