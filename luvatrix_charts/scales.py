from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import logging
from typing import Any, Sequence

import numpy as np


LOGGER = logging.getLogger(__name__)

DEFAULT_SPLIT_NUMBER = 6
FORMATTER_PLACEHOLDER = "{c}"
NICE_STEP_MULTIPLIERS = (1.0, 2.0, 5.0, 10.0)
MAX_STEP_SEARCH = 64
# 10.0 ** 309 overflows a float
_MAX_EXPONENT = 307


@dataclass(frozen=True)
class AxisValues:
    data: tuple[str, ...]
    ticks: tuple[float, ...]
    min: float
    max: float
    step: float

    def offset(self, value: float, extent: float) -> float:
        """Map `value` from [min, max] onto [0, extent]."""
        span = self.max - self.min
        if span == 0:
            return 0.0
        return (value - self.min) / span * extent

    def value_at(self, offset: float, extent: float) -> float:
        if extent == 0:
            return self.min
        return self.min + offset / extent * (self.max - self.min)

    def offset_from_end(self, value: float, extent: float) -> float:
        """Pixel offset measured from the far end, e.g. from the top of a y axis."""
        return extent - self.offset(value, extent)


def compute_axis_values(
    data_list: Sequence[float] | np.ndarray,
    split_number: int,
    *,
    formatter: Any = None,
    include_zero: bool = True,
    min_value: float | None = None,
    max_value: float | None = None,
) -> AxisValues:
    if split_number < 1:
        LOGGER.debug("split number %s < 1, using %s", split_number, DEFAULT_SPLIT_NUMBER)
        split_number = DEFAULT_SPLIT_NUMBER

    values = np.asarray(data_list, dtype=np.float64).ravel()
    values = values[np.isfinite(values)]
    if values.size == 0:
        vmin = 0.0
        vmax = 0.0
    else:
        vmin = float(np.min(values))
        vmax = float(np.max(values))
    if include_zero:
        vmin = min(vmin, 0.0)
        vmax = max(vmax, 0.0)
    if min_value is not None:
        vmin = min(vmin, float(min_value))
    if max_value is not None:
        vmax = max(vmax, float(max_value))

    span = vmax - vmin
    if span <= 0:
        span = abs(vmax) or 1.0
    if not np.isfinite(span):
        raise ValueError(f"data range {vmin!r}..{vmax!r} is too wide for axis ticks")

    if split_number == 1 and vmin < 0.0 < vmax:
        # one interval on step multiples cannot cross zero; use [-s, s]
        half = _nice_ceil(max(-vmin, vmax))
        ticks = np.array([-half, half], dtype=np.float64)
        step = 2.0 * half
        label_step = half
    else:
        step = _search_step(vmin, vmax, span, split_number)
        first = float(np.floor(vmin / step))
        if first * step > vmin:
            first -= 1.0
        # Ticks are integer multiples of the step so the bounds checked in the search are exact.
        ticks = (first + np.arange(split_number + 1, dtype=np.float64)) * step
        label_step = step
    ticks[ticks == 0.0] = 0.0
    if not np.all(np.isfinite(ticks)):
        raise ValueError(f"no finite axis ticks for data range {vmin!r}..{vmax!r}")

    labels = tuple(_apply_formatter(format_tick(float(v), step=label_step), formatter) for v in ticks.tolist())
    return AxisValues(
        data=labels,
        ticks=tuple(float(v) for v in ticks.tolist()),
        min=float(ticks[0]),
        max=float(ticks[-1]),
        step=step,
    )


def _search_step(vmin: float, vmax: float, span: float, split_number: int) -> float:
    """Smallest nice step whose `split_number` aligned intervals cover [vmin, vmax]."""
    exponent = int(np.floor(np.log10(span / split_number)))
    candidate = _nearest_candidate(span / split_number / 10.0**exponent)
    for _ in range(MAX_STEP_SEARCH):
        if exponent > _MAX_EXPONENT:
            break
        step = NICE_STEP_MULTIPLIERS[candidate] * 10.0**exponent
        if not np.isfinite(step) or step <= 0:
            break
        first = float(np.floor(vmin / step))
        if first * step > vmin:
            first -= 1.0
        if (first + split_number) * step >= vmax:
            return step
        candidate += 1
        if candidate == len(NICE_STEP_MULTIPLIERS):
            # 10 x 10^e is 1 x 10^(e+1); continue with 2 x 10^(e+1)
            candidate = 1
            exponent += 1
    raise ValueError(f"no nice step splits {vmin!r}..{vmax!r} into {split_number} intervals")


def _nice_ceil(value: float) -> float:
    """Smallest candidate multiple of a power of ten that is >= `value`."""
    exponent = int(np.floor(np.log10(value)))
    for multiplier in NICE_STEP_MULTIPLIERS:
        nice = multiplier * 10.0**exponent
        if nice >= value:
            return nice
    return 10.0 ** (exponent + 1)


def _nearest_candidate(mantissa: float) -> int:
    """Index of the multiplier closest to `mantissa`; ties pick the larger one."""
    best = 0
    best_dist = abs(mantissa - NICE_STEP_MULTIPLIERS[0])
    for i, multiplier in enumerate(NICE_STEP_MULTIPLIERS[1:], start=1):
        dist = abs(mantissa - multiplier)
        if dist <= best_dist:
            best = i
            best_dist = dist
    return best


def _apply_formatter(label: str, formatter: Any) -> str:
    if formatter is None:
        return label
    if not isinstance(formatter, str) or FORMATTER_PLACEHOLDER not in formatter:
        LOGGER.debug("ignoring axis formatter without %s placeholder: %r", FORMATTER_PLACEHOLDER, formatter)
        return label
    return formatter.replace(FORMATTER_PLACEHOLDER, label)


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e15 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(repr(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
