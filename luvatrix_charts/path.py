from __future__ import annotations

from typing import Sequence

import numpy as np

from luvatrix_charts.common import Point, format_float


def straight_path(points: Sequence[Point]) -> str:
    commands: list[str] = []
    for i, p in enumerate(points):
        action = "M" if i == 0 else "L"
        commands.append(f"{action} {format_float(p.x)} {format_float(p.y)}")
    return " ".join(commands)


def smooth_path(points: Sequence[Point]) -> str:
    """Cubic path through every point with continuous tangents.

    Catmull-Rom segments converted to Bezier form; the end points reuse themselves as
    their missing neighbour. Input is expected to be x-monotonic.
    """
    if not points:
        return ""
    first = points[0]
    head = f"M {format_float(first.x)} {format_float(first.y)}"
    if len(points) == 1:
        return head

    pts = np.asarray([(p.x, p.y) for p in points], dtype=np.float64)
    padded = np.vstack([pts[:1], pts, pts[-1:]])
    prev_pts = padded[:-3]
    start = padded[1:-2]
    end = padded[2:-1]
    next_pts = padded[3:]
    ctrl_1 = start + (end - prev_pts) / 6.0
    ctrl_2 = end - (next_pts - start) / 6.0

    commands = [head]
    for c1, c2, p in zip(ctrl_1.tolist(), ctrl_2.tolist(), end.tolist(), strict=True):
        commands.append(
            "C "
            f"{format_float(c1[0])} {format_float(c1[1])} "
            f"{format_float(c2[0])} {format_float(c2[1])} "
            f"{format_float(p[0])} {format_float(p[1])}"
        )
    return " ".join(commands)


def close_to_baseline(path: str, points: Sequence[Point], bottom: float) -> str:
    """Close an open path into a fillable region down to the `bottom` baseline."""
    if not points:
        return ""
    first = points[0]
    last = points[-1]
    closing = (
        f"L {format_float(last.x)} {format_float(bottom)} "
        f"L {format_float(first.x)} {format_float(bottom)} "
        f"L {format_float(first.x)} {format_float(first.y)}"
    )
    return f"{path} {closing}"
