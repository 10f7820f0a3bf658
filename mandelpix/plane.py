"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, NamedTuple

import numpy as np

HORIZON = 4.0


@dataclass(frozen=True)
class Point:
    """A complex number ``x + yi`` stored as a pair of floats."""

    x: float
    y: float

    def escapes(self) -> bool:
        return self.x * self.x + self.y * self.y > HORIZON

    def step(self, c: Point) -> Point:
        """Apply ``z * z + c`` once."""

        return Point(
            x=self.x * self.x - self.y * self.y + c.x,
            y=2.0 * self.x * self.y + c.y,
        )


def _check_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return int(value)


@dataclass(frozen=True)
class Viewport:
    """Parameters that describe a single render of the Mandelbrot set.

    ``magnification`` 1.0 spans four plane units across the shorter pixel
    dimension.
    """

    width: int
    height: int
    center: Point
    magnification: float
    limit: int

    def __post_init__(self) -> None:
        _check_positive_int("width", self.width)
        _check_positive_int("height", self.height)
        _check_positive_int("limit", self.limit)
        if not (math.isfinite(self.center.x) and math.isfinite(self.center.y)):
            raise ValueError(f"center must be finite, got ({self.center.x}, {self.center.y}).")
        if not math.isfinite(self.magnification) or self.magnification <= 0:
            raise ValueError(f"magnification must be positive and finite, got {self.magnification}.")

    @classmethod
    def from_center(
        cls,
        width: int,
        height: int,
        center_x: float,
        center_y: float,
        magnification: float,
        limit: int,
    ) -> Viewport:
        return cls(
            width=width,
            height=height,
            center=Point(float(center_x), float(center_y)),
            magnification=float(magnification),
            limit=limit,
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixel_step(self) -> float:
        """Plane distance covered by one pixel."""

        return 4.0 / min(self.width, self.height) / self.magnification


class Sample(NamedTuple):
    index: int
    x: int
    y: int
    point: Point


def _frame(viewport: Viewport) -> tuple[float, float, float]:
    px = viewport.pixel_step
    x0 = viewport.center.x - viewport.width / 2.0 * px
    y0 = viewport.center.y + viewport.height / 2.0 * px
    return x0, y0, px


def pixel_to_point(viewport: Viewport, x: int, y: int) -> Point:
    """Plane point sampled by pixel ``(x, y)``; rows grow downward."""

    x0, y0, px = _frame(viewport)
    return Point(x0 + x * px, y0 - y * px)


def iter_area(viewport: Viewport) -> Iterator[Sample]:
    """Yield every pixel of ``viewport`` in row-major order."""

    x0, y0, px = _frame(viewport)
    index = 0
    for y in range(viewport.height):
        plane_y = y0 - y * px
        for x in range(viewport.width):
            yield Sample(index, x, y, Point(x0 + x * px, plane_y))
            index += 1


def plane_axes(viewport: Viewport) -> tuple[np.ndarray, np.ndarray]:
    """Plane coordinates of every pixel column and row as float64 arrays."""

    x0, y0, px = _frame(viewport)
    xs = x0 + np.arange(viewport.width, dtype=np.float64) * np.float64(px)
    ys = y0 - np.arange(viewport.height, dtype=np.float64) * np.float64(px)
    return xs, ys


def plane_bounds(viewport: Viewport) -> tuple[float, float, float, float]:
    """Return ``(x_min, y_min, x_max, y_max)`` over the sampled pixel points."""

    top_left = pixel_to_point(viewport, 0, 0)
    bottom_right = pixel_to_point(viewport, viewport.width - 1, viewport.height - 1)
    return top_left.x, bottom_right.y, bottom_right.x, top_left.y
