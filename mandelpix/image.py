"""On-demand image of the Mandelbrot set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import PIL.Image

from .palette import RGBA, ULTRA_FRACTAL, Palette
from .plane import Viewport, pixel_to_point
from .renderer import iterations


@dataclass(frozen=True)
class MandelbrotImage:
    """A Mandelbrot set image whose pixels are computed when sampled.

    Nothing is cached: sampling the same pixel twice evaluates it twice.
    Pixel values match :func:`mandelpix.renderer.render_viewport` for the
    same viewport and palette.
    """

    viewport: Viewport
    palette: Palette = ULTRA_FRACTAL

    mode = "RGBA"

    @property
    def width(self) -> int:
        return self.viewport.width

    @property
    def height(self) -> int:
        return self.viewport.height

    @property
    def size(self) -> tuple[int, int]:
        return self.viewport.width, self.viewport.height

    def bounds(self) -> tuple[int, int, int, int]:
        """Return ``(x_min, y_min, x_max, y_max)``; the maxima are exclusive."""

        return 0, 0, self.viewport.width, self.viewport.height

    def color_at(self, x: int, y: int) -> RGBA:
        """Color of pixel ``(x, y)``; ``(0, 0)`` is the upper-left pixel."""

        if not (0 <= x < self.viewport.width and 0 <= y < self.viewport.height):
            raise IndexError(f"pixel ({x}, {y}) lies outside {self.bounds()}.")
        count = iterations(pixel_to_point(self.viewport, x, y), self.viewport.limit)
        return self.palette.color_for(count, self.viewport.limit)

    def iter_pixels(self) -> Iterator[RGBA]:
        for y in range(self.viewport.height):
            for x in range(self.viewport.width):
                yield self.color_at(x, y)

    def tobytes(self) -> bytes:
        return b"".join(bytes(color) for color in self.iter_pixels())

    def to_pil(self) -> PIL.Image.Image:
        return PIL.Image.frombytes(self.mode, self.size, self.tobytes())
