"""Rendering primitives for Mandelbrot frames."""

from __future__ import annotations

from typing import Optional

import PIL.Image

from .palette import ULTRA_FRACTAL, Palette
from .plane import Point, Viewport, iter_area

BACKENDS = ("python", "tensorflow")


def iterations(point: Point, limit: int) -> int:
    """Number of steps before the orbit of ``point`` leaves radius 2.

    The orbit is seeded with ``z0 = point``. Returns ``limit`` when no escape
    was seen within ``limit + 1`` checks.
    """

    z = point
    for i in range(limit + 1):
        if z.escapes():
            return i
        z = z.step(point)
    return limit


def _render_python(viewport: Viewport, palette: Palette) -> bytes:
    pix = bytearray(viewport.pixel_count * 4)
    for index, _x, _y, point in iter_area(viewport):
        offset = index * 4
        pix[offset:offset + 4] = bytes(palette.color_for(iterations(point, viewport.limit), viewport.limit))
    return bytes(pix)


def _render_tensorflow(viewport: Viewport, palette: Palette, device: Optional[str]) -> bytes:
    from .tensor import iteration_grid

    counts = iteration_grid(viewport, device=device)
    return palette.colorize(counts, viewport.limit).tobytes()


def render_viewport(
    viewport: Viewport,
    palette: Optional[Palette] = None,
    *,
    backend: str = "python",
    device: Optional[str] = None,
) -> bytes:
    """Render ``viewport`` into a row-major RGBA byte buffer."""

    palette = palette if palette is not None else ULTRA_FRACTAL
    if backend == "python":
        return _render_python(viewport, palette)
    if backend == "tensorflow":
        return _render_tensorflow(viewport, palette, device)
    raise ValueError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")


def render(
    width: int,
    height: int,
    center_x: float,
    center_y: float,
    magnification: float,
    limit: int,
) -> bytes:
    return render_viewport(Viewport.from_center(width, height, center_x, center_y, magnification, limit))


def render_image(
    viewport: Viewport,
    palette: Optional[Palette] = None,
    *,
    backend: str = "python",
    device: Optional[str] = None,
) -> PIL.Image.Image:
    """Render ``viewport`` as an RGBA Pillow image."""

    pix = render_viewport(viewport, palette, backend=backend, device=device)
    return PIL.Image.frombytes("RGBA", (viewport.width, viewport.height), pix, "raw", "RGBA", viewport.width * 4)
