"""Public API for Mandelbrot rendering utilities."""

from .image import MandelbrotImage
from .palette import BLACK, RGBA, ULTRA_FRACTAL, Palette, color_for, parse_hex_color
from .plane import Point, Sample, Viewport, iter_area, pixel_to_point, plane_bounds
from .renderer import BACKENDS, iterations, render, render_image, render_viewport

__all__ = [
    "BACKENDS",
    "BLACK",
    "MandelbrotImage",
    "Palette",
    "Point",
    "RGBA",
    "Sample",
    "ULTRA_FRACTAL",
    "Viewport",
    "color_for",
    "iter_area",
    "iterations",
    "parse_hex_color",
    "pixel_to_point",
    "plane_bounds",
    "render",
    "render_image",
    "render_viewport",
]
