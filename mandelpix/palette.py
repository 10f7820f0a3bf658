"""Quantization of escape counts into RGBA colors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence

import matplotlib
import numpy as np


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


BLACK = RGBA(0, 0, 0, 255)


@dataclass(frozen=True)
class Palette:
    """A cycle of escape colors plus the color used for interior points.

    The interior color is kept out of the cycle, so an escaping point is
    never drawn with it.
    """

    colors: tuple[RGBA, ...]
    interior: RGBA = BLACK

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("a palette needs at least one escape color.")
        object.__setattr__(self, "colors", tuple(_as_rgba(color) for color in self.colors))
        object.__setattr__(self, "interior", _as_rgba(self.interior))

    def __len__(self) -> int:
        return len(self.colors)

    def color_for(self, count: int, limit: int) -> RGBA:
        if 0 < count < limit:
            return self.colors[count % len(self.colors)]
        return self.interior

    def as_array(self) -> np.ndarray:
        """Cycle colors as a ``(len(self), 4)`` uint8 lookup table."""

        return np.array(self.colors, dtype=np.uint8)

    def colorize(self, counts: np.ndarray, limit: int) -> np.ndarray:
        """Vectorized :meth:`color_for` over an integer array of counts."""

        counts = np.asarray(counts)
        table = self.as_array()
        rgba = table[np.mod(counts, len(table))]
        inside = (counts <= 0) | (counts >= limit)
        rgba[inside] = np.array(self.interior, dtype=np.uint8)
        return rgba

    @classmethod
    def from_colormap(cls, name: str, size: int = 16, interior: RGBA = BLACK) -> Palette:
        """Sample ``size`` evenly spaced colors from a matplotlib colormap."""

        if size <= 0:
            raise ValueError(f"palette size must be positive, got {size}.")
        try:
            cmap = matplotlib.colormaps[name]
        except KeyError as exc:
            raise ValueError(f"Unknown colormap '{name}'.") from exc
        samples = cmap(np.linspace(0.0, 1.0, size))
        rgba = np.uint8(np.clip(np.round(samples * 255), 0, 255))
        return cls(colors=tuple(RGBA(*(int(c) for c in row)) for row in rgba), interior=interior)


def _as_rgba(color: Sequence[int]) -> RGBA:
    if len(color) == 3:
        color = (*color, 255)
    if len(color) != 4:
        raise ValueError(f"colors need 3 or 4 channels, got {color!r}.")
    channels = tuple(int(c) for c in color)
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"color channels must lie in 0..255, got {color!r}.")
    return RGBA(*channels)


def parse_hex_color(hex_color: str) -> RGBA:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""

    digits = hex_color.lstrip('#')
    if len(digits) not in (6, 8):
        raise ValueError('colors must be in the form #RRGGBB or #RRGGBBAA.')
    try:
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    except ValueError as exc:
        raise ValueError('colors must contain only hexadecimal digits.') from exc
    return RGBA(*channels)


# Colors from the Ultra Fractal default gradient.
ULTRA_FRACTAL = Palette(
    colors=(
        RGBA(66, 30, 15),
        RGBA(25, 7, 26),
        RGBA(9, 1, 47),
        RGBA(4, 4, 73),
        RGBA(0, 7, 100),
        RGBA(12, 44, 138),
        RGBA(24, 82, 177),
        RGBA(57, 125, 209),
        RGBA(134, 181, 229),
        RGBA(211, 236, 248),
        RGBA(241, 233, 191),
        RGBA(248, 201, 95),
        RGBA(255, 170, 0),
        RGBA(204, 128, 0),
        RGBA(153, 87, 0),
        RGBA(106, 52, 3),
    ),
)


def color_for(count: int, limit: int, palette: Palette = ULTRA_FRACTAL) -> RGBA:
    return palette.color_for(count, limit)
