from __future__ import annotations

from dataclasses import dataclass

import numpy as np

MAX_COLOR = 0xFFFFFF


def random_color(rng: np.random.Generator) -> int:
    """Draw a 24-bit RGB color uniformly over the full color space."""
    return int(rng.integers(0, MAX_COLOR + 1))


@dataclass(frozen=True)
class Point:
    """A 2D sample with its display color (24-bit RGB integer)."""
    x: float
    y: float
    color: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.color <= MAX_COLOR:
            raise ValueError(f"Color must be a 24-bit RGB value, got {self.color:#x}.")

    @property
    def hex_color(self) -> str:
        return f"#{self.color:06x}"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.color >> 16) & 0xFF, (self.color >> 8) & 0xFF, self.color & 0xFF
