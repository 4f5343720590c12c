"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Optional, Sequence
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_intersect(a: Sequence[float], b: Sequence[float]) -> bool:
    """Check if two (x, y, width, height) rectangles overlap.

    Edges that only touch do not count as an overlap.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def hex_to_rgba(value: str, alpha: float = 1.0) -> tuple:
    """Convert '#rrggbb' into an (r, g, b, a) tuple with 0-255 channels"""
    value = value.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (r, g, b, int(round(clamp(alpha, 0.0, 1.0) * 255)))


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
