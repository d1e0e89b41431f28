"""Polynomial color gradient for smooth escape fractions."""

from __future__ import annotations

import numpy as np


def gradient(t: np.ndarray) -> np.ndarray:
    """
    Map fractions t in [0, 1] to RGB.

    R = 9 (1-t) t^3, G = 15 (1-t)^2 t^2, B = 8.5 (1-t)^3 t, each scaled by
    255 and truncated to 8 bits. Every channel peaks below 1.0, so no value
    exceeds 255.
    """
    t = np.asarray(t, dtype=np.float64)
    u = 1.0 - t
    red = 9.0 * u * (t * t * t) * 255.0
    green = 15.0 * (u * u) * (t * t) * 255.0
    blue = 8.5 * (u * u * u) * t * 255.0
    return np.stack([red, green, blue], axis=-1).astype(np.uint8)


def colorize(fractions: np.ndarray) -> np.ndarray:
    """Colorize escape fractions; NaN (interior) pixels are black."""
    interior = np.isnan(fractions)
    rgb = gradient(np.where(interior, 0.0, fractions))
    rgb[interior] = 0
    return rgb
