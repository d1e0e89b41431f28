"""
Seeded Julia-set renderer.

Each token id becomes a 64-bit seed. The seed drives a Mersenne Twister
draw of one angle theta in [0, 2pi), and the Julia constant is placed on
the circle of radius 0.7885: c = 0.7885 * (cos theta, sin theta).

Pixel (x, y) of a W x H canvas starts at z0 = (x*3/W - 1.5, y*3/H - 1.5)
and iterates z = z^2 + c until |z| >= 2 or the iteration cap M is reached.
Escaped pixels get the smooth fraction (n + 1 - log2(log2|z|)) / M; pixels
that never escape are interior (NaN here, black after colorizing).

Real and imaginary parts are iterated as separate float64 arrays so every
step is a plain IEEE-754 multiply or add.
"""

from __future__ import annotations

import logging
import math
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import RenderConfig
from .palette import colorize

logger = logging.getLogger(__name__)

JULIA_RADIUS = 0.7885
ESCAPE_RADIUS_SQ = 4.0
PLANE_SPAN = 3.0
PLANE_OFFSET = 1.5
SEED_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class JuliaParameters:
    """Per-token fractal parameters derived from the seed."""

    seed: int
    theta: float
    c_real: float
    c_imag: float

    @property
    def c(self) -> complex:
        return complex(self.c_real, self.c_imag)


def seed_for_token(token_id: int) -> int:
    """Token id wrapped to an unsigned 64-bit integer."""
    return token_id & SEED_MASK


def julia_parameters(token_id: int) -> JuliaParameters:
    seed = seed_for_token(token_id)
    theta = random.Random(seed).random() * 2.0 * math.pi
    return JuliaParameters(
        seed=seed,
        theta=theta,
        c_real=JULIA_RADIUS * math.cos(theta),
        c_imag=JULIA_RADIUS * math.sin(theta),
    )


def _escape_band(
    params: JuliaParameters,
    width: int,
    height: int,
    max_iterations: int,
    row_start: int,
    row_stop: int,
) -> np.ndarray:
    """Smooth escape fractions for rows [row_start, row_stop) of the canvas."""
    xs = np.arange(width, dtype=np.float64) * PLANE_SPAN / width - PLANE_OFFSET
    ys = np.arange(row_start, row_stop, dtype=np.float64) * PLANE_SPAN / height - PLANE_OFFSET
    grid_r, grid_i = np.meshgrid(xs, ys)

    size = grid_r.size
    zr = grid_r.ravel()
    zi = grid_i.ravel()
    active = np.arange(size)

    counts = np.zeros(size, dtype=np.float64)
    final_mag_sq = np.zeros(size, dtype=np.float64)
    escaped_any = np.zeros(size, dtype=bool)

    cr = params.c_real
    ci = params.c_imag

    for n in range(max_iterations):
        mag_sq = zr * zr + zi * zi
        escaped = mag_sq >= ESCAPE_RADIUS_SQ
        if escaped.any():
            ids = active[escaped]
            counts[ids] = n
            final_mag_sq[ids] = mag_sq[escaped]
            escaped_any[ids] = True

            keep = ~escaped
            active = active[keep]
            zr = zr[keep]
            zi = zi[keep]
            if active.size == 0:
                break

        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci

    fractions = np.full(size, np.nan, dtype=np.float64)
    modulus = np.sqrt(final_mag_sq[escaped_any])
    # Scalar libm log2 per pixel keeps results independent of band layout
    log_log = np.fromiter(
        (math.log2(math.log2(m)) for m in modulus.tolist()),
        dtype=np.float64,
        count=modulus.size,
    )
    smooth = (counts[escaped_any] + 1.0 - log_log) / max_iterations
    fractions[escaped_any] = np.clip(smooth, 0.0, 1.0)

    return fractions.reshape(row_stop - row_start, width)


def _bands(height: int, workers: int) -> list[tuple[int, int]]:
    step = max(1, math.ceil(height / workers))
    return [(start, min(start + step, height)) for start in range(0, height, step)]


def escape_fractions(
    params: JuliaParameters,
    width: int,
    height: int,
    max_iterations: int,
    workers: int = 1,
) -> np.ndarray:
    """
    Compute smooth escape fractions for a full canvas.

    Args:
        params: Julia constant and seed
        width: Canvas width in pixels
        height: Canvas height in pixels
        max_iterations: Iteration cap M
        workers: Number of threads; rows are split into contiguous bands

    Returns:
        (height, width) float64 array; NaN marks interior points
    """
    if workers <= 1 or height < 2:
        return _escape_band(params, width, height, max_iterations, 0, height)

    bands = _bands(height, workers)
    with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="julia-render") as pool:
        futures = [
            pool.submit(_escape_band, params, width, height, max_iterations, start, stop)
            for start, stop in bands
        ]
        return np.vstack([future.result() for future in futures])


def render_token(token_id: int, config: Optional[RenderConfig] = None) -> np.ndarray:
    """Render the (height, width, 3) uint8 RGB raster for a token id."""
    config = config or RenderConfig()
    params = julia_parameters(token_id)

    started = time.perf_counter()
    fractions = escape_fractions(
        params,
        config.width,
        config.height,
        config.max_iterations,
        workers=config.workers,
    )
    raster = colorize(fractions)

    logger.debug(
        "Rendered Julia set",
        extra={
            "event": "art.render",
            "token_id": token_id,
            "theta": params.theta,
            "width": config.width,
            "height": config.height,
            "max_iterations": config.max_iterations,
            "interior_pixels": int(np.isnan(fractions).sum()),
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return raster
