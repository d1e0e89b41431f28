"""
Deterministic token artwork.

- julia_set: seeded escape-time renderer
- palette: polynomial color gradient
- encoding: PNG encoding and data URIs
"""

from .encoding import decode_data_uri, encode_png, render_data_uri, to_data_uri
from .julia_set import (
    JuliaParameters,
    escape_fractions,
    julia_parameters,
    render_token,
    seed_for_token,
)
from .palette import colorize, gradient

__all__ = [
    "JuliaParameters",
    "julia_parameters",
    "seed_for_token",
    "escape_fractions",
    "render_token",
    "colorize",
    "gradient",
    "encode_png",
    "to_data_uri",
    "decode_data_uri",
    "render_data_uri",
]
