"""
PNG encoding and inline data URIs for rendered token artwork.
"""

from __future__ import annotations

import base64
import io
from typing import Optional

import numpy as np
from PIL import Image

from ..config import RenderConfig
from .julia_set import render_token

PNG_MIME = "image/png"
JSON_MIME = "application/json"


def encode_png(raster: np.ndarray, compress_level: int = 9) -> bytes:
    """Losslessly encode an (H, W, 3) uint8 raster as PNG bytes."""
    if raster.dtype != np.uint8 or raster.ndim != 3 or raster.shape[2] != 3:
        raise ValueError(
            f"Expected (H, W, 3) uint8 raster, got {raster.shape} {raster.dtype}"
        )

    buffer = io.BytesIO()
    Image.fromarray(raster).save(
        buffer, format="PNG", compress_level=compress_level, optimize=False
    )
    return buffer.getvalue()


def to_data_uri(payload: bytes, mime: str = PNG_MIME) -> str:
    """Wrap bytes as ``data:<mime>;base64,<payload>``."""
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI back into (mime, payload)."""
    header, sep, data = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    return header[len("data:"):-len(";base64")], base64.b64decode(data)


def render_data_uri(token_id: int, config: Optional[RenderConfig] = None) -> str:
    """Render a token's artwork and package it as an inline PNG data URI."""
    config = config or RenderConfig()
    raster = render_token(token_id, config)
    return to_data_uri(encode_png(raster, config.compress_level))
