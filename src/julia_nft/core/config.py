"""
Julia NFT Configuration

Collection identity and renderer settings, read from environment variables.

Environment variables:
- JULIA_NFT_NAME / JULIA_NFT_SYMBOL: collection name and ticker
- JULIA_NFT_START_TOKEN_ID: first id issued by the sequential mint
- JULIA_NFT_IMAGE_WIDTH / JULIA_NFT_IMAGE_HEIGHT: raster size in pixels
- JULIA_NFT_MAX_ITERATIONS: escape-time iteration cap
- JULIA_NFT_RENDER_WORKERS: threads used to render row bands
- JULIA_NFT_PNG_COMPRESS_LEVEL: zlib level for the PNG encoder (0-9)
- JULIA_NFT_LOG_LEVEL / JULIA_NFT_ENVIRONMENT: logging setup
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


DEFAULT_NAME = "Julia"
DEFAULT_SYMBOL = "JUL"
DEFAULT_IMAGE_WIDTH = 800
DEFAULT_IMAGE_HEIGHT = 800
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_PNG_COMPRESS_LEVEL = 9

LOG_LEVEL = os.getenv("JULIA_NFT_LOG_LEVEL", "INFO")
ENVIRONMENT = os.getenv("JULIA_NFT_ENVIRONMENT", "production")


def _get_int(
    env: Mapping[str, str],
    env_var: str,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    """Read an integer setting, enforcing optional bounds."""
    raw = env.get(env_var, "").strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{env_var} must be an integer, got {raw!r}")

    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{env_var} must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigurationError(f"{env_var} must be <= {maximum}, got {value}")

    logger.debug(
        "Config override %s=%s",
        env_var,
        value,
        extra={"event": "config.override", "env_var": env_var},
    )
    return value


@dataclass(frozen=True)
class CollectionConfig:
    """Name, symbol and id issuance settings of a token collection."""

    name: str = DEFAULT_NAME
    symbol: str = DEFAULT_SYMBOL
    start_token_id: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Collection name cannot be empty")
        if not self.symbol:
            raise ConfigurationError("Collection symbol cannot be empty")
        if self.start_token_id < 0:
            raise ConfigurationError("start_token_id must be non-negative")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "CollectionConfig":
        env = os.environ if env is None else env
        return cls(
            name=env.get("JULIA_NFT_NAME", DEFAULT_NAME).strip(),
            symbol=env.get("JULIA_NFT_SYMBOL", DEFAULT_SYMBOL).strip(),
            start_token_id=_get_int(env, "JULIA_NFT_START_TOKEN_ID", 0, minimum=0),
        )


@dataclass(frozen=True)
class RenderConfig:
    """Raster size, iteration cap and encoder settings for token artwork."""

    width: int = DEFAULT_IMAGE_WIDTH
    height: int = DEFAULT_IMAGE_HEIGHT
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    workers: int = 1
    compress_level: int = DEFAULT_PNG_COMPRESS_LEVEL

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Image size must be positive, got {self.width}x{self.height}"
            )
        if self.max_iterations <= 0:
            raise ConfigurationError("max_iterations must be positive")
        if self.workers <= 0:
            raise ConfigurationError("workers must be positive")
        if not 0 <= self.compress_level <= 9:
            raise ConfigurationError("compress_level must be between 0 and 9")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RenderConfig":
        env = os.environ if env is None else env
        return cls(
            width=_get_int(env, "JULIA_NFT_IMAGE_WIDTH", DEFAULT_IMAGE_WIDTH, minimum=1),
            height=_get_int(env, "JULIA_NFT_IMAGE_HEIGHT", DEFAULT_IMAGE_HEIGHT, minimum=1),
            max_iterations=_get_int(
                env, "JULIA_NFT_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS, minimum=1
            ),
            workers=_get_int(env, "JULIA_NFT_RENDER_WORKERS", 1, minimum=1),
            compress_level=_get_int(
                env,
                "JULIA_NFT_PNG_COMPRESS_LEVEL",
                DEFAULT_PNG_COMPRESS_LEVEL,
                minimum=0,
                maximum=9,
            ),
        )
