"""
Host interfaces consumed by the token facade.

The execution environment that invokes entry points owns caller identity.
The facade depends on the CallerContext protocol only, so tests and
embedding hosts can supply any object exposing ``caller``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .address import ZERO_ADDRESS, normalize_address


@runtime_checkable
class CallerContext(Protocol):
    """Protocol for the host's "current caller identity" accessor."""

    @property
    def caller(self) -> str:
        """Address of the identity invoking the current operation."""
        ...


@dataclass
class HostContext:
    """Mutable caller context; the host sets ``caller`` before each call."""

    caller: str = ZERO_ADDRESS

    def __post_init__(self) -> None:
        self.caller = normalize_address(self.caller)

    def switch(self, caller: str) -> "HostContext":
        """Set the current caller and return self for chaining."""
        self.caller = normalize_address(caller)
        return self
