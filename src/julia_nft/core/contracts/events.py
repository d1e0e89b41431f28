"""
ERC721 events and the sink they are emitted to.

The wire encoding of events is the host's concern; the ledger only hands
NFTEvent records to whatever EventSink it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..address import keccak256

TRANSFER = "Transfer"
APPROVAL = "Approval"
APPROVAL_FOR_ALL = "ApprovalForAll"

# Event signatures
EVENT_SIGNATURES = {
    TRANSFER: "Transfer(address,address,uint256)",
    APPROVAL: "Approval(address,address,uint256)",
    APPROVAL_FOR_ALL: "ApprovalForAll(address,address,bool)",
}


@dataclass(frozen=True)
class NFTEvent:
    """Represents an ERC721 event.

    For Approval, ``from_address`` is the owner and ``to_address`` the
    spender. For ApprovalForAll they are owner and operator, and
    ``token_id`` is unused.
    """

    event_type: str  # "Transfer", "Approval", "ApprovalForAll"
    from_address: str
    to_address: str
    token_id: int = 0
    approved: bool = False  # For ApprovalForAll

    @property
    def topic(self) -> bytes:
        """keccak256 of the event signature (log topic 0)."""
        return keccak256(EVENT_SIGNATURES[self.event_type].encode("ascii"))


@runtime_checkable
class EventSink(Protocol):
    """Protocol for the host's event/log sink."""

    def emit(self, event: NFTEvent) -> None:
        ...


@dataclass
class RecordingEventSink:
    """Event sink that keeps every emitted event in memory, in order."""

    events: list[NFTEvent] = field(default_factory=list)

    def emit(self, event: NFTEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list[NFTEvent]:
        return [event for event in self.events if event.event_type == event_type]

    def clear(self) -> None:
        self.events.clear()
