"""
Julia NFT contract components.

This module provides:
- OwnershipLedger: token -> owner, balances and approvals
- authorization: pure permit/deny rules per operation
- TokenProtocol: authorized mutations plus event emission
- ERC721Token: standard ERC721 entry points
- JuliaCollection: sequential minting and generated artwork
"""

from .erc721 import ERC721Token
from .events import EventSink, NFTEvent, RecordingEventSink
from .julia import JuliaCollection
from .ledger import OwnershipLedger
from .protocol import TokenProtocol

__all__ = [
    "OwnershipLedger",
    "TokenProtocol",
    "ERC721Token",
    "JuliaCollection",
    # Events
    "NFTEvent",
    "EventSink",
    "RecordingEventSink",
]
