"""
Transfer, mint and burn protocol.

Each operation asks the authorization rules for a verdict, then commits a
fixed sequence of ledger mutations, then emits an event:

    source balance -1  (skipped for mint)
    target balance +1  (skipped for burn)
    owner reassignment
    approval reset
    Transfer(from, to, id) event

Once the verdict permits the operation every later step is total, so there
is no rollback path: a denied verdict raises before the ledger is touched.
"""

from __future__ import annotations

import logging

from ..address import ZERO_ADDRESS
from . import authorization
from .events import APPROVAL, APPROVAL_FOR_ALL, TRANSFER, EventSink, NFTEvent
from .ledger import OwnershipLedger

logger = logging.getLogger(__name__)


class TokenProtocol:
    """Applies authorized mutations to an OwnershipLedger and emits events.

    Addresses passed in must already be normalized.
    """

    def __init__(self, ledger: OwnershipLedger, sink: EventSink, collection: str = "") -> None:
        self.ledger = ledger
        self.sink = sink
        self.collection = collection

    def transfer(self, caller: str, from_addr: str, to_addr: str, token_id: int) -> None:
        authorization.check_transfer(
            self.ledger, caller, from_addr, to_addr, token_id
        ).raise_if_denied()

        self._move(from_addr, to_addr, token_id)

        logger.debug(
            "ERC721 transfer",
            extra={
                "event": "erc721.transfer",
                "collection": self.collection,
                "token_id": token_id,
                "from": from_addr[:10],
                "to": to_addr[:10],
            },
        )

    def mint(self, to_addr: str, token_id: int) -> None:
        authorization.check_mint(self.ledger, to_addr, token_id).raise_if_denied()

        self._move(ZERO_ADDRESS, to_addr, token_id)

        logger.info(
            "ERC721 mint",
            extra={
                "event": "erc721.mint",
                "collection": self.collection,
                "token_id": token_id,
                "to": to_addr[:10],
            },
        )

    def burn(self, owner: str, token_id: int) -> None:
        authorization.check_burn(self.ledger, owner, token_id).raise_if_denied()

        self._move(owner, ZERO_ADDRESS, token_id)

        logger.info(
            "ERC721 burn",
            extra={
                "event": "erc721.burn",
                "collection": self.collection,
                "token_id": token_id,
            },
        )

    def approve(self, caller: str, spender: str, token_id: int) -> None:
        authorization.check_approve(self.ledger, caller, token_id).raise_if_denied()

        owner = self.ledger.owner_of(token_id)
        self.ledger.set_approved(token_id, spender)
        self.sink.emit(
            NFTEvent(
                event_type=APPROVAL,
                from_address=owner,
                to_address=spender,
                token_id=token_id,
            )
        )

        logger.debug(
            "ERC721 approval",
            extra={
                "event": "erc721.approval",
                "collection": self.collection,
                "token_id": token_id,
                "spender": spender[:10],
            },
        )

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        authorization.check_set_approval_for_all(
            self.ledger, caller, operator
        ).raise_if_denied()

        self.ledger.set_operator_approval(caller, operator, approved)
        self.sink.emit(
            NFTEvent(
                event_type=APPROVAL_FOR_ALL,
                from_address=caller,
                to_address=operator,
                approved=approved,
            )
        )

        logger.debug(
            "ERC721 operator approval",
            extra={
                "event": "erc721.approval_for_all",
                "collection": self.collection,
                "owner": caller[:10],
                "operator": operator[:10],
                "approved": approved,
            },
        )

    def _move(self, from_addr: str, to_addr: str, token_id: int) -> None:
        """Commit an authorized ownership change; zero address marks mint/burn."""
        if from_addr != ZERO_ADDRESS:
            self.ledger.adjust_balance(from_addr, -1)
        if to_addr != ZERO_ADDRESS:
            self.ledger.adjust_balance(to_addr, 1)
        self.ledger.set_owner(token_id, to_addr)
        self.ledger.set_approved(token_id, ZERO_ADDRESS)

        self.sink.emit(
            NFTEvent(
                event_type=TRANSFER,
                from_address=from_addr,
                to_address=to_addr,
                token_id=token_id,
            )
        )
