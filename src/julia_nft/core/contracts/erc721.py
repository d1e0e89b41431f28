"""
ERC721 Non-Fungible Token (NFT) contract facade.

Combines the ownership ledger, the authorization rules and the transfer
protocol behind the standard ERC721 entry points (EIP-721):
- Queries: name, symbol, ownerOf, balanceOf, getApproved, isApprovedForAll
- Mutations: approve, setApprovalForAll, transferFrom, safeTransferFrom, burn
- Interface detection (ERC-165)

The caller of every mutation is read from an injected CallerContext, and
events go to an injected EventSink, so the facade runs without a host.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Callable, Iterable, Optional

from ..address import keccak256, normalize_address
from ..config import CollectionConfig
from ..exceptions import ERC721Error, NotOwnerError
from ..host import CallerContext
from .authorization import is_approved_or_owner
from .events import EventSink, RecordingEventSink
from .ledger import OwnershipLedger
from .protocol import TokenProtocol

logger = logging.getLogger(__name__)

# ERC721 function signatures, grouped by the interface that declares them
ERC165_FUNCTIONS = ("supportsInterface(bytes4)",)
ERC721_FUNCTIONS = (
    "balanceOf(address)",
    "ownerOf(uint256)",
    "safeTransferFrom(address,address,uint256,bytes)",
    "safeTransferFrom(address,address,uint256)",
    "transferFrom(address,address,uint256)",
    "approve(address,uint256)",
    "setApprovalForAll(address,bool)",
    "getApproved(uint256)",
    "isApprovedForAll(address,address)",
)
ERC721_METADATA_FUNCTIONS = ("name()", "symbol()", "tokenURI(uint256)")


def function_selector(signature: str) -> bytes:
    """First four bytes of keccak256(signature)."""
    return keccak256(signature.encode("ascii"))[:4]


def interface_id(signatures: Iterable[str]) -> bytes:
    """ERC-165 interface id: XOR of the selectors of all functions."""
    value = reduce(
        lambda acc, sig: acc ^ int.from_bytes(function_selector(sig), "big"),
        signatures,
        0,
    )
    return value.to_bytes(4, "big")


ERC165_INTERFACE_ID = interface_id(ERC165_FUNCTIONS)  # 0x01ffc9a7
ERC721_INTERFACE_ID = interface_id(ERC721_FUNCTIONS)  # 0x80ac58cd
ERC721_METADATA_INTERFACE_ID = interface_id(ERC721_METADATA_FUNCTIONS)  # 0x5b5e139f


class ERC721Token:
    """
    ERC721 collection bound to a host caller context and event sink.

    Attributes:
        config: Collection name, symbol and first token id
        context: Host accessor for the current caller
        sink: Destination of Transfer/Approval/ApprovalForAll events
        ledger: The collection's single OwnershipLedger instance
    """

    SUPPORTED_INTERFACES = frozenset(
        {ERC165_INTERFACE_ID, ERC721_INTERFACE_ID, ERC721_METADATA_INTERFACE_ID}
    )

    def __init__(
        self,
        config: CollectionConfig,
        context: CallerContext,
        sink: Optional[EventSink] = None,
        ledger: Optional[OwnershipLedger] = None,
    ) -> None:
        self.config = config
        self.context = context
        self.sink = sink if sink is not None else RecordingEventSink()
        self.ledger = (
            ledger if ledger is not None
            else OwnershipLedger(next_token_id=config.start_token_id)
        )
        self.protocol = TokenProtocol(self.ledger, self.sink, collection=config.symbol)

    # ==================== View Functions ====================

    def name(self) -> str:
        return self.config.name

    def symbol(self) -> str:
        return self.config.symbol

    def owner_of(self, token_id: int) -> str:
        """
        Get the owner of an NFT.

        Raises:
            NonexistentTokenError: If token doesn't exist
        """
        return self.ledger.owner_of(token_id)

    def balance_of(self, owner: str) -> int:
        return self.ledger.balance_of(normalize_address(owner))

    def get_approved(self, token_id: int) -> str:
        """Approved address for a token (zero address if none)."""
        return self.ledger.approved_spender(token_id)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return self.ledger.is_approved_for_all(
            normalize_address(owner), normalize_address(operator)
        )

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def tokens_of_owner(self, owner: str) -> list[int]:
        return self.ledger.tokens_of(normalize_address(owner))

    def supports_interface(self, interface_id: bytes) -> bool:
        """ERC-165 interface detection for ERC-165, ERC-721 and ERC-721 Metadata."""
        return bytes(interface_id) in self.SUPPORTED_INTERFACES

    # ==================== State-Changing Functions ====================

    def approve(self, spender: str, token_id: int) -> None:
        """Approve ``spender`` to transfer a single token on the owner's behalf."""
        self._call(
            "approve",
            self.protocol.approve,
            self._caller(),
            normalize_address(spender),
            token_id,
        )

    def set_approval_for_all(self, operator: str, approved: bool) -> None:
        """Grant or revoke blanket transfer rights over all of the caller's tokens."""
        self._call(
            "set_approval_for_all",
            self.protocol.set_approval_for_all,
            self._caller(),
            normalize_address(operator),
            bool(approved),
        )

    def transfer_from(self, from_addr: str, to_addr: str, token_id: int) -> None:
        """
        Transfer an NFT.

        Args:
            from_addr: Current owner
            to_addr: New owner
            token_id: Token ID

        Raises:
            NonexistentTokenError: If token doesn't exist
            NotOwnerError: If from_addr does not own the token
            InvalidRecipientError: If to_addr is the zero address
            NotAuthorizedError: If the caller is not owner, operator or approved
        """
        self._call(
            "transfer_from",
            self.protocol.transfer,
            self._caller(),
            normalize_address(from_addr),
            normalize_address(to_addr),
            token_id,
        )

    def safe_transfer_from(
        self,
        from_addr: str,
        to_addr: str,
        token_id: int,
        data: bytes = b"",
    ) -> None:
        """
        Transfer an NFT with optional data for the receiver.

        Receiver-hook checks (onERC721Received) belong to the host, which knows
        whether ``to_addr`` is a contract; the ledger applies the same checks
        as transfer_from.
        """
        self.transfer_from(from_addr, to_addr, token_id)

    def burn(self, token_id: int) -> None:
        """
        Burn an NFT. The caller must be the owner, an operator of the owner,
        or the token's approved spender.
        """
        self._call("burn", self._burn, self._caller(), token_id)

    # ==================== Helpers ====================

    def _burn(self, caller: str, token_id: int) -> None:
        if self.ledger.exists(token_id) and not is_approved_or_owner(
            self.ledger, caller, token_id
        ):
            raise NotOwnerError(details={"token_id": token_id, "caller": caller})
        self.protocol.burn(self.ledger.raw_owner(token_id), token_id)

    def _caller(self) -> str:
        return normalize_address(self.context.caller)

    def _call(self, operation: str, func: Callable[..., None], *args: Any) -> None:
        try:
            func(*args)
        except ERC721Error as exc:
            logger.debug(
                "ERC721 %s rejected: %s",
                operation,
                exc.message,
                extra={
                    "event": f"erc721.{operation}.rejected",
                    "collection": self.config.symbol,
                    "error": type(exc).__name__,
                },
            )
            raise
