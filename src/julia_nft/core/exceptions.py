"""
ERC721 exception hierarchy for the Julia NFT ledger.

Every error is a deterministic rejection of an invalid request. Errors are
raised before any ledger mutation happens, so a caught error always means the
ledger is unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ERC721Error(Exception):
    """Base exception for all ledger errors.

    Attributes:
        message: Fixed human-readable error description
        details: Additional context about the error (token id, addresses)
        recoverable: Always False; retrying the same request fails the same way
    """

    default_message = "ERC721: error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the host's error channel."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }


# ==================== Token Existence ====================


class NonexistentTokenError(ERC721Error):
    """Raised when a queried or transferred token has no owner."""

    def __init__(self, token_id: int, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"ERC721: nonexistent token {token_id}",
            details={"token_id": token_id},
        )
        self.token_id = token_id


class NotMintedError(NonexistentTokenError):
    """Raised by burn when the token was never minted or is already burned.

    Subclasses NonexistentTokenError so callers can handle every
    "token does not exist" outcome with one except clause.
    """

    def __init__(self, token_id: int) -> None:
        super().__init__(token_id, message="ERC721: not minted")


# ==================== Authorization ====================


class NotOwnerError(ERC721Error):
    """Caller lacks ownership or operator rights, or `from` is not the owner."""

    default_message = "ERC721: caller is not owner"


class NotAuthorizedError(ERC721Error):
    """Caller is neither owner, operator, nor the approved spender."""

    default_message = "ERC721: Not Authorized"


class InvalidRecipientError(ERC721Error):
    """Destination is the zero address, or the mint target already exists."""

    default_message = "ERC721: Invalid Recipient"


class NotApprovedForAllError(ERC721Error):
    """Reserved for operator-scoped checks that fail independently of ownership."""

    default_message = "ERC721: transfer caller is not owner nor approved for all"


# ==================== Internal Faults ====================


class LedgerCorruptionError(ERC721Error):
    """Raised when a ledger mutation would break a maintained invariant.

    Unreachable through the protocol; only direct misuse of the ledger
    mutators or a malformed snapshot passed to ``from_dict`` can trigger it.
    """

    default_message = "ERC721: ledger invariant violated"


class InvalidAddressError(ValueError):
    """Raised when an identity is not a 0x-prefixed 20-byte hex address."""

    def __init__(self, address: Any) -> None:
        super().__init__(f"Invalid address: {address!r}")
        self.address = address
