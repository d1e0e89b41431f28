"""
Authorization rules for ERC721 operations.

Every check is a pure function of the caller, the operation arguments and
reads from the ledger. Nothing here mutates state. A check returns a
Verdict; a denied verdict carries the error the caller must observe.

Transfer checks run in a fixed order and the first failing check decides
the error:
1. the token exists                              -> NonexistentTokenError
   and ``from`` is its owner                      -> NotOwnerError
2. ``to`` is not the zero address                 -> InvalidRecipientError
3. caller is owner, operator or approved spender  -> NotAuthorizedError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..address import ZERO_ADDRESS
from ..exceptions import (
    ERC721Error,
    InvalidRecipientError,
    NonexistentTokenError,
    NotAuthorizedError,
    NotMintedError,
    NotOwnerError,
)
from .ledger import OwnershipLedger


@dataclass(frozen=True)
class Verdict:
    """Outcome of an authorization check."""

    permitted: bool
    error: Optional[ERC721Error] = None

    def raise_if_denied(self) -> None:
        if not self.permitted:
            raise self.error


PERMIT = Verdict(permitted=True)


def deny(error: ERC721Error) -> Verdict:
    return Verdict(permitted=False, error=error)


def is_approved_or_owner(ledger: OwnershipLedger, spender: str, token_id: int) -> bool:
    """Check if spender is owner, operator or approved spender of an existing token."""
    owner = ledger.raw_owner(token_id)
    if owner == ZERO_ADDRESS:
        return False
    return (
        spender == owner
        or ledger.is_approved_for_all(owner, spender)
        or ledger.approved_spender(token_id) == spender
    )


def check_approve(ledger: OwnershipLedger, caller: str, token_id: int) -> Verdict:
    """Owner or one of the owner's operators may set the approved spender."""
    owner = ledger.raw_owner(token_id)
    if owner == ZERO_ADDRESS:
        return deny(NonexistentTokenError(token_id))
    if caller != owner and not ledger.is_approved_for_all(owner, caller):
        return deny(NotOwnerError(details={"token_id": token_id, "caller": caller}))
    return PERMIT


def check_set_approval_for_all(
    ledger: OwnershipLedger, caller: str, operator: str
) -> Verdict:
    """Always permitted: the caller only ever grants rights over its own tokens."""
    return PERMIT


def check_transfer(
    ledger: OwnershipLedger,
    caller: str,
    from_addr: str,
    to_addr: str,
    token_id: int,
) -> Verdict:
    owner = ledger.raw_owner(token_id)
    if owner == ZERO_ADDRESS:
        return deny(NonexistentTokenError(token_id))
    if owner != from_addr:
        return deny(NotOwnerError(details={"token_id": token_id, "from": from_addr}))

    if to_addr == ZERO_ADDRESS:
        return deny(InvalidRecipientError(details={"token_id": token_id}))

    if (
        caller != from_addr
        and not ledger.is_approved_for_all(from_addr, caller)
        and ledger.approved_spender(token_id) != caller
    ):
        return deny(NotAuthorizedError(details={"token_id": token_id, "caller": caller}))

    return PERMIT


def check_mint(ledger: OwnershipLedger, to_addr: str, token_id: int) -> Verdict:
    """A mint needs a non-zero recipient and a token id nobody owns yet."""
    if to_addr == ZERO_ADDRESS or ledger.exists(token_id):
        return deny(InvalidRecipientError(details={"token_id": token_id, "to": to_addr}))
    return PERMIT


def check_burn(ledger: OwnershipLedger, owner: str, token_id: int) -> Verdict:
    """Burn needs the token to be held by ``owner``; any mismatch reads as not minted."""
    current = ledger.raw_owner(token_id)
    if current == ZERO_ADDRESS or current != owner:
        return deny(NotMintedError(token_id))
    return PERMIT
