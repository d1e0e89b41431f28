"""
Ownership ledger: the state container behind an ERC721 collection.

Holds four sparse mappings and the next-token-id counter:
- owners: tokenId -> owner
- balances: owner -> count of tokens owned
- token_approvals: tokenId -> approved spender
- operator_approvals: owner -> operator -> approved

Queries never fail except ``owner_of`` on a token without owner. Mutators
perform no authorization; callers (the transfer protocol) decide whether a
mutation is allowed before applying it. Zero-valued entries are removed so
the mappings hold only meaningful keys.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict

from ..address import ZERO_ADDRESS
from ..exceptions import LedgerCorruptionError, NonexistentTokenError


@dataclass
class OwnershipLedger:
    """Token ownership, balances and approvals for one collection."""

    owners: dict[int, str] = field(default_factory=dict)  # tokenId -> owner
    balances: dict[str, int] = field(default_factory=dict)  # owner -> count
    token_approvals: dict[int, str] = field(default_factory=dict)  # tokenId -> approved
    operator_approvals: dict[str, dict[str, bool]] = field(
        default_factory=dict
    )  # owner -> operator -> approved
    next_token_id: int = 0

    # ==================== Queries ====================

    def owner_of(self, token_id: int) -> str:
        """
        Get the owner of a token.

        Raises:
            NonexistentTokenError: If the token has no owner
        """
        owner = self.raw_owner(token_id)
        if owner == ZERO_ADDRESS:
            raise NonexistentTokenError(token_id)
        return owner

    def raw_owner(self, token_id: int) -> str:
        """Owner of a token, or the zero address if it does not exist."""
        return self.owners.get(token_id, ZERO_ADDRESS)

    def exists(self, token_id: int) -> bool:
        return token_id in self.owners

    def balance_of(self, owner: str) -> int:
        return self.balances.get(owner, 0)

    def approved_spender(self, token_id: int) -> str:
        """Approved spender of a token; zero address if none or no such token."""
        return self.token_approvals.get(token_id, ZERO_ADDRESS)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return self.operator_approvals.get(owner, {}).get(operator, False)

    def total_supply(self) -> int:
        """Number of tokens currently in existence."""
        return len(self.owners)

    def tokens_of(self, owner: str) -> list[int]:
        """Sorted ids of tokens held by ``owner``."""
        return sorted(t for t, o in self.owners.items() if o == owner)

    # ==================== Mutators ====================

    def set_owner(self, token_id: int, owner: str) -> None:
        if owner == ZERO_ADDRESS:
            self.owners.pop(token_id, None)
        else:
            self.owners[token_id] = owner

    def set_approved(self, token_id: int, spender: str) -> None:
        if spender == ZERO_ADDRESS:
            self.token_approvals.pop(token_id, None)
        else:
            self.token_approvals[token_id] = spender

    def set_operator_approval(self, owner: str, operator: str, approved: bool) -> None:
        if approved:
            self.operator_approvals.setdefault(owner, {})[operator] = True
            return

        operators = self.operator_approvals.get(owner)
        if operators is not None:
            operators.pop(operator, None)
            if not operators:
                del self.operator_approvals[owner]

    def adjust_balance(self, owner: str, delta: int) -> int:
        """
        Add ``delta`` to the balance of ``owner`` and return the new balance.

        Raises:
            LedgerCorruptionError: If the balance would become negative
        """
        balance = self.balances.get(owner, 0) + delta
        if balance < 0:
            raise LedgerCorruptionError(
                details={"owner": owner, "balance": balance - delta, "delta": delta}
            )
        if balance == 0:
            self.balances.pop(owner, None)
        else:
            self.balances[owner] = balance
        return balance

    def advance_token_id(self) -> int:
        """Return the current counter value and move the counter forward by one."""
        token_id = self.next_token_id
        self.next_token_id += 1
        return token_id

    # ==================== Serialization ====================

    def to_dict(self) -> Dict:
        """Serialize ledger state to dictionary."""
        return {
            "owners": {str(k): v for k, v in self.owners.items()},
            "balances": dict(self.balances),
            "token_approvals": {str(k): v for k, v in self.token_approvals.items()},
            "operator_approvals": {
                k: dict(v) for k, v in self.operator_approvals.items()
            },
            "next_token_id": self.next_token_id,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "OwnershipLedger":
        """
        Deserialize ledger state from dictionary.

        Raises:
            LedgerCorruptionError: If balances disagree with owners, or the
                counter would reissue an id that is already owned
        """
        ledger = cls(
            owners={int(k): v for k, v in data.get("owners", {}).items()},
            balances=dict(data.get("balances", {})),
            token_approvals={
                int(k): v for k, v in data.get("token_approvals", {}).items()
            },
            operator_approvals={
                k: dict(v) for k, v in data.get("operator_approvals", {}).items()
            },
            next_token_id=data.get("next_token_id", 0),
        )
        ledger._validate_snapshot()
        return ledger

    def _validate_snapshot(self) -> None:
        if ZERO_ADDRESS in self.owners.values():
            raise LedgerCorruptionError(details={"reason": "zero owner"})

        expected = dict(Counter(self.owners.values()))
        if self.balances != expected:
            raise LedgerCorruptionError(
                details={"reason": "balances", "balances": self.balances, "owned": expected}
            )

        if self.owners and self.next_token_id <= max(self.owners):
            raise LedgerCorruptionError(
                details={
                    "reason": "next_token_id",
                    "next_token_id": self.next_token_id,
                    "highest_token_id": max(self.owners),
                }
            )
