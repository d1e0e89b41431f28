"""
Address helpers for ledger identities.

Identities are Ethereum-style addresses: "0x" followed by 40 hex digits.
The ledger stores the lowercase form, so the same identity written in any
case (including EIP-55 mixed case) maps to one ledger key.
"""

from __future__ import annotations

from Crypto.Hash import keccak

from .exceptions import InvalidAddressError

ZERO_ADDRESS = "0x" + "0" * 40

_HEX_DIGITS = frozenset("0123456789abcdef")


def keccak256(data: bytes) -> bytes:
    """Compute keccak256 hash (same as Ethereum)."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def normalize_address(address: str) -> str:
    """
    Normalize an address to its canonical lowercase form.

    Args:
        address: Address in any case, with 0x or 0X prefix

    Returns:
        Lowercase 0x-prefixed address

    Raises:
        InvalidAddressError: If the address is not 0x + 40 hex digits
    """
    if not isinstance(address, str) or len(address) != 42:
        raise InvalidAddressError(address)
    if address[:2] not in ("0x", "0X"):
        raise InvalidAddressError(address)

    hex_lower = address[2:].lower()
    if not set(hex_lower) <= _HEX_DIGITS:
        raise InvalidAddressError(address)
    return "0x" + hex_lower

