"""
Julia NFT - Non-fungible token ledger with generated Julia-set artwork.

Main Components:
- Ledger: token ownership, balances and approvals
- Authorization: rules deciding who may approve, transfer, mint and burn
- Protocol: authorized ledger mutations with Transfer/Approval events
- Art: seeded Julia-set renderer, PNG encoder and inline data URIs
- Facade: ERC721 entry points and the sequential-mint Julia collection
"""

__version__ = "0.1.0"
__author__ = "Julia NFT Development Team"

__all__ = []
