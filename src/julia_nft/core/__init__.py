"""
Julia NFT Core Module

Core functionality for the Julia NFT collection including:
- Addresses, errors and configuration
- Host interfaces (caller context)
- Structured logging setup

Contract logic lives in ``core.contracts`` and artwork in ``core.art``.
"""

__all__ = []
