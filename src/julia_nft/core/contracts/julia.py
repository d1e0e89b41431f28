"""
Julia collection: sequential minting and generated artwork.

Every token's image is a Julia set whose constant is derived from the token
id. Images are never stored; ``token_metadata`` re-renders them on demand
and returns an inline PNG data URI.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from ..art.encoding import JSON_MIME, render_data_uri, to_data_uri
from ..art.julia_set import julia_parameters
from ..config import CollectionConfig, RenderConfig
from ..host import CallerContext, HostContext
from .erc721 import ERC721Token
from .events import EventSink
from .ledger import OwnershipLedger

logger = logging.getLogger(__name__)


class JuliaCollection(ERC721Token):
    """ERC721 collection with open sequential minting and Julia-set artwork."""

    def __init__(
        self,
        config: Optional[CollectionConfig] = None,
        context: Optional[CallerContext] = None,
        sink: Optional[EventSink] = None,
        ledger: Optional[OwnershipLedger] = None,
        render_config: Optional[RenderConfig] = None,
    ) -> None:
        super().__init__(
            config or CollectionConfig(),
            context if context is not None else HostContext(),
            sink=sink,
            ledger=ledger,
        )
        self.render_config = render_config or RenderConfig()

    # ==================== Minting ====================

    def mint(self) -> int:
        """
        Mint the next sequential token id to the caller.

        Returns:
            Minted token ID
        """
        caller = self._caller()
        self._check_mint_policy(caller)

        token_id = self.ledger.next_token_id
        self._call("mint", self.protocol.mint, caller, token_id)
        self.ledger.advance_token_id()
        return token_id

    def _check_mint_policy(self, caller: str) -> None:
        """Hook for mint restrictions (allow-lists, one per caller). Open by default."""
        pass

    # ==================== Metadata ====================

    def token_metadata(self, token_id: int) -> str:
        """
        Inline PNG artwork for a token.

        Returns:
            ``data:image/png;base64,...`` string

        Raises:
            NonexistentTokenError: If token doesn't exist
        """
        self.owner_of(token_id)
        uri = render_data_uri(token_id, self.render_config)

        logger.debug(
            "Token metadata rendered",
            extra={
                "event": "erc721.metadata",
                "collection": self.config.symbol,
                "token_id": token_id,
                "bytes": len(uri),
            },
        )
        return uri

    def token_uri(self, token_id: int) -> str:
        """ERC721 Metadata JSON document, inlined as a data URI."""
        document = self.metadata_document(token_id)
        payload = json.dumps(document, sort_keys=True, separators=(",", ":"))
        return to_data_uri(payload.encode("utf-8"), JSON_MIME)

    def metadata_document(self, token_id: int) -> Dict:
        params = julia_parameters(token_id)
        return {
            "name": f"{self.name()} #{token_id}",
            "description": (
                f"Julia set for c = {params.c_real:.6f} {params.c_imag:+.6f}i"
            ),
            "image": self.token_metadata(token_id),
            "attributes": [
                {"trait_type": "seed", "value": params.seed},
                {"trait_type": "theta", "value": round(params.theta, 12)},
                {"trait_type": "c_real", "value": round(params.c_real, 12)},
                {"trait_type": "c_imag", "value": round(params.c_imag, 12)},
            ],
        }
