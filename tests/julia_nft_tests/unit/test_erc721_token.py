"""
Tests for the ERC721 facade: caller context, scenarios and interface detection.
"""

import logging

import pytest

from julia_nft.core.address import ZERO_ADDRESS
from julia_nft.core.config import CollectionConfig
from julia_nft.core.contracts.erc721 import (
    ERC165_INTERFACE_ID,
    ERC721_INTERFACE_ID,
    ERC721_METADATA_INTERFACE_ID,
    ERC721Token,
    function_selector,
)
from julia_nft.core.contracts.events import TRANSFER, RecordingEventSink
from julia_nft.core.exceptions import (
    InvalidAddressError,
    InvalidRecipientError,
    NonexistentTokenError,
    NotAuthorizedError,
    NotMintedError,
    NotOwnerError,
)
from julia_nft.core.host import CallerContext, HostContext

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20
CAROL = "0x" + "c3" * 20
DAVE = "0x" + "d4" * 20


@pytest.fixture
def token():
    token = ERC721Token(CollectionConfig(name="Julia", symbol="JUL"), HostContext(ALICE))
    token.protocol.mint(ALICE, 0)
    token.protocol.mint(ALICE, 1)
    return token


def test_name_and_symbol():
    token = ERC721Token(CollectionConfig(name="Julia", symbol="JUL"), HostContext())
    assert token.name() == "Julia"
    assert token.symbol() == "JUL"


def test_default_sink_records_events(token):
    assert isinstance(token.sink, RecordingEventSink)
    assert len(token.sink.of_type(TRANSFER)) == 2


def test_host_context_satisfies_protocol():
    assert isinstance(HostContext(ALICE), CallerContext)


def test_round_trip_scenario(token):
    token.context.switch(ALICE)
    token.approve(BOB, 0)
    assert token.get_approved(0) == BOB

    token.context.switch(BOB)
    token.transfer_from(ALICE, CAROL, 0)

    assert token.owner_of(0) == CAROL
    assert token.balance_of(ALICE) == 1
    assert token.balance_of(CAROL) == 1
    assert token.get_approved(0) == ZERO_ADDRESS

    with pytest.raises(NotOwnerError):
        token.transfer_from(ALICE, CAROL, 0)


def test_operator_scenario(token):
    token.context.switch(ALICE)
    token.set_approval_for_all(BOB, True)
    assert token.is_approved_for_all(ALICE, BOB)

    token.context.switch(BOB)
    token.transfer_from(ALICE, DAVE, 0)
    assert token.owner_of(0) == DAVE

    token.context.switch(ALICE)
    token.set_approval_for_all(BOB, False)

    token.context.switch(BOB)
    with pytest.raises(NotAuthorizedError) as excinfo:
        token.transfer_from(ALICE, DAVE, 1)
    assert excinfo.value.message == "ERC721: Not Authorized"
    assert token.owner_of(1) == ALICE


def test_operator_may_approve_on_owners_behalf(token):
    token.context.switch(ALICE)
    token.set_approval_for_all(BOB, True)

    token.context.switch(BOB)
    token.approve(CAROL, 1)
    assert token.get_approved(1) == CAROL


def test_stranger_cannot_approve(token):
    token.context.switch(CAROL)
    with pytest.raises(NotOwnerError) as excinfo:
        token.approve(CAROL, 0)
    assert excinfo.value.message == "ERC721: caller is not owner"


def test_nonexistent_query(token):
    with pytest.raises(NonexistentTokenError) as excinfo:
        token.owner_of(999)
    assert excinfo.value.token_id == 999


def test_get_approved_for_missing_token_is_zero(token):
    assert token.get_approved(999) == ZERO_ADDRESS


def test_wrong_from_and_zero_to_reports_not_owner(token):
    token.context.switch(ALICE)
    with pytest.raises(NotOwnerError):
        token.transfer_from(BOB, ZERO_ADDRESS, 0)


def test_transfer_to_zero_rejected(token):
    token.context.switch(ALICE)
    with pytest.raises(InvalidRecipientError) as excinfo:
        token.transfer_from(ALICE, ZERO_ADDRESS, 0)
    assert excinfo.value.message == "ERC721: Invalid Recipient"


def test_safe_transfer_from_with_and_without_data(token):
    token.context.switch(ALICE)
    token.safe_transfer_from(ALICE, BOB, 0)
    token.safe_transfer_from(ALICE, CAROL, 1, b"\x01\x02")

    assert token.owner_of(0) == BOB
    assert token.owner_of(1) == CAROL


def test_safe_transfer_applies_same_checks(token):
    token.context.switch(CAROL)
    with pytest.raises(NotAuthorizedError):
        token.safe_transfer_from(ALICE, BOB, 0, b"data")


def _upper(address):
    return "0x" + address[2:].upper()


def test_addresses_are_case_insensitive(token):
    token.context.switch(_upper(ALICE))
    token.transfer_from(_upper(ALICE), _upper(BOB), 0)

    assert token.owner_of(0) == BOB
    assert token.balance_of(_upper(BOB)) == 1


def test_malformed_address_rejected(token):
    with pytest.raises(InvalidAddressError):
        token.balance_of("not-an-address")

    token.context.switch(ALICE)
    with pytest.raises(InvalidAddressError):
        token.transfer_from(ALICE, "0x1234", 0)
    assert token.owner_of(0) == ALICE


class TestBurn:
    def test_owner_burns(self, token):
        token.context.switch(ALICE)
        token.approve(BOB, 0)

        token.burn(0)

        assert token.balance_of(ALICE) == 1
        assert token.get_approved(0) == ZERO_ADDRESS
        assert token.total_supply() == 1
        with pytest.raises(NonexistentTokenError):
            token.owner_of(0)

    def test_approved_spender_burns(self, token):
        token.context.switch(ALICE)
        token.approve(BOB, 0)

        token.context.switch(BOB)
        token.burn(0)
        assert token.balance_of(ALICE) == 1
        assert token.sink.events[-1].from_address == ALICE

    def test_stranger_cannot_burn(self, token):
        token.context.switch(CAROL)
        with pytest.raises(NotOwnerError):
            token.burn(0)
        assert token.owner_of(0) == ALICE

    def test_burn_missing_token(self, token):
        token.context.switch(ALICE)
        with pytest.raises(NotMintedError):
            token.burn(77)


def test_tokens_of_owner(token):
    assert token.tokens_of_owner(ALICE) == [0, 1]
    assert token.tokens_of_owner(BOB) == []


class TestInterfaces:
    def test_known_selectors(self):
        assert function_selector("transferFrom(address,address,uint256)").hex() == "23b872dd"
        assert function_selector("balanceOf(address)").hex() == "70a08231"

    def test_interface_ids(self):
        assert ERC165_INTERFACE_ID.hex() == "01ffc9a7"
        assert ERC721_INTERFACE_ID.hex() == "80ac58cd"
        assert ERC721_METADATA_INTERFACE_ID.hex() == "5b5e139f"

    def test_supports_interface(self, token):
        assert token.supports_interface(bytes.fromhex("01ffc9a7"))
        assert token.supports_interface(bytes.fromhex("80ac58cd"))
        assert token.supports_interface(bytes.fromhex("5b5e139f"))
        assert not token.supports_interface(bytes.fromhex("ffffffff"))
        assert not token.supports_interface(bytes.fromhex("d9b67a26"))


def test_rejection_is_logged(token, caplog):
    caplog.set_level(logging.DEBUG, logger="julia_nft")
    token.context.switch(CAROL)

    with pytest.raises(NotAuthorizedError):
        token.transfer_from(ALICE, BOB, 0)

    events = [getattr(r, "event", None) for r in caplog.records]
    assert "erc721.transfer_from.rejected" in events
