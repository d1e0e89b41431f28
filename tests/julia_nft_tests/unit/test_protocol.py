"""
Unit tests for TokenProtocol: mutation order, events and rejected operations.
"""

import pytest

from julia_nft.core.address import ZERO_ADDRESS
from julia_nft.core.contracts.events import (
    APPROVAL,
    APPROVAL_FOR_ALL,
    TRANSFER,
    NFTEvent,
    RecordingEventSink,
)
from julia_nft.core.contracts.ledger import OwnershipLedger
from julia_nft.core.contracts.protocol import TokenProtocol
from julia_nft.core.exceptions import (
    InvalidRecipientError,
    NotAuthorizedError,
    NotMintedError,
)

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20
CAROL = "0x" + "c3" * 20


@pytest.fixture
def protocol():
    return TokenProtocol(OwnershipLedger(), RecordingEventSink(), collection="JUL")


def test_mint_updates_ledger_and_emits(protocol):
    protocol.mint(ALICE, 0)

    assert protocol.ledger.owner_of(0) == ALICE
    assert protocol.ledger.balance_of(ALICE) == 1
    assert protocol.sink.events == [
        NFTEvent(event_type=TRANSFER, from_address=ZERO_ADDRESS, to_address=ALICE, token_id=0)
    ]


def test_mint_twice_same_id_rejected(protocol):
    protocol.mint(ALICE, 0)

    with pytest.raises(InvalidRecipientError):
        protocol.mint(BOB, 0)

    assert protocol.ledger.owner_of(0) == ALICE
    assert protocol.ledger.balance_of(BOB) == 0
    assert len(protocol.sink.events) == 1


def test_transfer_moves_balance_and_clears_approval(protocol):
    protocol.mint(ALICE, 0)
    protocol.approve(ALICE, BOB, 0)

    protocol.transfer(BOB, ALICE, CAROL, 0)

    ledger = protocol.ledger
    assert ledger.owner_of(0) == CAROL
    assert ledger.balance_of(ALICE) == 0
    assert ledger.balance_of(CAROL) == 1
    assert ledger.approved_spender(0) == ZERO_ADDRESS
    assert protocol.sink.events[-1] == NFTEvent(
        event_type=TRANSFER, from_address=ALICE, to_address=CAROL, token_id=0
    )


def test_rejected_transfer_leaves_state_and_events_untouched(protocol):
    protocol.mint(ALICE, 0)
    before = protocol.ledger.to_dict()
    events_before = list(protocol.sink.events)

    with pytest.raises(NotAuthorizedError):
        protocol.transfer(CAROL, ALICE, BOB, 0)
    with pytest.raises(InvalidRecipientError):
        protocol.transfer(ALICE, ALICE, ZERO_ADDRESS, 0)

    assert protocol.ledger.to_dict() == before
    assert protocol.sink.events == events_before


def test_burn(protocol):
    protocol.mint(ALICE, 0)
    protocol.approve(ALICE, BOB, 0)

    protocol.burn(ALICE, 0)

    ledger = protocol.ledger
    assert not ledger.exists(0)
    assert ledger.balance_of(ALICE) == 0
    assert ledger.approved_spender(0) == ZERO_ADDRESS
    assert protocol.sink.events[-1] == NFTEvent(
        event_type=TRANSFER, from_address=ALICE, to_address=ZERO_ADDRESS, token_id=0
    )


def test_burn_twice_rejected(protocol):
    protocol.mint(ALICE, 0)
    protocol.burn(ALICE, 0)

    with pytest.raises(NotMintedError) as excinfo:
        protocol.burn(ALICE, 0)
    assert excinfo.value.message == "ERC721: not minted"


def test_burn_wrong_owner_rejected(protocol):
    protocol.mint(ALICE, 0)

    with pytest.raises(NotMintedError) as excinfo:
        protocol.burn(BOB, 0)
    assert excinfo.value.message == "ERC721: not minted"
    assert protocol.ledger.owner_of(0) == ALICE
    assert protocol.ledger.balance_of(ALICE) == 1
    assert len(protocol.sink.of_type(TRANSFER)) == 1


def test_burned_id_can_be_minted_again_by_protocol(protocol):
    protocol.mint(ALICE, 0)
    protocol.burn(ALICE, 0)

    protocol.mint(BOB, 0)
    assert protocol.ledger.owner_of(0) == BOB


def test_approve_event(protocol):
    protocol.mint(ALICE, 0)
    protocol.approve(ALICE, BOB, 0)

    event = protocol.sink.of_type(APPROVAL)[0]
    assert (event.from_address, event.to_address, event.token_id) == (ALICE, BOB, 0)


def test_set_approval_for_all_event(protocol):
    protocol.set_approval_for_all(ALICE, BOB, True)
    protocol.set_approval_for_all(ALICE, BOB, False)

    events = protocol.sink.of_type(APPROVAL_FOR_ALL)
    assert [e.approved for e in events] == [True, False]
    assert all(e.from_address == ALICE and e.to_address == BOB for e in events)
    assert not protocol.ledger.is_approved_for_all(ALICE, BOB)


def test_operator_approval_survives_transfer(protocol):
    protocol.mint(ALICE, 0)
    protocol.mint(ALICE, 1)
    protocol.set_approval_for_all(ALICE, BOB, True)

    protocol.transfer(BOB, ALICE, CAROL, 0)

    assert protocol.ledger.is_approved_for_all(ALICE, BOB)
    protocol.transfer(BOB, ALICE, CAROL, 1)
    assert protocol.ledger.balance_of(CAROL) == 2


def test_mint_is_logged(protocol, caplog):
    caplog.set_level("INFO", logger="julia_nft")
    protocol.mint(ALICE, 0)

    records = [r for r in caplog.records if getattr(r, "event", None) == "erc721.mint"]
    assert len(records) == 1
    assert records[0].token_id == 0
    assert records[0].collection == "JUL"
