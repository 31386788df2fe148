import pytest

from clarus.mandate import MandatePallet, MandateResult, Pays, RootOp
from clarus.token import TokenPallet
from clarus.token_types import BadOriginError, TokenError, TokenErrorKind

COUNCIL = "council"


def _pallet():
    return MandatePallet(lambda origin: origin == COUNCIL)


def test_mandate_dispatches_as_root_for_free():
    pallet = _pallet()
    seen = []
    result = pallet.mandate(COUNCIL, seen.append)
    assert seen == [MandatePallet.ROOT]
    assert result == MandateResult(pays_fee=Pays.No)
    assert pallet.take_events() == [RootOp(None)]


def test_mandate_records_call_error():
    pallet = _pallet()
    error = TokenError(TokenErrorKind.NoPermission)

    def failing(origin):
        raise error

    result = pallet.mandate(COUNCIL, failing)
    assert result.pays_fee is Pays.No
    events = pallet.take_events()
    assert events == [RootOp(error)]
    assert not events[0].succeeded


def test_mandate_rejects_other_origins():
    pallet = _pallet()
    seen = []
    with pytest.raises(BadOriginError):
        pallet.mandate("stranger", seen.append)
    assert seen == []
    assert pallet.take_events() == []


def test_mandate_drives_token_calls():
    token = TokenPallet()
    token.create("admin", 1, "issuer", 1, b"T", b"T")
    pallet = _pallet()
    pallet.mandate(COUNCIL, lambda origin: token.mint("issuer", 1, "alice", 25))
    assert token.balance_of(1, "alice") == 25
    assert pallet.take_events()[0].succeeded


def test_root_origin_is_not_signed_for_token_calls():
    token = TokenPallet()
    pallet = MandatePallet(lambda origin: origin == COUNCIL)
    pallet.mandate(COUNCIL, lambda origin: token.create(None, 1, "issuer", 1, b"T", b"T"))
    (event,) = pallet.take_events()
    assert isinstance(event.result, BadOriginError)
    assert token.asset(1) is None