import pytest
from hypothesis import given, settings, strategies as st

from src.core import LedgerState
from src.domain.marketplace import MarketplaceLedger, compute_royalty
from src.domain.projects import ProjectStore
from tests.support.factories import MintArgsFactory
from tests.support.stubs import StepClock

_USERS = st.sampled_from(["alice", "bob", "carol", "dave"])


def _fresh():
    state = LedgerState(clock=StepClock())
    return state, MarketplaceLedger(state)


@pytest.mark.unit
@given(
    price=st.integers(min_value=0, max_value=10**12),
    percentage=st.integers(min_value=0, max_value=100),
    creator=_USERS,
    seller=_USERS,
)
def test_royalty_is_floored_share_or_zero_for_creator(price, percentage, creator, seller):
    royalty = compute_royalty(price, percentage, creator, seller)

    assert 0 <= royalty <= price
    if creator == seller:
        assert royalty == 0
    else:
        assert royalty == (price * percentage) // 100


@pytest.mark.unit
@settings(max_examples=50, deadline=None)
@given(
    price=st.integers(min_value=0, max_value=10**9),
    creator=_USERS,
    buyers=st.lists(_USERS, min_size=1, max_size=12),
)
def test_every_sale_conserves_price_and_advances_logs_together(price, creator, buyers):
    state, ledger = _fresh()
    nft_id = ledger.mint(**MintArgsFactory(creator=creator, price=price))

    for buyer in buyers:
        before = ledger.peek(nft_id)
        tx_count = len(state.transactions)
        royalty_count = len(state.royalty_payments)

        result = ledger.buy(nft_id, buyer)
        after = ledger.peek(nft_id)

        if buyer == before.current_owner:
            assert not result.ok
            assert after == before
            assert len(state.transactions) == tx_count
            assert len(state.royalty_payments) == royalty_count
            continue

        assert result.ok
        seller_amount = result.data["seller_amount"]
        royalty_amount = result.data["royalty_amount"]
        assert seller_amount + royalty_amount == price
        assert royalty_amount == (0 if before.current_owner == creator else price // 10)
        assert after.current_owner == buyer == after.sale_history[-1].to
        assert len(after.sale_history) == len(before.sale_history) + 1
        assert len(state.transactions) == tx_count + 1
        assert len(state.royalty_payments) == royalty_count + (1 if royalty_amount > 0 else 0)


@pytest.mark.unit
@given(kinds=st.lists(st.sampled_from(["project", "nft"]), max_size=20))
def test_ids_increase_per_entity_class(kinds):
    state = LedgerState(clock=StepClock())
    projects = ProjectStore(state)
    ledger = MarketplaceLedger(state)
    issued = {"project": [], "nft": []}

    for kind in kinds:
        if kind == "project":
            issued[kind].append(projects.create_project("t", "", "alice"))
        else:
            issued[kind].append(ledger.mint(**MintArgsFactory()))

    for ids in issued.values():
        assert ids == list(range(1, len(ids) + 1))
