import pytest

from src.models.dto import TransactionKind
from tests.support.factories import MintArgsFactory


@pytest.fixture
def populated(ledger):
    ids = {
        "lofi": ledger.mint(**MintArgsFactory(name="Lofi Rain", creator="alice", price=50, category="lofi")),
        "techno": ledger.mint(**MintArgsFactory(name="Warehouse", creator="alice", price=300, category="techno")),
        "jazz": ledger.mint(**MintArgsFactory(name="Blue Hour", creator="dave", price=120, category="jazz",
                                               description="late night quartet")),
    }
    ledger.buy(ids["lofi"], "bob")
    ledger.buy(ids["lofi"], "carol")
    ledger.buy(ids["jazz"], "bob")
    return ids


@pytest.mark.unit
def test_owned_and_created_filters(queries, populated):
    assert [n.id for n in queries.nfts_owned_by("bob")] == [populated["jazz"]]
    assert [n.id for n in queries.nfts_owned_by("carol")] == [populated["lofi"]]
    assert [n.id for n in queries.nfts_created_by("alice")] == [populated["lofi"], populated["techno"]]
    assert queries.nfts_owned_by("nobody") == []


@pytest.mark.unit
def test_transactions_for_returns_full_history(queries, populated):
    history = queries.transactions_for(populated["lofi"])
    assert [tx.kind for tx in history] == [TransactionKind.MINT, TransactionKind.SALE, TransactionKind.SALE]
    assert [tx.to for tx in history] == ["alice", "bob", "carol"]
    assert queries.transactions_for(999) == []


@pytest.mark.unit
def test_royalty_earnings_for_creator(queries, populated):
    earnings = queries.royalty_earnings_for("alice")
    assert len(earnings) == 1
    assert earnings[0].amount == 5
    assert earnings[0].nft_id == populated["lofi"]
    assert queries.total_royalties_for("alice") == 5
    # dave only ever sold first-hand
    assert queries.royalty_earnings_for("dave") == []
    assert queries.total_royalties_for("bob") == 0


@pytest.mark.unit
def test_browse_filters_by_category_price_and_search(queries, populated):
    assert [n.id for n in queries.browse(category="Techno")] == [populated["techno"]]
    assert {n.id for n in queries.browse(category="all")} == set(populated.values())
    assert [n.id for n in queries.browse(min_price=100, max_price=200)] == [populated["jazz"]]
    assert [n.id for n in queries.browse(search="QUARTET")] == [populated["jazz"]]
    assert queries.browse(search="nothing matches this") == []


@pytest.mark.unit
def test_browse_sort_orders(queries, populated):
    by_price = [n.id for n in queries.browse(sort="price_low")]
    assert by_price == [populated["lofi"], populated["jazz"], populated["techno"]]
    assert [n.id for n in queries.browse(sort="price_high")] == list(reversed(by_price))
    newest = [n.id for n in queries.browse()]
    assert newest == [populated["jazz"], populated["techno"], populated["lofi"]]
    assert [n.id for n in queries.browse(sort="oldest")] == list(reversed(newest))
    assert [n.name for n in queries.browse(sort="name")] == ["Blue Hour", "Lofi Rain", "Warehouse"]
    assert [n.id for n in queries.browse(sort="bogus")] == newest


@pytest.mark.unit
def test_browse_for_sale_only_and_most_viewed(ledger, queries, populated):
    ledger.set_for_sale(populated["techno"], False, "alice")
    assert populated["techno"] not in {n.id for n in queries.browse(for_sale_only=True)}

    ledger.get(populated["jazz"])
    ledger.get(populated["jazz"])
    ledger.get(populated["lofi"])
    ranked = [n.id for n in queries.browse(sort="most_viewed")]
    assert ranked[0] == populated["jazz"]
    assert ranked[1] == populated["lofi"]


@pytest.mark.unit
def test_queries_do_not_count_views(ledger, queries, populated):
    queries.browse()
    queries.nfts_owned_by("bob")
    queries.nfts_created_by("alice")
    assert all(n.view_count == 0 for n in ledger.list())


@pytest.mark.unit
def test_browse_excludes_owner_and_limits(queries, populated):
    available = queries.browse(for_sale_only=True, exclude_owner="bob", sort="oldest")
    assert [n.id for n in available] == [populated["lofi"], populated["techno"]]

    cheapest = queries.browse(sort="price_low", limit=2)
    assert [n.id for n in cheapest] == [populated["lofi"], populated["jazz"]]


@pytest.mark.unit
def test_featured_ranks_by_price_and_skips_viewer(ledger, queries, populated):
    assert [n.id for n in queries.featured()] == [populated["techno"], populated["jazz"], populated["lofi"]]
    assert [n.id for n in queries.featured("alice")] == [populated["jazz"], populated["lofi"]]
    assert [n.id for n in queries.featured(limit=1)] == [populated["techno"]]

    ledger.set_for_sale(populated["techno"], False, "alice")
    assert populated["techno"] not in [n.id for n in queries.featured()]
