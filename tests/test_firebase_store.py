from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from firebase_admin import exceptions

from basket import Basket, make_item
from errors import StoreUnavailable
from firebase_util import FirebaseBasketStore


@pytest.fixture
def root_ref():
    root = MagicMock()
    baskets = root.child.return_value
    baskets.push.return_value.key = "-NxBasket1"
    return root


def _baskets(root_ref):
    return root_ref.child.return_value


def test_save_pushes_items_as_exact_strings(root_ref):
    store = FirebaseBasketStore(root_ref)
    draft = Basket.draft([make_item("보호필름", "3000.50", 2)])

    saved = store.save(draft)

    root_ref.child.assert_called_with("baskets")
    _baskets(root_ref).push.assert_called_once_with(
        {"items": [{"name": "보호필름", "price": "3000.50", "quantity": 2, "total": "6001.00"}]}
    )
    assert saved.id == "-NxBasket1"
    assert saved.items == draft.items


def test_find_by_id_loads_items_in_order(root_ref):
    _baskets(root_ref).child.return_value.get.return_value = {
        "items": [
            {"name": "스마트폰 케이스", "price": "12000", "quantity": 1, "total": "12000"},
            {"name": "보호필름", "price": "3000", "quantity": 1, "total": "3000"},
        ]
    }

    basket = FirebaseBasketStore(root_ref).find_by_id("-NxBasket1")

    _baskets(root_ref).child.assert_called_with("-NxBasket1")
    assert [i.name for i in basket.items] == ["스마트폰 케이스", "보호필름"]
    assert basket.items[0].total == Decimal("12000")


def test_find_by_id_handles_dict_shaped_lists(root_ref):
    _baskets(root_ref).child.return_value.get.return_value = {
        "items": {
            "1": {"name": "b", "price": "2", "quantity": 1, "total": "2"},
            "0": {"name": "a", "price": "1", "quantity": 1, "total": "1"},
        }
    }

    basket = FirebaseBasketStore(root_ref).find_by_id("k")
    assert [i.name for i in basket.items] == ["a", "b"]


def test_missing_basket_is_none(root_ref):
    _baskets(root_ref).child.return_value.get.return_value = None
    assert FirebaseBasketStore(root_ref).find_by_id("-Nmissing") is None


@pytest.mark.parametrize("basket_id", ["", "a/b", "a.b", "a#b", "a$b", "a[0]"])
def test_malformed_ids_are_not_looked_up(root_ref, basket_id):
    assert FirebaseBasketStore(root_ref).find_by_id(basket_id) is None
    _baskets(root_ref).child.assert_not_called()


def test_firebase_errors_become_store_unavailable(root_ref):
    _baskets(root_ref).push.side_effect = exceptions.UnavailableError("service down")
    _baskets(root_ref).child.return_value.get.side_effect = exceptions.UnavailableError("service down")
    store = FirebaseBasketStore(root_ref)

    with pytest.raises(StoreUnavailable):
        store.save(Basket.draft([make_item("a", 1, 1)]))
    with pytest.raises(StoreUnavailable):
        store.find_by_id("-NxBasket1")


@pytest.mark.parametrize(
    "record",
    [
        {"items": [{"name": "a", "price": "1", "quantity": 1}]},
        {"items": [{"name": "a", "price": "abc", "quantity": 1, "total": "1"}]},
        {"items": {"first": {"name": "a", "price": "1", "quantity": 1, "total": "1"}}},
        "not-a-basket",
    ],
)
def test_malformed_records_become_store_unavailable(root_ref, record):
    _baskets(root_ref).child.return_value.get.return_value = record

    with pytest.raises(StoreUnavailable):
        FirebaseBasketStore(root_ref).find_by_id("-NxBasket1")
