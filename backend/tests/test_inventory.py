from datetime import timedelta

import pytest

from schemas.flower import FlowerUpsert
from services import inventory
from services.errors import InsufficientStock, NotFound, ValidationRejected
from conftest import NOW


def test_upsert_creates_batch_with_fresh_id_and_timestamp(make_flower):
    flowers = [make_flower()]
    updated, batch = inventory.upsert_flower(flowers, FlowerUpsert(name="Orchid", price="12.5", stock=4), NOW)

    assert len(updated) == 2
    assert updated[-1] == batch
    assert batch.id != "f1"
    assert batch.added_at == NOW
    assert batch.price == 12.5
    assert batch.stock == 4


def test_upsert_applies_defaults_for_missing_or_invalid_numbers():
    _, batch = inventory.upsert_flower(
        [], FlowerUpsert(name="Daisy", price=1, stock="lots", threshold=None, shelf_life_days=0), NOW
    )
    assert batch.stock == 0
    assert batch.threshold == 5
    assert batch.shelf_life_days == 7
    assert batch.image.startswith("https://picsum.photos/")
    assert batch.description == ""


def test_upsert_edit_keeps_original_added_at(make_flower):
    received = NOW - timedelta(days=3)
    flowers = [make_flower(added_at=received), make_flower(id="f2", name="Iris")]

    updated, batch = inventory.upsert_flower(
        flowers, FlowerUpsert(id="f1", name="Peony XL", price=3, stock=9), NOW
    )

    assert [f.id for f in updated] == ["f1", "f2"]
    assert batch.name == "Peony XL"
    assert batch.added_at == received
    assert updated[0].stock == 9


def test_upsert_with_unknown_id_inserts_new_batch(make_flower):
    updated, batch = inventory.upsert_flower([make_flower()], FlowerUpsert(id="ghost", name="Aster", price=2), NOW)
    assert len(updated) == 2
    assert batch.id != "ghost"


@pytest.mark.parametrize("payload", [
    FlowerUpsert(name="", price=2),
    FlowerUpsert(name="   ", price=2),
    FlowerUpsert(price=2),
    FlowerUpsert(name="Rose"),
    FlowerUpsert(name="Rose", price="abc"),
    FlowerUpsert(name="Rose", price=-1),
    FlowerUpsert(name="Rose", price="nan"),
])
def test_upsert_rejects_missing_name_or_bad_price(make_flower, payload):
    flowers = [make_flower()]
    with pytest.raises(ValidationRejected):
        inventory.upsert_flower(flowers, payload, NOW)
    assert len(flowers) == 1


def test_zero_price_is_allowed():
    _, batch = inventory.upsert_flower([], FlowerUpsert(name="Free fern", price=0), NOW)
    assert batch.price == 0


def test_remove_is_unconditional(make_flower):
    flowers = [make_flower(), make_flower(id="f2")]
    assert [f.id for f in inventory.remove_flower(flowers, "f1")] == ["f2"]
    assert inventory.remove_flower(flowers, "missing") == flowers


def test_decrement_stock_never_goes_negative(make_flower):
    flowers = [make_flower(stock=3)]
    assert inventory.decrement_stock(flowers, "f1", 3)[0].stock == 0
    with pytest.raises(InsufficientStock):
        inventory.decrement_stock(flowers, "f1", 4)
    assert flowers[0].stock == 3


def test_batched_decrement_is_all_or_nothing(make_flower):
    flowers = [make_flower(id="a", stock=5), make_flower(id="b", stock=1)]
    with pytest.raises(InsufficientStock):
        inventory.decrement_stock_many(flowers, {"a": 2, "b": 2})
    assert [f.stock for f in flowers] == [5, 1]

    updated = inventory.decrement_stock_many(flowers, {"a": 2, "b": 1})
    assert [f.stock for f in updated] == [3, 0]


def test_decrement_of_deleted_batch_fails(make_flower):
    with pytest.raises(InsufficientStock):
        inventory.decrement_stock_many([make_flower()], {"gone": 1})


def test_days_left_and_status(make_flower):
    fresh = make_flower(added_at=NOW - timedelta(days=2), shelf_life_days=7)
    expired = make_flower(added_at=NOW - timedelta(days=8), shelf_life_days=6)

    assert inventory.days_left(fresh, NOW) == pytest.approx(5.0)
    assert inventory.to_out(fresh, NOW).status == "Fresh"
    assert inventory.to_out(expired, NOW).status == "EXPIRED"
    assert inventory.to_out(expired, NOW).days_left == -2.0


def test_view_is_read_only(make_flower):
    view = inventory.to_view(make_flower())
    with pytest.raises(Exception):
        view.stock = 0
    with pytest.raises(NotFound):
        inventory.get_flower([], "f1")
