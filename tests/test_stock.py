import pytest

from wheatflow.config import settings
from wheatflow.errors import NotFoundError, OrderValidationError
from wheatflow.services.stock.service import (
    add_incoming_stock,
    adjust_stock,
    list_stock_levels,
    set_low_stock_threshold,
    set_stock_quantity,
    total_stock,
)


def test_atomic_adjustment_uses_database_function(shop_db) -> None:
    assert adjust_stock("Tukdi", -5) == 95
    assert shop_db.count_calls("rpc", "adjust_stock") == 1
    assert shop_db.count_calls("stock", "update") == 0


def test_read_write_adjustment_reads_then_writes(shop_db, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "stock_adjust_mode", "read_write")

    assert adjust_stock("Sasiya D", -8) == -3
    assert shop_db.stock_quantity("Sasiya D") == -3
    assert shop_db.count_calls("rpc", "adjust_stock") == 0
    assert shop_db.count_calls("stock", "update") == 1


@pytest.mark.parametrize("mode", ["atomic", "read_write"])
def test_stock_can_go_negative(shop_db, monkeypatch: pytest.MonkeyPatch, mode) -> None:
    monkeypatch.setattr(settings, "stock_adjust_mode", mode)
    adjust_stock("Sasiya D", -6)
    assert shop_db.stock_quantity("Sasiya D") == -1


@pytest.mark.parametrize("mode", ["atomic", "read_write"])
def test_missing_row_is_skipped(shop_db, monkeypatch: pytest.MonkeyPatch, mode) -> None:
    monkeypatch.setattr(settings, "stock_adjust_mode", mode)
    assert adjust_stock("Lokwan", -3) is None


def test_zero_delta_and_manual_products_skip_the_store(shop_db) -> None:
    calls_before = len(shop_db.calls)
    assert adjust_stock("Tukdi", 0) is None
    assert adjust_stock("Other", -4) is None
    assert adjust_stock("Null", 4) is None
    assert len(shop_db.calls) == calls_before


def test_incoming_stock_adds_to_counter(shop_db) -> None:
    item = add_incoming_stock("Tukdi D", 25)
    assert item.quantity_kg == 75
    assert shop_db.stock_quantity("Tukdi D") == 75


@pytest.mark.parametrize("quantity", [0, -5])
def test_incoming_stock_requires_positive_quantity(shop_db, quantity) -> None:
    with pytest.raises(OrderValidationError):
        add_incoming_stock("Tukdi", quantity)
    assert shop_db.stock_quantity("Tukdi") == 100


def test_incoming_stock_for_unknown_product(shop_db) -> None:
    with pytest.raises(NotFoundError):
        add_incoming_stock("Lokwan", 10)


def test_manual_correction_and_threshold(shop_db) -> None:
    item = set_stock_quantity("Sasiya", 42)
    assert item.quantity_kg == 42

    item = set_low_stock_threshold("Sasiya", 50)
    assert item.low_stock_threshold == 50
    assert item.is_low

    with pytest.raises(OrderValidationError):
        set_stock_quantity("Sasiya", -1)


def test_listing_and_total(shop_db) -> None:
    levels = list_stock_levels()
    assert [item.product_type for item in levels] == ["Sasiya", "Sasiya D", "Tukdi", "Tukdi D"]
    assert total_stock() == 255
