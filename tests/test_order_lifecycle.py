from datetime import date

import pytest

from wheatflow.errors import NotFoundError, OrderValidationError
from wheatflow.models.domain import GroupKey
from wheatflow.schemas.orders import OrderCreateRequest, ProductLineInput
from wheatflow.services.orders.entry import create_order
from wheatflow.services.orders.lifecycle import (
    delete_logical_order,
    delete_order_line,
    list_logical_orders,
    update_group_status,
)

DAY = date(2026, 3, 1)


@pytest.fixture
def order_key(shop_db):
    response = create_order(
        OrderCreateRequest(
            customer_name="Ravi",
            phone="9000000001",
            area_id="area-a",
            sub_area="North",
            amount_paid=0,
            lines=[
                ProductLineInput(product_type="Tukdi", quantity=5, rate=20),
                ProductLineInput(product_type="Sasiya", quantity=2, rate=15),
            ],
        ),
        today=DAY,
    )
    return GroupKey(response.customer_id, DAY, "North")


def test_status_update_is_a_single_call(shop_db, order_key) -> None:
    updates_before = shop_db.count_calls("orders", "update")

    group = update_group_status(order_key, "delivered")

    assert shop_db.count_calls("orders", "update") == updates_before + 1
    assert group.status == "delivered"
    assert {row["status"] for row in shop_db.rows("orders")} == {"delivered"}


def test_unknown_status_is_rejected(shop_db, order_key) -> None:
    with pytest.raises(OrderValidationError):
        update_group_status(order_key, "shipped")


def test_delete_group_restores_stock(shop_db, order_key) -> None:
    line_ids, restored = delete_logical_order(order_key)

    assert len(line_ids) == 2
    assert restored == {"Tukdi": 5.0, "Sasiya": 2.0}
    assert shop_db.rows("orders") == []
    assert shop_db.stock_quantity("Tukdi") == 100
    assert shop_db.stock_quantity("Sasiya") == 100
    with pytest.raises(NotFoundError):
        delete_logical_order(order_key)


def test_delete_single_line_restores_its_stock(shop_db, order_key) -> None:
    sasiya = shop_db.rows("orders", product_type="Sasiya")[0]

    restored = delete_order_line(sasiya["id"])

    assert restored == {"Sasiya": 2.0}
    assert shop_db.stock_quantity("Sasiya") == 100
    assert shop_db.stock_quantity("Tukdi") == 95
    assert len(list_logical_orders()) == 1


def test_delete_missing_line_is_not_found(shop_db) -> None:
    with pytest.raises(NotFoundError):
        delete_order_line("orders-999")


def test_sentinel_delete_touches_no_stock(shop_db) -> None:
    shop_db.seed("customers", {"id": "cust-9", "name": "Kiran", "phone": "9000000009"})
    shop_db.seed("orders", {
        "customer_id": "cust-9",
        "product_type": "Null",
        "quantity_kg": 0,
        "rate_per_kg": 0,
        "total_amount": 0,
        "amount_paid": 0,
        "status": "pending",
        "order_date": "2026-01-01",
        "delivery_date": "2026-01-01",
    })

    _, restored = delete_logical_order(GroupKey("cust-9", date(2026, 1, 1), ""))

    assert restored == {}
    assert shop_db.count_calls("rpc", "adjust_stock") == 0
