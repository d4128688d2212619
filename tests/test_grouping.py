from datetime import date, datetime, timezone

from wheatflow.models.domain import GroupKey, OrderLine
from wheatflow.services.orders.grouping import (
    filter_logical_orders,
    find_group,
    group_order_lines,
    split_by_year,
)


def _line(line_id: str, customer: str = "c1", product: str = "Tukdi", qty: float = 5, rate: float = 20,
          paid: float = 0, delivery: date | None = date(2026, 3, 1), sub_area: str | None = "North",
          number: int | None = None, status: str = "pending", name: str = "Ravi", phone: str = "9000000001",
          area_id: str = "area-a", order_date: date | None = None) -> OrderLine:
    return OrderLine(
        id=line_id,
        customer_id=customer,
        product_type=product,
        quantity_kg=qty,
        rate_per_kg=rate,
        total_amount=qty * rate,
        amount_paid=paid,
        order_date=order_date or delivery,
        delivery_date=delivery,
        sub_area=sub_area,
        status=status,
        order_number=number,
        customer_name=name,
        customer_phone=phone,
        customer_area_id=area_id,
        area_name="Rajkot",
    )


def test_lines_of_one_visit_form_one_group() -> None:
    lines = [
        _line("l1", product="Tukdi", qty=5, rate=20, paid=100, number=7),
        _line("l2", product="Sasiya", qty=2, rate=15, paid=10, number=8),
    ]
    groups = group_order_lines(lines)

    assert len(groups) == 1
    group = groups[0]
    assert group.key == GroupKey("c1", date(2026, 3, 1), "North")
    assert group.total_amount == 130
    assert group.total_paid == 110
    assert group.pending == 20
    assert not group.is_paid
    assert group.total_quantity == 7
    assert group.order_number == 7
    assert group.products["Tukdi"].quantity == 5
    assert group.products["Sasiya"].amount == 30
    assert group.line_ids == ["l1", "l2"]


def test_sub_area_and_date_split_groups() -> None:
    lines = [
        _line("l1", sub_area="North"),
        _line("l2", sub_area="South"),
        _line("l3", delivery=date(2026, 3, 2)),
        _line("l4", sub_area=None),
        _line("l5", customer="c2"),
    ]
    assert len(group_order_lines(lines)) == 5


def test_date_falls_back_to_order_then_created_date() -> None:
    undelivered = _line("l1", delivery=None, order_date=date(2026, 2, 1))
    undated = _line("l2", delivery=None, customer="c2")
    undated.order_date = None
    undated.created_at = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)

    groups = {group.customer_id: group for group in group_order_lines([undelivered, undated])}
    assert groups["c1"].date == date(2026, 2, 1)
    assert groups["c2"].date == date(2026, 1, 15)


def test_sentinel_lines_anchor_but_do_not_count() -> None:
    lines = [
        _line("l1", product="Null", qty=0, rate=0),
        _line("l2", product="Tukdi", qty=2, rate=20, paid=40),
    ]
    group = group_order_lines(lines)[0]

    assert group.line_ids == ["l1", "l2"]
    assert group.total_amount == 40
    assert group.total_quantity == 2
    assert group.is_paid


def test_sentinel_only_group_has_zero_totals() -> None:
    group = group_order_lines([_line("l1", product="Null", qty=0, rate=0)])[0]
    assert group.total_amount == 0
    assert group.total_quantity == 0
    assert all(item.quantity == 0 for item in group.products.values())


def test_unknown_products_fold_into_other() -> None:
    group = group_order_lines([_line("l1", product="Lokwan", qty=3, rate=40)])[0]
    assert group.products["Other"].quantity == 3
    assert group.products["Other"].amount == 120


def test_groups_sorted_newest_first() -> None:
    lines = [
        _line("l1", delivery=date(2026, 1, 5)),
        _line("l2", delivery=date(2026, 3, 5)),
        _line("l3", delivery=date(2025, 12, 31)),
    ]
    dates = [group.date for group in group_order_lines(lines)]
    assert dates == [date(2026, 3, 5), date(2026, 1, 5), date(2025, 12, 31)]


def test_grouping_is_idempotent_and_preserves_totals() -> None:
    lines = [
        _line("l1", qty=5, rate=20, paid=50),
        _line("l2", product="Sasiya", qty=1, rate=15),
        _line("l3", customer="c2", qty=4, rate=25, paid=100, delivery=date(2026, 2, 1)),
        _line("l4", product="Null", qty=0, rate=0, customer="c3"),
    ]
    first = group_order_lines(lines)
    regrouped = group_order_lines([line for group in first for line in group.lines])

    assert [group.key for group in first] == [group.key for group in regrouped]
    assert sum(group.total_amount for group in first) == sum(
        line.total_amount for line in lines if line.product_type != "Null"
    )


def test_find_group_normalizes_sub_area() -> None:
    groups = group_order_lines([_line("l1", sub_area=None)])
    assert find_group(groups, GroupKey("c1", date(2026, 3, 1), "")) is groups[0]
    assert find_group(groups, GroupKey("c1", date(2026, 3, 2), "")) is None


def test_filter_by_name_phone_and_payment() -> None:
    lines = [
        _line("l1", customer="c1", name="Ravi", phone="9000000001", paid=100),
        _line("l2", customer="c2", name="Suresh", phone="9000000002", paid=0),
    ]
    groups = group_order_lines(lines)

    assert [g.customer_id for g in filter_logical_orders(groups, name="rav")] == ["c1"]
    assert [g.customer_id for g in filter_logical_orders(groups, phone="0002")] == ["c2"]
    assert [g.customer_id for g in filter_logical_orders(groups, payment="paid")] == ["c1"]
    assert [g.customer_id for g in filter_logical_orders(groups, payment="pending")] == ["c2"]
    assert len(filter_logical_orders(groups, area_id="area-a")) == 2
    assert filter_logical_orders(groups, sub_area="south") == []


def test_split_by_year() -> None:
    groups = group_order_lines([
        _line("l1", delivery=date(2026, 1, 2)),
        _line("l2", delivery=date(2025, 12, 30)),
    ])
    current, history = split_by_year(groups, 2026)
    assert [g.date.year for g in current] == [2026]
    assert [g.date.year for g in history] == [2025]
