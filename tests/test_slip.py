from datetime import date

from wheatflow.models.domain import OrderLine
from wheatflow.services.orders.grouping import group_order_lines
from wheatflow.services.outputs.slip import (
    SLIP_SEPARATOR,
    build_delivery_slip,
    format_number,
    render_slip_text,
    render_slips,
)


def _line(line_id: str, product: str, qty: float, rate: float, customer: str = "c1", driver: bool = True) -> OrderLine:
    return OrderLine(
        id=line_id,
        customer_id=customer,
        product_type=product,
        quantity_kg=qty,
        rate_per_kg=rate,
        total_amount=qty * rate,
        amount_paid=0,
        order_date=date(2026, 3, 1),
        delivery_date=date(2026, 3, 1),
        sub_area="North",
        order_number=12,
        customer_name="Ravi Patel",
        customer_phone="9000000001",
        customer_address="Main Road",
        area_name="Rajkot",
        driver_id="drv-1" if driver else None,
        driver_name="Mahesh" if driver else None,
        driver_phone="9111111111" if driver else None,
    )


def test_slip_lists_items_in_slot_order_without_sentinels() -> None:
    group = group_order_lines([
        _line("l1", "Sasiya", 2, 15),
        _line("l2", "Null", 0, 0),
        _line("l3", "Tukdi", 5, 20),
    ])[0]

    slip = build_delivery_slip(group)

    assert [item.label for item in slip.items] == ["टुकड़ी", "सासिया"]
    assert slip.total == 130
    assert slip.customer_name == "RAVI PATEL"
    assert slip.location == "Rajkot, North"


def test_rendered_slip_layout() -> None:
    group = group_order_lines([_line("l1", "Tukdi", 5, 20), _line("l2", "Sasiya D", 1.5, 35)])[0]

    text = render_slip_text(build_delivery_slip(group), width=42)

    assert "No: 12" in text
    assert "Date: 01/03/2026" in text
    assert "RAVI PATEL" in text
    assert "Mob: 9000000001" in text
    assert "5 Guni" in text
    assert "₹100" in text
    assert "1.5 Guni" in text
    assert "₹52.5" in text
    assert "Delivery By: Mahesh" in text
    assert "Signature:" in text


def test_slip_without_driver_is_pickup() -> None:
    group = group_order_lines([_line("l1", "Tukdi", 5, 20, driver=False)])[0]
    text = render_slip_text(build_delivery_slip(group))
    assert "Pickup / No Driver" in text
    assert "Delivery By" not in text


def test_several_slips_are_page_separated() -> None:
    groups = group_order_lines([_line("l1", "Tukdi", 5, 20), _line("l2", "Tukdi", 1, 20, customer="c2")])
    assert render_slips(groups).count(SLIP_SEPARATOR) == 1


def test_format_number() -> None:
    assert format_number(5.0) == "5"
    assert format_number(2.25) == "2.25"
    assert format_number(2.50) == "2.5"
