from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from wheatflow.persistence.filesystem import FileStorage
from wheatflow.persistence.records import coerce_float, parse_date, row_to_order_line


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="backup")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path.resolve() / "outputs"


def test_file_storage_writes_json_and_bytes(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="backup")

    summary_path = run_dir / "summary.json"
    workbook_path = run_dir / "backup.xlsx"

    storage.write_json(summary_path, {"hello": "world", "day": date(2026, 3, 1)})
    storage.write_bytes(workbook_path, b"\x00\x01")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world",\n  "day": "2026-03-01"\n}'
    assert workbook_path.read_bytes() == b"\x00\x01"


def test_numbers_and_dates_are_coerced() -> None:
    assert coerce_float(None) == 0.0
    assert coerce_float("1,250.5") == 1250.5
    assert parse_date("2026-03-01T10:15:00+00:00") == date(2026, 3, 1)
    assert parse_date("") is None
    with pytest.raises(ValueError):
        coerce_float("lots")


def test_order_row_flattens_embedded_relations() -> None:
    line = row_to_order_line({
        "id": 7,
        "customer_id": 3,
        "product_type": "Tukdi",
        "quantity_kg": "5",
        "rate_per_kg": 20,
        "total_amount": 100,
        "amount_paid": None,
        "order_date": "2026-03-01",
        "delivery_date": None,
        "order_number": "12",
        "created_at": "2026-03-01T09:00:00Z",
        "customers": {"name": "Ravi", "phone": "9000000001", "area_id": "area-a", "areas": {"area_name": "Rajkot"}},
        "drivers": None,
    })

    assert line.id == "7"
    assert line.customer_id == "3"
    assert line.quantity_kg == 5.0
    assert line.amount_paid == 0.0
    assert line.pending_amount == 100
    assert line.order_number == 12
    assert line.created_at == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert line.effective_date == date(2026, 3, 1)
    assert line.area_name == "Rajkot"
    assert line.driver_name is None
