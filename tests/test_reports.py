from datetime import date

import pytest

from wheatflow.persistence.filesystem import FileStorage
from wheatflow.services.reports import list_export_files, list_runs, resolve_export_file
from wheatflow.services.reports.summary import business_report, dashboard_snapshot


@pytest.fixture
def report_db(shop_db):
    shop_db.seed("customers", {"id": "cust-1", "name": "Ravi", "phone": "9000000001", "area_id": "area-a"},
                 {"id": "cust-2", "name": "Suresh", "phone": "9000000002", "area_id": "area-b"})
    shop_db.seed(
        "orders",
        {"customer_id": "cust-1", "product_type": "Tukdi", "quantity_kg": 5, "rate_per_kg": 20, "total_amount": 100,
         "amount_paid": 100, "order_date": "2026-03-01", "delivery_date": "2026-03-01", "status": "delivered"},
        {"customer_id": "cust-1", "product_type": "Sasiya", "quantity_kg": 2, "rate_per_kg": 15, "total_amount": 30,
         "amount_paid": 10, "order_date": "2026-03-01", "delivery_date": "2026-03-01", "status": "delivered"},
        {"customer_id": "cust-2", "product_type": "Tukdi", "quantity_kg": 10, "rate_per_kg": 22, "total_amount": 220,
         "amount_paid": 0, "order_date": "2026-03-05", "delivery_date": "2026-03-06", "status": "pending"},
        {"customer_id": "cust-2", "product_type": "Null", "quantity_kg": 0, "rate_per_kg": 0, "total_amount": 0,
         "amount_paid": 0, "order_date": "2026-01-01", "delivery_date": "2026-01-01", "status": "pending"},
    )
    shop_db.seed("expenses", {"reason": "Diesel", "amount": 50})
    return shop_db


def test_business_report_totals(report_db) -> None:
    report = business_report()

    assert report.order_count == 2
    assert report.total_income == 350
    assert report.total_quantity == 17
    assert report.total_expense == 50
    assert report.net_profit == 300


def test_business_report_filters(report_db) -> None:
    assert business_report(area_id="area-a").total_income == 130
    in_range = business_report(start=date(2026, 3, 2), end=date(2026, 3, 31))
    assert in_range.order_count == 1
    assert in_range.total_income == 220
    # expenses in the fake store are stamped 2026-01-01
    assert in_range.total_expense == 0


def test_dashboard_snapshot(report_db) -> None:
    snapshot = dashboard_snapshot(today=date(2026, 3, 5), recent=2)

    assert snapshot.today_orders == 1
    assert snapshot.pending_payments == 240
    assert snapshot.total_customers == 2
    assert snapshot.total_stock == 255
    assert len(snapshot.recent_lines) == 2
    assert snapshot.recent_lines[0].product_type == "Tukdi"
    assert snapshot.recent_lines[0].customer_id == "cust-2"


def test_manifest_lists_runs_and_files(data_root) -> None:
    storage = FileStorage(root=data_root)
    run_dir = storage.make_run_directory("backup")
    storage.write_json(run_dir / "summary.json", {"counts": {"orders": 3}, "notes": "year end"})
    storage.write_bytes(run_dir / "backup.xlsx", b"PK")
    storage.make_run_directory("report")

    runs = list_runs()
    assert {run["run_type"] for run in runs} == {"backup", "report"}
    backup = list_runs(run_type="backup")[0]
    assert backup["counts"] == {"orders": 3}
    assert backup["notes"] == "year end"

    files = list_export_files(run_type="backup")
    assert [item["file_name"] for item in files] == ["backup.xlsx", "summary.json"]
    assert files[0]["description"] == "Year-end backup workbook"
    assert files[0]["download_path"] == f"/api/reports/exports/{run_dir.name}/backup.xlsx"
    assert list_export_files(file_type="json", search="summary")[0]["file_name"] == "summary.json"

    assert resolve_export_file(run_dir.name, "backup.xlsx").read_bytes() == b"PK"
    with pytest.raises(FileNotFoundError):
        resolve_export_file(run_dir.name, "../../secret.txt")


def test_manifest_without_outputs_is_empty(data_root) -> None:
    assert list_runs() == []
    assert list_export_files() == []


def test_run_directories_do_not_collide(data_root) -> None:
    storage = FileStorage(root=data_root)
    first = storage.make_run_directory("backup")
    second = storage.make_run_directory("backup")

    assert first != second
    assert second.name.startswith("backup")
    assert len(list(storage.output_root.iterdir())) == 2
