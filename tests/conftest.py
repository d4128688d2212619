from pathlib import Path

import pytest

from fake_supabase import FakeSupabase
from wheatflow.config import settings
from wheatflow.db import supabase as supabase_db


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    db = FakeSupabase()
    monkeypatch.setattr(supabase_db, "get_supabase_client", lambda: db)
    monkeypatch.setattr(settings, "stock_adjust_mode", "atomic")
    return db


@pytest.fixture
def shop_db(fake_db: FakeSupabase) -> FakeSupabase:
    """Two areas, the four standard products with stock and global rates, one area override."""
    fake_db.seed("areas", {"id": "area-a", "area_name": "Rajkot"}, {"id": "area-b", "area_name": "Gondal"})
    fake_db.seed(
        "stock",
        {"product_type": "Tukdi", "quantity_kg": 100.0, "low_stock_threshold": 10.0},
        {"product_type": "Sasiya", "quantity_kg": 100.0, "low_stock_threshold": 10.0},
        {"product_type": "Tukdi D", "quantity_kg": 50.0, "low_stock_threshold": 10.0},
        {"product_type": "Sasiya D", "quantity_kg": 5.0, "low_stock_threshold": 10.0},
    )
    fake_db.seed(
        "product_rates",
        {"product_type": "Tukdi", "rate_per_kg": 20.0},
        {"product_type": "Sasiya", "rate_per_kg": 15.0},
        {"product_type": "Tukdi D", "rate_per_kg": 25.0},
        {"product_type": "Sasiya D", "rate_per_kg": 35.0},
    )
    fake_db.seed("area_rates", {"area_id": "area-b", "product_type": "Tukdi", "rate_per_kg": 22.0})
    return fake_db


@pytest.fixture
def data_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(settings, "data_root", tmp_path)
    return tmp_path
