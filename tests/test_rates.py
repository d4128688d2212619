from wheatflow.services.rates import pick_rate, resolve_rate


def test_pick_rate_prefers_positive_area_override() -> None:
    assert pick_rate("Tukdi", 22.0, 20.0) == 22.0
    assert pick_rate("Tukdi", 0.0, 20.0) == 20.0
    assert pick_rate("Tukdi", None, 20.0) == 20.0
    assert pick_rate("Tukdi", None, None) == 0.0


def test_pick_rate_manual_products_are_zero() -> None:
    assert pick_rate("Other", 50.0, 40.0) == 0.0
    assert pick_rate("Null", None, 40.0) == 0.0


def test_resolve_rate_uses_area_override(shop_db) -> None:
    assert resolve_rate("Tukdi", "area-b") == 22.0


def test_resolve_rate_falls_back_to_global(shop_db) -> None:
    assert resolve_rate("Tukdi", "area-a") == 20.0
    assert resolve_rate("Sasiya", "area-b") == 15.0
    assert resolve_rate("Sasiya", None) == 15.0


def test_resolve_rate_zero_override_is_ignored(shop_db) -> None:
    shop_db.seed("area_rates", {"area_id": "area-a", "product_type": "Sasiya", "rate_per_kg": 0})
    assert resolve_rate("Sasiya", "area-a") == 15.0


def test_resolve_rate_unknown_product_is_zero(shop_db) -> None:
    assert resolve_rate("Lokwan", "area-a") == 0.0


def test_resolve_rate_manual_product_skips_store(fake_db) -> None:
    assert resolve_rate("Other", "area-a") == 0.0
    assert fake_db.calls == []
