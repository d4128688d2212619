"""In-memory stand-in for the Supabase query builder used by the persistence layer."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

_EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)


@dataclass
class FakeResponse:
    data: Any
    count: Optional[int] = None


def _split_top_level(text: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        parts.append(current.strip())
    return parts


def parse_columns(text: str) -> list[tuple[str, Optional[list]]]:
    """``"*, customers(name, areas(area_name))"`` -> ``[("*", None), ("customers", [...])]``."""
    columns: list[tuple[str, Optional[list]]] = []
    for part in _split_top_level(text or "*"):
        if "(" in part:
            name, inner = part.split("(", 1)
            columns.append((name.strip(), parse_columns(inner[:-1])))
        else:
            columns.append((part, None))
    return columns


def _foreign_key(relation: str) -> str:
    return f"{relation[:-1]}_id" if relation.endswith("s") else f"{relation}_id"


def _norm(value: Any) -> Any:
    return None if value is None else str(value)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = parse_columns("*")
        self.count_mode: Optional[str] = None
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.filters: list[Callable[[dict], bool]] = []
        self.filter_log: list[tuple] = []
        self.ordering: list[tuple[str, bool]] = []
        self.row_limit: Optional[int] = None

    # builders
    def select(self, columns: str = "*", count: Optional[str] = None) -> "FakeQuery":
        self.operation = "select"
        self.columns = parse_columns(columns)
        self.count_mode = count
        return self

    def insert(self, data: Any) -> "FakeQuery":
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, patch: dict) -> "FakeQuery":
        self.operation = "update"
        self.payload = patch
        return self

    def upsert(self, data: Any, on_conflict: Optional[str] = None) -> "FakeQuery":
        self.operation = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: _norm(row.get(column)) == _norm(value))
        self.filter_log.append(("eq", column, value))
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: _norm(row.get(column)) != _norm(value))
        self.filter_log.append(("neq", column, value))
        return self

    def in_(self, column: str, values: list) -> "FakeQuery":
        wanted = {_norm(value) for value in values}
        self.filters.append(lambda row: _norm(row.get(column)) in wanted)
        self.filter_log.append(("in", column, list(values)))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.ordering.append((column, desc))
        return self

    def limit(self, size: int) -> "FakeQuery":
        self.row_limit = size
        return self

    # execution
    def _matching(self) -> list[dict]:
        return [row for row in self.db.tables.setdefault(self.table_name, []) if all(f(row) for f in self.filters)]

    def _project(self, row: dict, columns: list[tuple[str, Optional[list]]], table: str) -> dict:
        result: dict = {}
        for name, nested in columns:
            if name == "*":
                result.update(copy.deepcopy(row))
            elif nested is None:
                result[name] = copy.deepcopy(row.get(name))
            else:
                key = row.get(_foreign_key(name))
                target = next((item for item in self.db.tables.get(name, []) if key is not None and item.get("id") == key), None)
                result[name] = self._project(target, nested, name) if target is not None else None
        return result

    def execute(self) -> FakeResponse:
        self.db.check_failure(self.table_name, self.operation)
        self.db.calls.append((self.table_name, self.operation, list(self.filter_log)))
        handler = getattr(self, f"_execute_{self.operation}")
        return handler()

    def _execute_select(self) -> FakeResponse:
        rows = self._matching()
        for column, desc in reversed(self.ordering):
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: row.get(column), reverse=desc)
            rows = present + missing
        total = len(rows)
        if self.row_limit is not None:
            rows = rows[: self.row_limit]
        data = [self._project(row, self.columns, self.table_name) for row in rows]
        return FakeResponse(data=data, count=total if self.count_mode else None)

    def _execute_insert(self) -> FakeResponse:
        records = self.payload if isinstance(self.payload, list) else [self.payload]
        inserted = [self.db.add_row(self.table_name, record) for record in records]
        return FakeResponse(data=copy.deepcopy(inserted))

    def _execute_update(self) -> FakeResponse:
        rows = self._matching()
        for row in rows:
            row.update(copy.deepcopy(self.payload))
        return FakeResponse(data=copy.deepcopy(rows))

    def _execute_delete(self) -> FakeResponse:
        rows = self._matching()
        ids = {id(row) for row in rows}
        self.db.tables[self.table_name] = [row for row in self.db.tables[self.table_name] if id(row) not in ids]
        return FakeResponse(data=copy.deepcopy(rows))

    def _execute_upsert(self) -> FakeResponse:
        records = self.payload if isinstance(self.payload, list) else [self.payload]
        keys = [key.strip() for key in (self.on_conflict or "id").split(",")]
        written: list[dict] = []
        table = self.db.tables.setdefault(self.table_name, [])
        for record in records:
            existing = next(
                (row for row in table if all(_norm(row.get(key)) == _norm(record.get(key)) for key in keys)),
                None,
            )
            if existing is not None:
                existing.update(copy.deepcopy(record))
                written.append(existing)
            else:
                written.append(self.db.add_row(self.table_name, record))
        return FakeResponse(data=copy.deepcopy(written))


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict) -> None:
        self.db = db
        self.name = name
        self.params = params

    def execute(self) -> FakeResponse:
        self.db.check_failure("rpc", self.name)
        self.db.calls.append(("rpc", self.name, [self.params]))
        if self.name != "adjust_stock":
            raise RuntimeError(f"Unknown function {self.name}")
        for row in self.db.tables.setdefault("stock", []):
            if row.get("product_type") == self.params["p_product_type"]:
                row["quantity_kg"] = float(row.get("quantity_kg") or 0) + float(self.params["p_delta"])
                return FakeResponse(data=row["quantity_kg"])
        return FakeResponse(data=None)


class FakeSupabase:
    """Tables are lists of dict rows. Inserted rows get an id, created_at and (orders) order_number."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self._sequence = 0
        self._failures: list[dict] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)

    def add_row(self, table: str, record: dict) -> dict:
        self._sequence += 1
        row = copy.deepcopy(record)
        row.setdefault("id", f"{table}-{self._sequence}")
        row.setdefault("created_at", (_EPOCH + timedelta(seconds=self._sequence)).isoformat())
        if table == "orders" and row.get("order_number") is None:
            row["order_number"] = sum(1 for item in self.tables.get("orders", []) if item.get("order_number")) + 1
        self.tables.setdefault(table, []).append(row)
        return row

    def seed(self, table: str, *records: dict) -> list[dict]:
        return [self.add_row(table, record) for record in records]

    def fail_on(self, table: str, operation: str, *, after: int = 0, message: str = "store unavailable") -> None:
        """Raise on the matching call once ``after`` matching calls have succeeded."""
        self._failures.append({"table": table, "operation": operation, "remaining": after, "message": message})

    def check_failure(self, table: str, operation: str) -> None:
        for failure in self._failures:
            if failure["table"] != table or failure["operation"] != operation:
                continue
            if failure["remaining"] > 0:
                failure["remaining"] -= 1
                continue
            raise RuntimeError(failure["message"])

    def rows(self, table: str, **where: Any) -> list[dict]:
        return [
            row for row in self.tables.get(table, [])
            if all(_norm(row.get(key)) == _norm(value) for key, value in where.items())
        ]

    def count_calls(self, table: str, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == table and call[1] == operation)

    def stock_quantity(self, product_type: str) -> float:
        return float(self.rows("stock", product_type=product_type)[0]["quantity_kg"])
