from itertools import count
from types import SimpleNamespace

import pytest


class DummyQuery:
    def __init__(self, client: "DummySupabase", table: str):
        self.client = client
        self.table = table
        self.operation = "select"
        self.payload = None
        self.filters: list[tuple[str, object]] = []

    def select(self, columns: str = "*"):
        self.operation = "select"
        return self

    def insert(self, payload):
        self.operation = "insert"
        self.payload = payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column: str, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        return self.client.execute(self)


class DummySupabase:
    """In-memory stand-in for the fluent Supabase table API."""

    def __init__(self, tables: dict | None = None, fail_on: tuple[str, str] | None = None):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []
        self._ids = count(1)

    def table(self, name: str) -> DummyQuery:
        return DummyQuery(self, name)

    def execute(self, query: DummyQuery):
        self.calls.append((query.table, query.operation))
        if self.fail_on == (query.table, query.operation):
            raise RuntimeError(f"{query.operation} on {query.table} failed")

        rows = self.tables.setdefault(query.table, [])
        if query.operation == "select":
            return SimpleNamespace(data=[dict(row) for row in rows])
        if query.operation == "insert":
            payload = query.payload if isinstance(query.payload, list) else [query.payload]
            inserted = []
            for record in payload:
                row = dict(record)
                if query.table == "customer":
                    row["customer_id"] = next(self._ids)
                rows.append(row)
                inserted.append(row)
            return SimpleNamespace(data=inserted)

        def matches(row: dict) -> bool:
            return all(row.get(column) == value for column, value in query.filters)

        removed = [row for row in rows if matches(row)]
        self.tables[query.table] = [row for row in rows if not matches(row)]
        return SimpleNamespace(data=removed)


@pytest.fixture
def dummy_supabase():
    return DummySupabase
