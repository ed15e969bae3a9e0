"""Reference data loader with database-first approach, falling back to the workbook."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Protocol, Sequence, TypeVar

from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import (
    OptionalService,
    PackageType,
    Prefecture,
    PrefectureDistance,
    TruckTier,
)

T = TypeVar("T")

# Table name -> required columns. Workbook sheets use the same names.
_TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "prefecture": ("prefecture_id", "prefecture_name"),
    "prefecture_distance": ("prefecture_id_from", "prefecture_id_to", "distance"),
    "package_box": ("package_id", "box"),
    "truck_capacity": ("max_box", "price"),
    "optional_service": ("service_id", "price"),
}

# Tables that must hold rows for an estimate to be priced at all.
# Missing distances degrade to the default distance instead.
_REQUIRED_TABLES = ("prefecture", "package_box", "truck_capacity", "optional_service")


class ReferenceDataStore(Protocol):
    """Row-level, read-only access to the pricing reference tables.

    Lookups return every matching row so that callers can tell a missing
    row apart from duplicated ones.
    """

    def get_all_prefectures(self) -> Sequence[Prefecture]:
        ...

    def distance_rows(self, prefecture_id_from: str, prefecture_id_to: str) -> list[float]:
        """Distances stored for the pair in either direction."""
        ...

    def box_rows(self, package_id: int) -> list[int]:
        ...

    def covering_truck_tiers(self, total_boxes: int) -> list[TruckTier]:
        """Tiers whose capacity is at least ``total_boxes``."""
        ...

    def option_price_rows(self, service_id: int) -> list[int]:
        ...


@dataclass(frozen=True, slots=True)
class ReferenceData:
    """Immutable snapshot of the reference tables."""

    prefectures: tuple[Prefecture, ...] = ()
    distances: tuple[PrefectureDistance, ...] = ()
    package_types: tuple[PackageType, ...] = ()
    truck_tiers: tuple[TruckTier, ...] = ()
    optional_services: tuple[OptionalService, ...] = ()

    def get_all_prefectures(self) -> list[Prefecture]:
        return list(self.prefectures)

    def distance_rows(self, prefecture_id_from: str, prefecture_id_to: str) -> list[float]:
        return [row.distance for row in self.distances if row.connects(prefecture_id_from, prefecture_id_to)]

    def box_rows(self, package_id: int) -> list[int]:
        return [row.box for row in self.package_types if row.package_id == package_id]

    def covering_truck_tiers(self, total_boxes: int) -> list[TruckTier]:
        return [tier for tier in self.truck_tiers if tier.max_box >= total_boxes]

    def option_price_rows(self, service_id: int) -> list[int]:
        return [row.price for row in self.optional_services if row.service_id == service_id]


def _normalize_code(value: Any) -> str:
    if value is None or str(value).strip() == "":
        raise ValueError("prefecture code is empty")
    # Spreadsheets tend to turn "01" into the number 1.
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().zfill(2)


def _prefecture(row: dict[str, Any]) -> Prefecture:
    return Prefecture(
        prefecture_id=_normalize_code(row["prefecture_id"]),
        prefecture_name=str(row["prefecture_name"]).strip(),
    )


def _distance(row: dict[str, Any]) -> PrefectureDistance:
    return PrefectureDistance(
        prefecture_id_from=_normalize_code(row["prefecture_id_from"]),
        prefecture_id_to=_normalize_code(row["prefecture_id_to"]),
        distance=float(row["distance"]),
    )


def _package_type(row: dict[str, Any]) -> PackageType:
    return PackageType(package_id=int(row["package_id"]), box=int(row["box"]))


def _truck_tier(row: dict[str, Any]) -> TruckTier:
    return TruckTier(max_box=int(row["max_box"]), price=int(row["price"]))


def _optional_service(row: dict[str, Any]) -> OptionalService:
    return OptionalService(service_id=int(row["service_id"]), price=int(row["price"]))


def _build_rows(table: str, records: Iterable[dict[str, Any]], builder: Callable[[dict[str, Any]], T]) -> tuple[T, ...]:
    rows: list[T] = []
    for record in records:
        normalized = {str(key).strip().lower(): value for key, value in record.items()}
        try:
            rows.append(builder(normalized))
        except (KeyError, ValueError, TypeError) as e:
            # Skip invalid rows but continue processing
            logging.warning(f"Skipping invalid {table} row {record!r}: {e}")
    return tuple(rows)


def _build_reference_data(tables: dict[str, list[dict[str, Any]]]) -> ReferenceData:
    return ReferenceData(
        prefectures=_build_rows("prefecture", tables.get("prefecture", []), _prefecture),
        distances=_build_rows("prefecture_distance", tables.get("prefecture_distance", []), _distance),
        package_types=_build_rows("package_box", tables.get("package_box", []), _package_type),
        truck_tiers=_build_rows("truck_capacity", tables.get("truck_capacity", []), _truck_tier),
        optional_services=_build_rows("optional_service", tables.get("optional_service", []), _optional_service),
    )


def _load_reference_from_database() -> ReferenceData | None:
    """Load reference tables from Supabase. Returns None if database not available or empty."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        tables: dict[str, list[dict[str, Any]]] = {}
        for table in _TABLE_COLUMNS:
            response = supabase.table(table).select("*").execute()
            tables[table] = list(response.data or [])
    except Exception as e:
        # If database query fails, return None to fall back to file
        logging.warning(f"Reference data query failed, falling back to workbook: {e}")
        return None

    if not any(tables.values()):
        return None

    empty_tables = [table for table in _REQUIRED_TABLES if not tables[table]]
    if empty_tables:
        logging.warning(
            f"Reference tables empty in database ({', '.join(empty_tables)}), falling back to workbook"
        )
        return None
    return _build_reference_data(tables)


def _read_sheet(workbook: Any, table: str, workbook_path: Path) -> list[dict[str, Any]]:
    sheet_name = next((name for name in workbook.sheetnames if name.strip().lower() == table), None)
    if sheet_name is None:
        raise ValueError(f"Reference workbook '{workbook_path}' is missing sheet '{table}'.")

    rows = workbook[sheet_name].iter_rows(min_row=1, values_only=True)
    header = next(rows, None)
    if header is None:
        raise ValueError(f"Sheet '{sheet_name}' in '{workbook_path}' is empty.")

    columns = [str(name).strip().lower() if name is not None else "" for name in header]
    missing_columns = set(_TABLE_COLUMNS[table]) - set(columns)
    if missing_columns:
        raise ValueError(f"Sheet '{sheet_name}' missing columns: {', '.join(sorted(missing_columns))}")

    records: list[dict[str, Any]] = []
    for row in rows:
        if all(value is None for value in row):
            continue
        records.append({column: value for column, value in zip(columns, row) if column})
    return records


def _load_reference_from_file(source: Path | None = None) -> ReferenceData:
    """Load reference tables from the Excel workbook."""
    workbook_path = (source or settings.reference_workbook)
    if not workbook_path.exists():
        raise FileNotFoundError(f"Reference workbook not found: {workbook_path}")

    wb = load_workbook(workbook_path, data_only=True, read_only=True)
    try:
        tables = {table: _read_sheet(wb, table, workbook_path) for table in _TABLE_COLUMNS}
    finally:
        wb.close()
    return _build_reference_data(tables)


@functools.lru_cache(maxsize=1)
def get_reference_data(source: Path | None = None) -> ReferenceData:
    """Get reference data from the database first, fall back to the workbook if needed.

    The snapshot is cached for the lifetime of the process; call
    ``clear_reference_cache`` after the reference tables change.
    """
    db_data = _load_reference_from_database()
    if db_data is not None:
        logging.info(
            f"Loaded reference data from database: {len(db_data.prefectures)} prefectures, "
            f"{len(db_data.distances)} distances, {len(db_data.truck_tiers)} truck tiers"
        )
        return db_data

    file_data = _load_reference_from_file(source)
    logging.info(f"Loaded reference data from workbook {source or settings.reference_workbook}")
    return file_data


def clear_reference_cache() -> None:
    """Clear the reference data cache so the next lookup reloads the tables."""
    get_reference_data.cache_clear()
