"""Total box count for a set of package selections."""

from __future__ import annotations

from typing import Iterable

from ...data.reference_repository import ReferenceDataStore
from ...models.domain import PackageSelection
from ...models.errors import UnknownPackageType
from .lookup import expect_single


class BoxAggregator:
    def __init__(self, store: ReferenceDataStore) -> None:
        self.store = store

    def boxes_per_unit(self, package_id: int) -> int:
        box = expect_single(self.store.box_rows(package_id), table="package_box", key=package_id)
        if box is None:
            raise UnknownPackageType(package_id)
        return box

    def total_boxes(self, selections: Iterable[PackageSelection]) -> int:
        return sum(self.boxes_per_unit(selection.package_id) * selection.quantity for selection in selections)
