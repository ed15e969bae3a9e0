"""Price of the optional services selected for a move."""

from __future__ import annotations

from typing import Iterable

from ...data.reference_repository import ReferenceDataStore
from ...models.errors import UnknownService
from .lookup import expect_single


class OptionPricingSummarizer:
    def __init__(self, store: ReferenceDataStore) -> None:
        self.store = store

    def unit_price(self, service_id: int) -> int:
        price = expect_single(self.store.option_price_rows(service_id), table="optional_service", key=service_id)
        if price is None:
            raise UnknownService(service_id)
        return price

    def total_price(self, service_ids: Iterable[int]) -> int:
        # Each service is charged once, however often it was submitted.
        return sum(self.unit_price(service_id) for service_id in sorted(set(service_ids)))
