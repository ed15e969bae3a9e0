"""Truck tier selection by total box count."""

from __future__ import annotations

from ...data.reference_repository import ReferenceDataStore
from ...models.domain import TruckTier
from ...models.errors import NoCapacityAvailable


class TruckPricingSelector:
    """Pick the cheapest truck that can carry the load.

    The cheapest covering tier is not necessarily the smallest one; equal
    prices are settled by the smaller capacity.
    """

    def __init__(self, store: ReferenceDataStore) -> None:
        self.store = store

    def select_tier(self, total_boxes: int) -> TruckTier:
        candidates = self.store.covering_truck_tiers(total_boxes)
        if not candidates:
            raise NoCapacityAvailable(total_boxes)
        return min(candidates, key=lambda tier: (tier.price, tier.max_box))

    def price_for(self, total_boxes: int) -> int:
        return self.select_tier(total_boxes).price
