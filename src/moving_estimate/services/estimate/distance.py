"""Distance lookup between origin and destination prefectures."""

from __future__ import annotations

import logging
from typing import Mapping

from ...data.reference_repository import ReferenceDataStore
from ...models.errors import ConfigurationError
from .lookup import expect_single


class DistanceResolver:
    """Resolve the distance in kilometres for a move.

    Moves within one prefecture use the fixed same-region table. Other moves
    read the pairwise table in both directions and fall back to
    ``default_distance_km`` when the pair has no row.
    """

    def __init__(
        self,
        store: ReferenceDataStore,
        same_region: Mapping[str, float],
        default_distance_km: float = 50.0,
    ) -> None:
        self.store = store
        self.same_region = same_region
        self.default_distance_km = default_distance_km

    def resolve(self, origin: str, destination: str) -> float:
        if origin == destination:
            return self._same_region_distance(origin)

        distance = expect_single(
            self.store.distance_rows(origin, destination),
            table="prefecture_distance",
            key=(origin, destination),
        )
        if distance is None:
            logging.warning(
                f"No distance row for {origin}-{destination}; using default {self.default_distance_km} km"
            )
            return float(self.default_distance_km)
        return float(distance)

    def _same_region_distance(self, prefecture_id: str) -> float:
        try:
            return float(self.same_region[prefecture_id])
        except KeyError:
            raise ConfigurationError(
                f"Same-region distance table has no entry for prefecture {prefecture_id!r}."
            ) from None
