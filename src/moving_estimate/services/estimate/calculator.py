"""Estimate orchestration: distance, boxes, truck price and options."""

from __future__ import annotations

import logging

from ...models.domain import EstimateRequest, EstimateResult
from .boxes import BoxAggregator
from .distance import DistanceResolver
from .options import OptionPricingSummarizer
from .trucks import TruckPricingSelector


class EstimateCalculator:
    """Compute the price breakdown for one request.

    Any component failure propagates unchanged, so no partial result is
    ever produced. Distance is reported but does not enter the price.
    """

    def __init__(
        self,
        distances: DistanceResolver,
        boxes: BoxAggregator,
        trucks: TruckPricingSelector,
        options: OptionPricingSummarizer,
    ) -> None:
        self.distances = distances
        self.boxes = boxes
        self.trucks = trucks
        self.options = options

    def compute(self, request: EstimateRequest) -> EstimateResult:
        distance_km = self.distances.resolve(request.origin, request.destination)
        total_boxes = self.boxes.total_boxes(request.packages)
        truck_price = self.trucks.price_for(total_boxes)
        option_total = self.options.total_price(request.options)

        result = EstimateResult(
            distance_km=distance_km,
            total_boxes=total_boxes,
            truck_price=truck_price,
            option_total=option_total,
            grand_total=truck_price + option_total,
        )
        logging.info(
            f"Estimate {request.origin}->{request.destination}: {total_boxes} boxes, "
            f"{distance_km} km, total {result.grand_total}"
        )
        return result
