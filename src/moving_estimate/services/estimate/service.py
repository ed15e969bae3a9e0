"""Estimate service entry points used by the surrounding application."""

from __future__ import annotations

import logging
from typing import Optional

from ...config import settings
from ...data.reference_repository import ReferenceDataStore, get_reference_data
from ...data.same_region import get_same_region_table
from ...models.domain import Customer, EstimateRequest, EstimateResult, EstimateSubmission, Prefecture
from ...persistence.requests import RequestRecorder, SupabaseRequestRecorder, record_estimate_request
from .boxes import BoxAggregator
from .calculator import EstimateCalculator
from .distance import DistanceResolver
from .options import OptionPricingSummarizer
from .trucks import TruckPricingSelector


def build_calculator(store: Optional[ReferenceDataStore] = None) -> EstimateCalculator:
    """Wire an EstimateCalculator against ``store`` or the cached reference data."""
    reference = store if store is not None else get_reference_data()
    return EstimateCalculator(
        distances=DistanceResolver(
            reference,
            same_region=get_same_region_table(),
            default_distance_km=settings.default_distance_km,
        ),
        boxes=BoxAggregator(reference),
        trucks=TruckPricingSelector(reference),
        options=OptionPricingSummarizer(reference),
    )


def list_prefectures(store: Optional[ReferenceDataStore] = None) -> list[Prefecture]:
    reference = store if store is not None else get_reference_data()
    return sorted(reference.get_all_prefectures(), key=lambda prefecture: prefecture.prefecture_id)


def quote_estimate(request: EstimateRequest, calculator: Optional[EstimateCalculator] = None) -> EstimateResult:
    """Price a request without recording it."""
    return (calculator or build_calculator()).compute(request)


def submit_estimate(
    request: EstimateRequest,
    customer: Customer,
    *,
    calculator: Optional[EstimateCalculator] = None,
    recorder: Optional[RequestRecorder] = None,
) -> EstimateSubmission:
    """Price a request and record it together with the customer.

    Pricing failures (``EstimateError``) are raised before anything is
    written. Storage failures surface as ``PersistenceError``.
    """
    result = quote_estimate(request, calculator)
    customer_id = record_estimate_request(recorder or SupabaseRequestRecorder(), customer, request)
    logging.info(f"Recorded estimate request for customer {customer_id} (total {result.grand_total})")
    return EstimateSubmission(customer_id=customer_id, result=result)
