"""Moving estimate computation."""

from .boxes import BoxAggregator
from .calculator import EstimateCalculator
from .distance import DistanceResolver
from .options import OptionPricingSummarizer
from .service import build_calculator, list_prefectures, quote_estimate, submit_estimate
from .trucks import TruckPricingSelector

__all__ = [
    "BoxAggregator",
    "DistanceResolver",
    "EstimateCalculator",
    "OptionPricingSummarizer",
    "TruckPricingSelector",
    "build_calculator",
    "list_prefectures",
    "quote_estimate",
    "submit_estimate",
]
