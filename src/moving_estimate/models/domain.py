"""Domain models for reference data, estimate requests and customer records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class Prefecture:
    """First-level administrative region used as the unit of distance lookup."""

    prefecture_id: str
    prefecture_name: str


@dataclass(frozen=True, slots=True)
class PrefectureDistance:
    """Distance between two prefectures, stored in one direction only."""

    prefecture_id_from: str
    prefecture_id_to: str
    distance: float

    def connects(self, first: str, second: str) -> bool:
        return (self.prefecture_id_from, self.prefecture_id_to) in ((first, second), (second, first))


@dataclass(frozen=True, slots=True)
class PackageType:
    package_id: int
    box: int


@dataclass(frozen=True, slots=True)
class TruckTier:
    max_box: int
    price: int


@dataclass(frozen=True, slots=True)
class OptionalService:
    service_id: int
    price: int


@dataclass(frozen=True, slots=True)
class PackageSelection:
    """Quantity of one package type chosen by the customer."""

    package_id: int
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(
                f"Quantity for package {self.package_id} must not be negative (got {self.quantity})."
            )


@dataclass(frozen=True, slots=True)
class EstimateRequest:
    """A validated estimate request; consumed once by the calculator."""

    origin: str
    destination: str
    packages: tuple[PackageSelection, ...] = ()
    options: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class EstimateResult:
    distance_km: float
    total_boxes: int
    truck_price: int
    option_total: int
    grand_total: int


@dataclass(frozen=True, slots=True)
class Customer:
    """Contact and address details stored alongside an estimate request."""

    old_prefecture_id: str
    new_prefecture_id: str
    customer_name: str
    tel: Optional[str] = None
    email: Optional[str] = None
    old_address: Optional[str] = None
    new_address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CustomerPackage:
    customer_id: int
    package_id: int
    package_number: int


@dataclass(frozen=True, slots=True)
class CustomerOptionService:
    customer_id: int
    service_id: int


@dataclass(frozen=True, slots=True)
class EstimateSubmission:
    """Outcome of a priced and recorded estimate request."""

    customer_id: int
    result: EstimateResult
