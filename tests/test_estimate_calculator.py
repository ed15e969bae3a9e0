import pytest

from moving_estimate.data.reference_repository import ReferenceData
from moving_estimate.models.domain import (
    EstimateRequest,
    OptionalService,
    PackageSelection,
    PackageType,
    PrefectureDistance,
    TruckTier,
)
from moving_estimate.models.errors import NoCapacityAvailable, UnknownService
from moving_estimate.services.estimate import build_calculator


def _reference() -> ReferenceData:
    return ReferenceData(
        distances=(PrefectureDistance("13", "27", 500.0),),
        package_types=(PackageType(1, 2), PackageType(2, 15)),
        truck_tiers=(TruckTier(max_box=10, price=15000), TruckTier(max_box=40, price=40000)),
        optional_services=(OptionalService(1, 5000), OptionalService(2, 3000)),
    )


def test_tokyo_to_tokyo_estimate():
    reference = ReferenceData(
        package_types=(PackageType(1, 2),),
        truck_tiers=(TruckTier(max_box=10, price=15000),),
    )
    request = EstimateRequest(origin="13", destination="13", packages=(PackageSelection(1, 3),))

    result = build_calculator(reference).compute(request)

    assert result.total_boxes == 6
    assert result.truck_price == 15000
    assert result.option_total == 0
    assert result.distance_km == 50
    assert result.grand_total == 15000


def test_options_added_to_truck_price():
    request = EstimateRequest(
        origin="27",
        destination="13",
        packages=(PackageSelection(1, 3), PackageSelection(2, 1)),
        options=frozenset({1, 2}),
    )

    result = build_calculator(_reference()).compute(request)

    assert result.distance_km == 500.0
    assert result.total_boxes == 21
    assert result.truck_price == 40000
    assert result.option_total == 8000
    assert result.grand_total == 48000


def test_distance_does_not_change_price():
    calculator = build_calculator(_reference())
    packages = (PackageSelection(1, 1),)

    near = calculator.compute(EstimateRequest("13", "27", packages))
    far = calculator.compute(EstimateRequest("01", "47", packages))

    assert far.distance_km == 50.0
    assert near.distance_km != far.distance_km
    assert near.grand_total == far.grand_total


def test_load_above_every_tier_produces_no_result():
    request = EstimateRequest("13", "27", packages=(PackageSelection(2, 3),))

    with pytest.raises(NoCapacityAvailable):
        build_calculator(_reference()).compute(request)


def test_first_failure_aborts_computation():
    request = EstimateRequest("13", "27", packages=(PackageSelection(1, 1),), options=frozenset({9}))

    with pytest.raises(UnknownService):
        build_calculator(_reference()).compute(request)
