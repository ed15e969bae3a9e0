import pytest

from moving_estimate.data import reference_repository
from moving_estimate.data.reference_repository import ReferenceData, clear_reference_cache
from moving_estimate.models.domain import (
    Customer,
    EstimateRequest,
    PackageSelection,
    PackageType,
    Prefecture,
    TruckTier,
)
from moving_estimate.models.errors import EstimateError, NoCapacityAvailable, PersistenceError
from moving_estimate.services.estimate import build_calculator, list_prefectures, quote_estimate, submit_estimate


REFERENCE = ReferenceData(
    prefectures=(Prefecture("47", "Okinawa"), Prefecture("01", "Hokkaido"), Prefecture("13", "Tokyo")),
    package_types=(PackageType(1, 2),),
    truck_tiers=(TruckTier(max_box=10, price=15000),),
)


def _customer() -> Customer:
    return Customer(old_prefecture_id="13", new_prefecture_id="13", customer_name="Hanako Sato")


class RecordingRecorder:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[str] = []

    def insert_customer(self, customer: Customer) -> int:
        self.calls.append("insert_customer")
        if self.fail:
            raise RuntimeError("connection reset")
        return 7

    def insert_customer_option(self, customer_id: int, service_id: int) -> int:
        self.calls.append("insert_customer_option")
        return 1

    def batch_insert_customer_packages(self, packages):
        self.calls.append("batch_insert_customer_packages")
        return [1] * len(packages)

    def discard_customer(self, customer_id: int) -> None:
        self.calls.append("discard_customer")


@pytest.fixture(autouse=True)
def clear_cache():
    clear_reference_cache()
    yield
    clear_reference_cache()


def test_list_prefectures_sorted_by_code():
    assert [p.prefecture_id for p in list_prefectures(REFERENCE)] == ["01", "13", "47"]


def test_quote_estimate_uses_cached_reference_data(monkeypatch):
    monkeypatch.setattr(reference_repository, "_load_reference_from_database", lambda: REFERENCE)

    result = quote_estimate(EstimateRequest("13", "13", packages=(PackageSelection(1, 3),)))

    assert result.grand_total == 15000


def test_submit_estimate_records_after_pricing():
    recorder = RecordingRecorder()
    request = EstimateRequest("13", "13", packages=(PackageSelection(1, 3),))

    submission = submit_estimate(request, _customer(), calculator=build_calculator(REFERENCE), recorder=recorder)

    assert submission.customer_id == 7
    assert submission.result.grand_total == 15000
    assert recorder.calls == ["insert_customer", "batch_insert_customer_packages"]


def test_submit_estimate_pricing_failure_never_records():
    recorder = RecordingRecorder()
    request = EstimateRequest("13", "13", packages=(PackageSelection(1, 6),))

    with pytest.raises(NoCapacityAvailable):
        submit_estimate(request, _customer(), calculator=build_calculator(REFERENCE), recorder=recorder)

    assert recorder.calls == []


def test_submit_estimate_persistence_failure_is_distinct():
    recorder = RecordingRecorder(fail=True)
    request = EstimateRequest("13", "13", packages=(PackageSelection(1, 3),))

    with pytest.raises(PersistenceError) as excinfo:
        submit_estimate(request, _customer(), calculator=build_calculator(REFERENCE), recorder=recorder)

    assert not isinstance(excinfo.value, EstimateError)
