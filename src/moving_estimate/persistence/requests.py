"""Estimate request persistence."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Protocol, Sequence

from ..db.supabase import get_supabase_client
from ..models.domain import Customer, CustomerOptionService, CustomerPackage, EstimateRequest
from ..models.errors import PersistenceError


class RequestRecorder(Protocol):
    """Storage operations needed to record an estimate request."""

    def insert_customer(self, customer: Customer) -> int:
        """Insert the customer and return its generated identifier."""
        ...

    def insert_customer_option(self, customer_id: int, service_id: int) -> int:
        ...

    def batch_insert_customer_packages(self, packages: Sequence[CustomerPackage]) -> list[int]:
        ...

    def discard_customer(self, customer_id: int) -> None:
        """Remove the customer and every row keyed by it."""
        ...


class SupabaseRequestRecorder:
    """Records estimate requests in the ``customer`` tables through Supabase."""

    def __init__(self, client: Any | None = None) -> None:
        self.client = client if client is not None else get_supabase_client()

    def _table(self, name: str) -> Any:
        if not self.client:
            raise PersistenceError("Supabase not configured - estimate requests cannot be saved")
        return self.client.table(name)

    def insert_customer(self, customer: Customer) -> int:
        response = self._table("customer").insert(asdict(customer)).execute()
        rows = response.data or []
        if not rows or rows[0].get("customer_id") is None:
            raise PersistenceError("Customer insert did not return a generated customer_id")
        return int(rows[0]["customer_id"])

    def insert_customer_option(self, customer_id: int, service_id: int) -> int:
        record = CustomerOptionService(customer_id=customer_id, service_id=service_id)
        response = self._table("customer_option_service").insert(asdict(record)).execute()
        return len(response.data or [])

    def batch_insert_customer_packages(self, packages: Sequence[CustomerPackage]) -> list[int]:
        if not packages:
            return []
        response = self._table("customer_package").insert([asdict(package) for package in packages]).execute()
        return [1 for _ in (response.data or [])]

    def discard_customer(self, customer_id: int) -> None:
        for table in ("customer_package", "customer_option_service", "customer"):
            self._table(table).delete().eq("customer_id", customer_id).execute()


def _discard_partial_request(recorder: RequestRecorder, customer_id: int) -> None:
    try:
        recorder.discard_customer(customer_id)
    except Exception as e:
        logging.error(f"Failed to discard partially saved request for customer {customer_id}: {e}")


def record_estimate_request(recorder: RequestRecorder, customer: Customer, request: EstimateRequest) -> int:
    """Save the customer, chosen options and packages as one unit of work.

    The store offers no transaction, so rows written before a failure are
    discarded again before ``PersistenceError`` is raised.

    Returns:
        The generated customer identifier.
    """
    try:
        customer_id = recorder.insert_customer(customer)
    except PersistenceError:
        raise
    except Exception as e:
        logging.error(f"Failed to save customer {customer.customer_name!r}: {e}")
        raise PersistenceError(f"Failed to save customer: {e}") from e

    packages = [
        CustomerPackage(customer_id=customer_id, package_id=selection.package_id, package_number=selection.quantity)
        for selection in request.packages
    ]
    try:
        for service_id in sorted(request.options):
            if recorder.insert_customer_option(customer_id, service_id) != 1:
                raise PersistenceError(f"Option {service_id} was not saved for customer {customer_id}")

        counts = recorder.batch_insert_customer_packages(packages)
        if sum(counts) != len(packages):
            raise PersistenceError(
                f"Saved {sum(counts)} of {len(packages)} package rows for customer {customer_id}"
            )
    except Exception as e:
        logging.warning(f"Discarding partially saved request for customer {customer_id}: {e}")
        _discard_partial_request(recorder, customer_id)
        if isinstance(e, PersistenceError):
            raise
        raise PersistenceError(f"Failed to save estimate request for customer {customer_id}: {e}") from e

    return customer_id
