"""Pydantic models exchanged with callers of the estimate service."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import (
    Customer,
    EstimateRequest,
    EstimateResult,
    EstimateSubmission,
    PackageSelection,
    Prefecture,
)


class PrefectureModel(BaseModel):
    prefecture_id: str
    prefecture_name: str

    @classmethod
    def from_prefecture(cls, prefecture: Prefecture) -> "PrefectureModel":
        return cls(prefecture_id=prefecture.prefecture_id, prefecture_name=prefecture.prefecture_name)


class PackageSelectionModel(BaseModel):
    package_id: int
    quantity: int = Field(0, ge=0)


class EstimateRequestModel(BaseModel):
    origin_prefecture_id: str = Field(..., description="Prefecture code the customer moves from.")
    destination_prefecture_id: str = Field(..., description="Prefecture code the customer moves to.")
    packages: List[PackageSelectionModel] = Field(default_factory=list)
    option_service_ids: List[int] = Field(
        default_factory=list,
        description="Selected optional services; duplicates are charged once.",
    )

    def to_domain(self) -> EstimateRequest:
        return EstimateRequest(
            origin=self.origin_prefecture_id,
            destination=self.destination_prefecture_id,
            packages=tuple(PackageSelection(package_id=p.package_id, quantity=p.quantity) for p in self.packages),
            options=frozenset(self.option_service_ids),
        )


class CustomerModel(BaseModel):
    customer_name: str
    tel: Optional[str] = None
    email: Optional[str] = None
    old_address: Optional[str] = None
    new_address: Optional[str] = None

    def to_domain(self, request: EstimateRequest) -> Customer:
        return Customer(
            old_prefecture_id=request.origin,
            new_prefecture_id=request.destination,
            customer_name=self.customer_name,
            tel=self.tel,
            email=self.email,
            old_address=self.old_address,
            new_address=self.new_address,
        )


class EstimateResultModel(BaseModel):
    distance_km: float
    total_boxes: int
    truck_price: int
    option_total: int
    grand_total: int

    @classmethod
    def from_result(cls, result: EstimateResult) -> "EstimateResultModel":
        return cls(
            distance_km=result.distance_km,
            total_boxes=result.total_boxes,
            truck_price=result.truck_price,
            option_total=result.option_total,
            grand_total=result.grand_total,
        )


class EstimateSubmissionModel(BaseModel):
    customer_id: int
    estimate: EstimateResultModel

    @classmethod
    def from_submission(cls, submission: EstimateSubmission) -> "EstimateSubmissionModel":
        return cls(customer_id=submission.customer_id, estimate=EstimateResultModel.from_result(submission.result))
