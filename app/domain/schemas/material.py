"""Pydantic schemas for materials, usage logs and requisitions."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

RequisitionDecision = Literal["approved", "rejected"]


class MaterialCreateRequest(BaseModel):
    """The opening balance equals the delivered quantity."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    unit: str = Field(..., min_length=1, max_length=50)
    quantity: float = Field(..., ge=0)
    project_id: Optional[int] = None
    unit_price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None


class MaterialUpdateRequest(BaseModel):
    """Partial update. The balance only moves through usage and approved requisitions."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    quantity: Optional[float] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None


class MaterialResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    unit: str
    quantity: float
    current_balance: float
    project_id: Optional[int] = None
    unit_price: Optional[float] = None
    supplier: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MaterialUsageCreateRequest(BaseModel):
    quantity_used: float = Field(..., gt=0)
    notes: Optional[str] = None


class MaterialUsageResponse(BaseModel):
    id: int
    material_id: int
    user_id: int
    quantity_used: float
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RequisitionCreateRequest(BaseModel):
    material_id: int
    quantity_requested: float = Field(..., gt=0)
    project_id: Optional[int] = None
    notes: Optional[str] = None


class RequisitionReviewRequest(BaseModel):
    status: RequisitionDecision
    approved_quantity: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def quantity_only_when_approved(self) -> "RequisitionReviewRequest":
        if self.status == "rejected" and self.approved_quantity is not None:
            raise ValueError("approved_quantity is only allowed when approving")
        return self


class RequisitionResponse(BaseModel):
    id: int
    material_id: int
    project_id: Optional[int] = None
    requested_by: int
    quantity_requested: float
    approved_quantity: Optional[float] = None
    status: str
    notes: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
