"""
Reimbursement Data Models

These models define the records persisted by the data service and the
payloads exchanged with it.

DESIGN DECISION: The stored record does NOT constrain category or amount.
The data service persists whatever it receives; form rules live in
reimbursements.validation and run before create() is called.

Records are persisted with camelCase keys (receiptName, createdAt) so the
stored collection stays readable by the web client that shares the format.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ReimbursementCategory(str, Enum):
    """
    Supported reimbursement categories.

    Values are the labels persisted in storage and shown to users.
    """
    FOOD = "Alimentação"
    LODGING = "Hospedagem"
    TRANSPORT = "Transporte"
    SERVICES = "Serviços"
    OTHER = "Outros"

    @classmethod
    def labels(cls) -> list[str]:
        """All persisted labels, in display order."""
        return [category.value for category in cls]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator('category', mode='before', check_fields=False)
    @classmethod
    def unwrap_category(cls, v):
        """Store the label, not the enum member."""
        if isinstance(v, Enum):
            return v.value
        return v


class ReimbursementCreate(_CamelModel):
    """
    Payload for creating a reimbursement.

    Everything except id and created_at, which the service assigns.
    """

    name: str
    category: str
    amount: float
    receipt: Optional[str] = Field(
        default=None,
        description="Receipt as a data URL (data:<mime>;base64,<payload>)"
    )
    receipt_name: Optional[str] = Field(
        default=None,
        description="Original filename of the receipt"
    )


class Reimbursement(ReimbursementCreate):
    """A persisted reimbursement request."""

    id: str = Field(
        ...,
        description="Unique identifier, assigned at creation"
    )
    created_at: datetime = Field(
        ...,
        description="When the request was created (UTC)"
    )

    def to_storage_dict(self) -> dict:
        """Serialize with the camelCase keys used in storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaginatedResponse(BaseModel):
    """One page of a filtered reimbursement listing."""

    data: list[Reimbursement] = Field(default_factory=list)
    total: int = Field(
        ge=0,
        description="Number of records matching the filter"
    )
    pages: int = Field(
        ge=0,
        description="Number of pages at the requested page size"
    )
