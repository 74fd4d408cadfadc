"""Transaction schemas module."""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionBase(BaseModel):
    """Base transaction schema with common fields."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Product title")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., description="Sale price")
    category: str = Field(..., description="Product category")
    image: Optional[str] = Field(None, description="Product image URL")
    sold: bool = Field(False, description="Whether the item was sold")
    date_of_sale: datetime = Field(
        ...,
        alias="dateOfSale",
        description="Sale timestamp",
    )


class TransactionSeed(TransactionBase):
    """Schema for one element of the seed dataset.

    Offset-aware timestamps are converted to naive UTC before storage.
    """

    @field_validator("date_of_sale")
    @classmethod
    def _to_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TransactionResponse(TransactionBase):
    """Schema for transaction response."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="Transaction ID")


class TransactionListResponse(BaseModel):
    """Schema for paginated transaction list response."""

    model_config = ConfigDict(populate_by_name=True)

    transactions: list[TransactionResponse] = Field(
        default_factory=list, description="Transactions on the requested page"
    )
    total_pages: int = Field(
        ...,
        alias="totalPages",
        description="Number of pages for the given page size",
    )
