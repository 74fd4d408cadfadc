"""Analytics schemas module.

Defines response schemas for the monthly statistics, price-range bar chart
and category pie chart endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field


class StatisticsResponse(BaseModel):
    """Monthly sales totals."""

    model_config = ConfigDict(populate_by_name=True)

    total_sales: float = Field(
        ...,
        alias="totalSales",
        description="Sum of prices of the month's transactions",
    )
    sold_items: int = Field(
        ...,
        alias="soldItems",
        description="Number of sold items",
    )
    unsold_items: int = Field(
        ...,
        alias="unsoldItems",
        description="Number of unsold items",
    )


class PriceRangeCount(BaseModel):
    """Single bar of the price-range chart."""

    range: str = Field(..., description="Bucket label, e.g. '101-200'")
    count: int = Field(..., description="Transactions priced within the bucket")


class CategoryCount(BaseModel):
    """Single slice of the category chart."""

    category: str = Field(..., description="Category name")
    count: int = Field(..., description="Transactions in the category")
