"""Analytics endpoint module.

Provides monthly statistics, price-range bar chart and category pie chart.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.exceptions.api_exception import ServerError
from sales_api.schemas.analytics import (
    CategoryCount,
    PriceRangeCount,
    StatisticsResponse,
)
from sales_api.services.analytics_service import (
    compute_category_counts,
    compute_price_ranges,
    compute_statistics,
)
from sales_api.services.months import resolve_month

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    month: int = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> StatisticsResponse:
    """
    Get sales statistics for a month of any year.

    - **totalSales**: Sum of prices
    - **soldItems**: Number of sold items
    - **unsoldItems**: Number of unsold items
    """
    try:
        return await compute_statistics(db=db, month=month)
    except SQLAlchemyError:
        logger.exception("Error fetching statistics")
        raise ServerError("Error fetching statistics")


@router.get("/bar-chart", response_model=list[PriceRangeCount])
async def get_bar_chart(
    month: int = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> list[PriceRangeCount]:
    """
    Get the number of items per price range for a month.

    Ranges: 0-100, 101-200, ..., 801-900, 901-above.
    """
    try:
        return await compute_price_ranges(db=db, month=month)
    except SQLAlchemyError:
        logger.exception("Error fetching bar chart data")
        raise ServerError("Error fetching bar chart data")


@router.get("/pie-chart", response_model=list[CategoryCount])
async def get_pie_chart(
    month: int = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> list[CategoryCount]:
    """Get the number of items per category for a month."""
    try:
        return await compute_category_counts(db=db, month=month)
    except SQLAlchemyError:
        logger.exception("Error fetching pie chart data")
        raise ServerError("Error fetching pie chart data")
