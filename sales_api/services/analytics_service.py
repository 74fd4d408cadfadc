"""Analytics service module.

Monthly statistics, price-range histogram and category breakdown. Every
view filters the whole collection by sale month only; there is no search
or pagination.
"""
from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.models.transaction import Transaction
from sales_api.schemas.analytics import (
    CategoryCount,
    PriceRangeCount,
    StatisticsResponse,
)
from sales_api.services.transaction_service import month_filter

# (label, lower bound, upper bound). Bucket 0 includes its lower bound; every
# other bucket starts just above the previous upper bound so fractional
# prices such as 100.5 still land in exactly one bucket.
PRICE_RANGES: list[tuple[str, float, Optional[float]]] = [
    ("0-100", 0, 100),
    ("101-200", 100, 200),
    ("201-300", 200, 300),
    ("301-400", 300, 400),
    ("401-500", 400, 500),
    ("501-600", 500, 600),
    ("601-700", 600, 700),
    ("701-800", 700, 800),
    ("801-900", 800, 900),
    ("901-above", 900, None),
]


def _price_bucket_filters(index: int) -> list:
    _, lower, upper = PRICE_RANGES[index]
    if index == 0:
        filters = [Transaction.price >= lower]
    else:
        filters = [Transaction.price > lower]
    if upper is not None:
        filters.append(Transaction.price <= upper)
    return filters


async def compute_statistics(db: AsyncSession, month: int) -> StatisticsResponse:
    """
    Compute total sales and sold/unsold counts for a month.

    Sales total and sold count come from one aggregate query; the unsold
    count is a separate count query over the same month filter.
    """
    totals_query = select(
        func.coalesce(func.sum(Transaction.price), 0).label("total_sales"),
        func.coalesce(
            func.sum(case((Transaction.sold.is_(True), 1), else_=0)), 0
        ).label("sold_items"),
    ).where(month_filter(month))
    totals = (await db.execute(totals_query)).one()

    unsold_query = (
        select(func.count())
        .select_from(Transaction)
        .where(month_filter(month), Transaction.sold.is_(False))
    )
    unsold_items = (await db.execute(unsold_query)).scalar() or 0

    return StatisticsResponse(
        total_sales=float(totals.total_sales),
        sold_items=int(totals.sold_items),
        unsold_items=unsold_items,
    )


async def compute_price_ranges(db: AsyncSession, month: int) -> list[PriceRangeCount]:
    """Count a month's transactions per fixed price bucket, in bucket order."""
    data = []
    # AsyncSession does not allow concurrent statements, so buckets run in turn
    for index, (label, _, _) in enumerate(PRICE_RANGES):
        query = (
            select(func.count())
            .select_from(Transaction)
            .where(month_filter(month), *_price_bucket_filters(index))
        )
        count = (await db.execute(query)).scalar() or 0
        data.append(PriceRangeCount(range=label, count=count))
    return data


async def compute_category_counts(db: AsyncSession, month: int) -> list[CategoryCount]:
    """Count a month's transactions per category. Empty categories are omitted."""
    query = (
        select(Transaction.category, func.count().label("total"))
        .where(month_filter(month))
        .group_by(Transaction.category)
        .order_by(Transaction.category)
    )
    result = await db.execute(query)
    return [CategoryCount(category=row.category, count=row.total) for row in result.all()]
