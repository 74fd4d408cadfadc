"""Transaction listing service module."""
from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.models.transaction import Transaction
from sales_api.schemas.transaction import TransactionListResponse, TransactionResponse


def month_filter(month: int):
    """SQL predicate matching transactions sold in ``month`` of any year."""
    return extract("month", Transaction.date_of_sale) == month


async def list_transactions(
    db: AsyncSession,
    month: int,
    page: int = 1,
    per_page: int = 10,
    search: str = "",
) -> TransactionListResponse:
    """
    List one page of a month's transactions, optionally searched by title.

    The search is a case-insensitive substring match on the title only;
    wildcard characters in ``search`` match literally. Results are ordered
    by id so that consecutive pages never overlap.

    Args:
        db: Database session
        month: Month number (1-12)
        page: 1-based page number
        per_page: Page size, also used for the page count
        search: Text to look for in titles

    Returns:
        TransactionListResponse with the page and the total number of pages
    """
    filters = [month_filter(month)]
    if search:
        filters.append(Transaction.title.icontains(search, autoescape=True))

    count_query = select(func.count()).select_from(Transaction).where(*filters)
    total = (await db.execute(count_query)).scalar() or 0

    query = (
        select(Transaction)
        .where(*filters)
        .order_by(Transaction.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    result = await db.execute(query)
    items = result.scalars().all()

    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(item) for item in items],
        total_pages=(total + per_page - 1) // per_page,
    )
