"""Transaction endpoints module.

Provides the dataset reseed endpoint and the paginated transaction listing.
"""
import logging
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.exceptions.api_exception import ServerError
from sales_api.schemas.transaction import TransactionListResponse
from sales_api.services.months import resolve_month
from sales_api.services.seed_service import reseed
from sales_api.services.transaction_service import list_transactions
from sales_api.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transactions"])


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency for the HTTP client used to fetch the seed dataset."""
    async with httpx.AsyncClient(timeout=settings.SEED_TIMEOUT_SECONDS) as client:
        yield client


@router.get("/initialize", response_class=PlainTextResponse)
async def initialize_database(
    db: AsyncSession = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> str:
    """
    Replace all stored transactions with the seed dataset.

    Destructive: every existing transaction is deleted first.
    """
    try:
        count = await reseed(db, client, settings.SEED_DATA_URL)
    except (httpx.HTTPError, ValueError, SQLAlchemyError):
        # ValueError covers undecodable bodies, SeedFormatError and ValidationError
        logger.exception("Error initializing database")
        raise ServerError("Error initializing database")
    logger.info("Database initialized with %d transaction(s)", count)
    return "Database initialized"


@router.get("/transactions", response_model=TransactionListResponse)
async def get_transactions(
    month: int = Depends(resolve_month),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(10, ge=1, alias="perPage", description="Items per page"),
    search: str = Query("", description="Case-insensitive text to find in titles"),
    db: AsyncSession = Depends(get_db),
) -> TransactionListResponse:
    """
    List a month's transactions with title search and pagination.

    Returns:
    - **transactions**: The requested page, ordered by id
    - **totalPages**: ceil(matching transactions / perPage)
    """
    try:
        return await list_transactions(
            db=db,
            month=month,
            page=page,
            per_page=per_page,
            search=search,
        )
    except SQLAlchemyError:
        logger.exception("Error fetching transactions")
        raise ServerError("Error fetching transactions")
