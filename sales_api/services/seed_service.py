"""Seed dataset loading service.

Fetches the transaction dataset from the configured URL and replaces the
stored collection with it.
"""
import logging
from typing import Any, Iterable

import httpx
from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.models.transaction import Transaction
from sales_api.schemas.transaction import TransactionSeed

logger = logging.getLogger(__name__)


class SeedFormatError(ValueError):
    """Seed payload is not a JSON array of transaction objects."""


def parse_seed_records(payload: Any) -> list[TransactionSeed]:
    """Validate a decoded seed payload into TransactionSeed objects."""
    if not isinstance(payload, list):
        raise SeedFormatError(
            f"Expected a JSON array, got {type(payload).__name__}"
        )
    return [TransactionSeed.model_validate(item) for item in payload]


async def fetch_seed_records(
    client: httpx.AsyncClient,
    url: str,
) -> list[TransactionSeed]:
    """
    Download and parse the seed dataset.

    Raises:
        httpx.HTTPError: If the request fails or returns an error status
        SeedFormatError: If the body is not a JSON array
        pydantic.ValidationError: If an element is not transaction-shaped
    """
    response = await client.get(url)
    response.raise_for_status()
    records = parse_seed_records(response.json())
    logger.info("Fetched %d seed record(s) from %s", len(records), url)
    return records


async def replace_transactions(
    db: AsyncSession,
    records: Iterable[TransactionSeed],
) -> int:
    """
    Delete every stored transaction and insert ``records`` in their place.

    Both statements run in the session's transaction; a failure rolls the
    whole replacement back.

    Returns:
        Number of inserted transactions
    """
    rows = [record.model_dump(by_alias=False) for record in records]
    try:
        await db.execute(delete(Transaction))
        if rows:
            await db.execute(insert(Transaction), rows)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info("Replaced transactions with %d record(s)", len(rows))
    return len(rows)


async def reseed(
    db: AsyncSession,
    client: httpx.AsyncClient,
    url: str,
) -> int:
    """Fetch the seed dataset from ``url`` and replace the stored collection."""
    records = await fetch_seed_records(client, url)
    return await replace_transactions(db, records)
