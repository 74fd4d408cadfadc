#!/usr/bin/env python
"""
Transaction Seed Script

Replaces the stored transactions with a seed dataset, either by calling the
running API's initialize endpoint or by loading a local JSON file straight
into the configured database.

Usage:
    python seed_transactions.py
    python seed_transactions.py --url http://localhost:8000
    python seed_transactions.py --file data/product_transaction.json
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from sales_api.database.database import async_session, dispose_engine
from sales_api.schemas.transaction import TransactionSeed
from sales_api.services.seed_service import (
    SeedFormatError,
    parse_seed_records,
    replace_transactions,
)


def read_seed_file(file_path: Path) -> List[TransactionSeed]:
    """
    Read seed records from a local JSON file.

    Args:
        file_path: Path to a JSON file holding an array of transactions

    Returns:
        Parsed seed records

    Raises:
        SeedFormatError: If the file does not hold a JSON array
        pydantic.ValidationError: If an element is not transaction-shaped
    """
    with open(file_path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    return parse_seed_records(payload)


def trigger_initialize(api_url: str, timeout: float = 60) -> str:
    """
    Ask a running API to reseed itself from its configured URL.

    Raises:
        httpx.HTTPError: If the API request fails
    """
    endpoint = f"{api_url.rstrip('/')}/api/initialize"
    with httpx.Client(timeout=timeout) as client:
        response = client.get(endpoint)
        response.raise_for_status()
        return response.text


async def load_into_database(records: List[TransactionSeed]) -> int:
    """Replace the database contents with ``records``."""
    try:
        async with async_session() as session:
            return await replace_transactions(session, records)
    finally:
        await dispose_engine()


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Reseed the transactions store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --url http://localhost:8000
  %(prog)s --file data/product_transaction.json
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        type=str,
        default="http://localhost:8000",
        help="Base API URL to call /api/initialize on (default: http://localhost:8000)"
    )
    source.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Local JSON file to load directly into DATABASE_URL"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60,
        help="Request timeout in seconds (default: 60)"
    )

    args = parser.parse_args()

    if args.file is None:
        try:
            print(trigger_initialize(args.url, args.timeout))
        except httpx.HTTPError as e:
            print(f"Error: initialize request failed: {e}", file=sys.stderr)
            sys.exit(1)
        return

    if not args.file.is_file():
        print(f"Error: Not a file: {args.file}", file=sys.stderr)
        sys.exit(1)

    try:
        records = read_seed_file(args.file)
    except (json.JSONDecodeError, SeedFormatError, ValidationError) as e:
        print(f"Error reading {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        created = asyncio.run(load_into_database(records))
    except SQLAlchemyError as e:
        print(f"Error writing to database: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {created} transaction(s) from {args.file}")


if __name__ == "__main__":
    main()
