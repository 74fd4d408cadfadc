"""Month name resolution shared by every month-scoped endpoint."""
from typing import Optional

from fastapi import Query

from sales_api.exceptions.api_exception import InvalidMonthError

MONTHS = {
    "January": 1, "February": 2, "March": 3, "April": 4, "May": 5, "June": 6,
    "July": 7, "August": 8, "September": 9, "October": 10, "November": 11, "December": 12,
}


def month_number(name: Optional[str]) -> int:
    """Map a full English month name to 1-12.

    Matching is exact and case-sensitive. Anything else, including an empty
    or missing value, raises InvalidMonthError.
    """
    if name is None or name not in MONTHS:
        raise InvalidMonthError()
    return MONTHS[name]


def resolve_month(
    month: Optional[str] = Query(
        default=None,
        description="Full English month name, e.g. 'March'",
    ),
) -> int:
    """FastAPI dependency returning the numeric month of the ``month`` query parameter."""
    return month_number(month)
