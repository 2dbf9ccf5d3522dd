"""Filtering and aggregation views over the product transactions dataset.

The module-level functions are pure: they never mutate the records they are
given and return the same result for the same inputs. `TransactionService`
pairs them with a repository and re-reads the dataset on every call.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from backend.repositories.transactions_repository import TransactionsRepository
from shared.models import (
    CategoryCount,
    MonthSummary,
    PriceRangeCount,
    ProductTransaction,
    TransactionPage,
)


logger = logging.getLogger(__name__)


MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# (label, inclusive upper bound); the last range is unbounded.
PRICE_RANGES: tuple[tuple[str, int | None], ...] = (
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


def format_price(price: int | float) -> str:
    """Return the decimal string of a price, without a trailing ``.0`` for integral values."""

    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return repr(price) if isinstance(price, float) else str(price)


def month_name(date_of_sale: str | None) -> str | None:
    """Return the English month name of an ISO-8601 timestamp, or None if it cannot be parsed.

    The month is the one written in the timestamp; no timezone conversion is applied.
    A server converting to its own local time can disagree near month boundaries:
    ``2022-01-01T02:00:00+05:30`` is January here but December 2021 in UTC.
    """

    if not date_of_sale:
        return None
    try:
        parsed = datetime.fromisoformat(date_of_sale.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return MONTH_NAMES[parsed.month - 1]


def matches_month(record: ProductTransaction, month: str | None) -> bool:
    if not month:
        return False
    name = month_name(record.date_of_sale)
    if name is None:
        return False
    return name.lower() == month.lower()


def matches_search(record: ProductTransaction, search: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return (
        needle in record.title.lower()
        or needle in record.description.lower()
        or needle in format_price(record.price).lower()
    )


def _filter_by_month(
    records: Iterable[ProductTransaction], month: str | None
) -> list[ProductTransaction]:
    return [record for record in records if matches_month(record, month)]


def list_transactions(
    records: Iterable[ProductTransaction],
    search: str | None = None,
    page: int = DEFAULT_PAGE,
    per_page: int = DEFAULT_PER_PAGE,
) -> TransactionPage:
    """Filter by search text then return one 1-indexed page of the matches.

    `total` counts all matches; a page past the end, or a non-positive page or
    page size, yields no items.
    """

    matched = [record for record in records if matches_search(record, search)]
    if page < 1 or per_page < 1:
        items: list[ProductTransaction] = []
    else:
        start = (page - 1) * per_page
        items = matched[start : start + per_page]
    return TransactionPage(items=items, total=len(matched), page=page, per_page=per_page)


def _price_range_label(price: int | float) -> str:
    for label, upper in PRICE_RANGES:
        if upper is None or price <= upper:
            return label
    return PRICE_RANGES[-1][0]


def month_histogram(
    records: Iterable[ProductTransaction], month: str | None
) -> list[PriceRangeCount]:
    """Count the month's records per fixed price range, in range order."""

    counts = {label: 0 for label, _ in PRICE_RANGES}
    for record in _filter_by_month(records, month):
        counts[_price_range_label(record.price)] += 1
    return [PriceRangeCount(range=label, count=count) for label, count in counts.items()]


def month_summary(records: Iterable[ProductTransaction], month: str | None) -> MonthSummary:
    total_sales: int | float = 0
    sold = 0
    not_sold = 0
    for record in _filter_by_month(records, month):
        total_sales += record.price
        if record.sold:
            sold += 1
        else:
            not_sold += 1
    return MonthSummary(
        total_sales=total_sales,
        total_sold_items=sold,
        total_not_sold_items=not_sold,
    )


def category_counts(
    records: Iterable[ProductTransaction], month: str | None
) -> list[CategoryCount]:
    """Count the month's records per category, in first-seen category order.

    Records without a category are skipped.
    """

    counts: dict[str, int] = {}
    for record in _filter_by_month(records, month):
        if not record.category:
            continue
        counts[record.category] = counts.get(record.category, 0) + 1
    return [CategoryCount(category=category, count=count) for category, count in counts.items()]


class TransactionService:
    """Serve dataset views, re-reading the dataset for every call."""

    def __init__(self, repository: TransactionsRepository) -> None:
        self._repository = repository

    def list_transactions(
        self,
        search: str | None = None,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> TransactionPage:
        result = list_transactions(self._repository.list_transactions(), search, page, per_page)
        logger.info(
            "transactions_listed search=%r page=%s per_page=%s total=%s",
            search,
            page,
            per_page,
            result.total,
        )
        return result

    def price_range_stats(self, month: str | None) -> list[PriceRangeCount]:
        return month_histogram(self._repository.list_transactions(), month)

    def monthly_summary(self, month: str | None) -> MonthSummary:
        return month_summary(self._repository.list_transactions(), month)

    def category_counts(self, month: str | None) -> list[CategoryCount]:
        return category_counts(self._repository.list_transactions(), month)
