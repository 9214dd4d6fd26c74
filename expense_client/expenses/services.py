"""
Local views over expense records: totals, filtering and sorting.

All functions are pure; they never mutate the list they are given.
"""
import locale
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from expense_client.utils.dates import to_datetime
from expense_client.utils.enums import SortKey, SortOrder

SORT_KEYS = tuple(key.value for key in SortKey)


def _decimal(amount) -> Decimal:
    return Decimal(str(amount or 0))


def calculate_totals(expenses: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Grand total and per-category totals.

    Sums use Decimal so the result does not depend on record order.

    Returns:
        {"total": float, "by_category": {category_id: float}}
    """
    total = Decimal("0")
    by_category: Dict[str, Decimal] = {}

    for expense in expenses:
        amount = _decimal(expense.get("amount"))
        total += amount
        category = expense.get("category")
        by_category[category] = by_category.get(category, Decimal("0")) + amount

    return {
        "total": float(total),
        "by_category": {cat: float(amount) for cat, amount in by_category.items()},
    }


def _matches_search(expense: Dict[str, Any], needle: str) -> bool:
    description = expense.get("description")
    if isinstance(description, str) and needle in description.lower():
        return True
    category = expense.get("category")
    return isinstance(category, str) and needle in category.lower()


def filter_expenses(expenses: Iterable[Dict[str, Any]], criteria: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Keep the expenses that satisfy every provided criterion.

    Criteria (all optional, falsy values ignored):
        category: exact category id
        startDate / endDate: inclusive date bounds
        search: case-insensitive substring of description or category id
    """
    criteria = criteria or {}
    category = criteria.get("category")
    start = to_datetime(criteria.get("startDate")) if criteria.get("startDate") else None
    end = to_datetime(criteria.get("endDate")) if criteria.get("endDate") else None
    search = criteria.get("search")
    needle = search.lower() if search else None

    result = []
    for expense in expenses:
        if category and expense.get("category") != category:
            continue
        if start is not None or end is not None:
            when = to_datetime(expense.get("date"))
            # An unreadable date never satisfies a bound
            if when is None:
                continue
            if start is not None and when < start:
                continue
            if end is not None and when > end:
                continue
        if needle and not _matches_search(expense, needle):
            continue
        result.append(expense)
    return result


def _sort_value(expense: Dict[str, Any], sort_by: str):
    if sort_by == SortKey.DATE:
        return to_datetime(expense.get("date")) or datetime.min
    if sort_by == SortKey.AMOUNT:
        return float(expense.get("amount") or 0)
    return locale.strxfrm(str(expense.get("category") or ""))


def sort_expenses(expenses: Iterable[Dict[str, Any]], sort_by: str = "date", order: str = "desc") -> List[Dict[str, Any]]:
    """
    Return a new list ordered by date, amount or category.

    Unknown keys keep the input order. Any order other than ``desc`` sorts
    ascending. Ties keep their input order in both directions.
    """
    items = list(expenses)
    if sort_by not in SORT_KEYS:
        return items
    return sorted(items, key=lambda e: _sort_value(e, sort_by), reverse=(order == SortOrder.DESC))
