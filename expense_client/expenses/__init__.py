"""Expense dataset: cache, category catalog and local views."""

from .models import CATEGORIES, FALLBACK_CATEGORY, Category
from .manager import ExpenseManager

__all__ = ["CATEGORIES", "FALLBACK_CATEGORY", "Category", "ExpenseManager"]
