"""Expense category catalog."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str
    color: str


CATEGORIES: Tuple[Category, ...] = (
    Category("food", "Food & Dining", "🍔", "#f59e0b"),
    Category("transport", "Transportation", "🚗", "#3b82f6"),
    Category("shopping", "Shopping", "🛍️", "#ec4899"),
    Category("entertainment", "Entertainment", "🎬", "#8b5cf6"),
    Category("bills", "Bills & Utilities", "💡", "#ef4444"),
    Category("health", "Health & Medical", "⚕️", "#10b981"),
    Category("education", "Education", "📚", "#6366f1"),
    Category("other", "Other", "📦", "#6b7280"),
)

FALLBACK_CATEGORY = CATEGORIES[-1]
