"""
Expense Dataset Manager - client-side mirror of the user's expenses.

The cache is write-through: every change goes to the server first and is
applied locally only from the server's answer. It is never the source of
truth.
"""
import logging
from typing import Any, Dict, List, Optional

from expense_client.api.errors import ClientError, RequestFailed
from expense_client.expenses import services
from expense_client.expenses.models import CATEGORIES, FALLBACK_CATEGORY, Category
from expense_client.utils.enums import NotificationType

logger = logging.getLogger(__name__)

FILTER_PARAMS = ("startDate", "endDate", "category")


class ExpenseManager:
    """Service for expense CRUD, statistics and local dataset views."""

    def __init__(self, gateway, notifier, categories=CATEGORIES):
        self.gateway = gateway
        self.notifier = notifier
        self.categories = tuple(categories)
        self.expenses: List[Dict[str, Any]] = []

    def _fail(self, error: ClientError) -> Dict[str, Any]:
        self.notifier.notify(error.message, NotificationType.ERROR)
        return {"success": False, "error": error.message}

    @staticmethod
    def _expense_from(response: Dict[str, Any]) -> Dict[str, Any]:
        expense = response.get("expense")
        if not isinstance(expense, dict):
            raise RequestFailed(200, "Server response did not include an expense")
        return expense

    # ==================== REMOTE OPERATIONS ====================

    def get_expenses(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Reload the cache from the server.

        Args:
            filters: Optional startDate, endDate and category; only truthy
                values are sent

        Returns:
            {"success": True, "expenses": [...]} or {"success": False, "error": ...}
        """
        filters = filters or {}
        params = {key: filters[key] for key in FILTER_PARAMS if filters.get(key)}
        try:
            response = self.gateway.get("/expenses", params=params or None)
        except ClientError as e:
            return self._fail(e)

        self.expenses = list(response.get("expenses") or [])
        logger.debug("[Expenses] Loaded %d expenses", len(self.expenses))
        return {"success": True, "expenses": self.expenses}

    def create_expense(self, expense_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            expense = self._expense_from(self.gateway.post("/expenses", expense_data))
        except ClientError as e:
            return self._fail(e)

        self.expenses.insert(0, expense)
        logger.info("[Expenses] Created expense %s", expense.get("_id"))
        self.notifier.notify("Expense added successfully!", NotificationType.SUCCESS)
        return {"success": True, "expense": expense}

    def update_expense(self, expense_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        try:
            expense = self._expense_from(self.gateway.put(f"/expenses/{expense_id}", updates))
        except ClientError as e:
            return self._fail(e)

        for index, cached in enumerate(self.expenses):
            if cached.get("_id") == expense_id:
                self.expenses[index] = expense
                break
        else:
            # Server accepted the change but the cache never held this record
            logger.debug("[Expenses] Updated expense %s is not cached", expense_id)

        self.notifier.notify("Expense updated!", NotificationType.SUCCESS)
        return {"success": True, "expense": expense}

    def delete_expense(self, expense_id: str) -> Dict[str, Any]:
        try:
            self.gateway.delete(f"/expenses/{expense_id}")
        except ClientError as e:
            return self._fail(e)

        self.expenses = [e for e in self.expenses if e.get("_id") != expense_id]
        logger.info("[Expenses] Deleted expense %s", expense_id)
        self.notifier.notify("Expense deleted!", NotificationType.SUCCESS)
        return {"success": True}

    def get_statistics(self, period: str = "month") -> Dict[str, Any]:
        """Server-side aggregation for ``period``, returned unmodified."""
        try:
            response = self.gateway.get("/expenses/statistics", params={"period": period})
        except ClientError as e:
            return self._fail(e)
        return {"success": True, "statistics": response.get("statistics")}

    # ==================== LOCAL VIEWS ====================

    def calculate_totals(self) -> Dict[str, Any]:
        return services.calculate_totals(self.expenses)

    def get_category(self, category_id: Optional[str]) -> Category:
        for category in self.categories:
            if category.id == category_id:
                return category
        return FALLBACK_CATEGORY

    def filter_expenses(self, criteria: Optional[Dict[str, Any]] = None, expenses=None) -> List[Dict[str, Any]]:
        return services.filter_expenses(self.expenses if expenses is None else expenses, criteria)

    def sort_expenses(self, expenses, sort_by: str = "date", order: str = "desc") -> List[Dict[str, Any]]:
        return services.sort_expenses(expenses, sort_by, order)
