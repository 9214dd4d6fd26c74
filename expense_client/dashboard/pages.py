"""
Dashboard commands.

A UI layer (web, CLI, tests) drives the dashboard through these methods and
renders whatever they return.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from expense_client.api.errors import ClientError
from expense_client.utils.dates import date_part, today_iso
from expense_client.utils.enums import NotificationType
from expense_client.utils.validators import parse_amount, require_keys

logger = logging.getLogger(__name__)


class Dashboard:
    def __init__(self, session, expenses, notifier):
        self.session = session
        self.expenses = expenses
        self.notifier = notifier

    def open(self) -> Optional[Dict[str, Any]]:
        """Guard the page and load its data; None when the user must sign in first."""
        if not self.session.require_auth():
            return None
        return self.load()

    def load(self) -> Dict[str, Any]:
        result = self.expenses.get_expenses()
        if not result["success"]:
            return result
        return {"success": True, **self.summary()}

    def summary(self) -> Dict[str, Any]:
        totals = self.expenses.calculate_totals()
        return {
            "total": totals["total"],
            "count": len(self.expenses.expenses),
            "breakdown": self.category_breakdown(totals),
            "expenses": list(self.expenses.expenses),
        }

    def category_breakdown(self, totals: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Share of the total spent per category.

        Returns:
            List of {category, amount, percentage}; empty when nothing was spent
        """
        totals = totals or self.expenses.calculate_totals()
        total = totals["total"]
        if not total:
            return []

        return [
            {
                "category": self.expenses.get_category(category_id),
                "amount": amount,
                "percentage": round(amount / total * 100, 1),
            }
            for category_id, amount in totals["by_category"].items()
        ]

    def user_badge(self):
        """Display name and avatar initial for the signed-in user."""
        user = self.session.get_current_user() or {}
        name = user.get("name") or "User"
        return name, name[0].upper()

    # ==================== COMMANDS ====================

    def submit_expense_form(self, form: Dict[str, Any], expense_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Create an expense, or update ``expense_id`` when given.

        Form fields: amount, category, description, date (defaults to today).
        """
        try:
            require_keys(form, "amount", "category")
            expense_data = {
                "amount": parse_amount(form["amount"]),
                "category": form["category"],
                "description": form.get("description") or "",
                "date": form.get("date") or today_iso(),
            }
        except ClientError as e:
            self.notifier.notify(e.message, NotificationType.ERROR)
            return {"success": False, "error": e.message}

        if expense_id:
            result = self.expenses.update_expense(expense_id, expense_data)
        else:
            result = self.expenses.create_expense(expense_data)

        if result["success"]:
            self.load()
        return result

    def edit_form(self, expense_id: str) -> Optional[Dict[str, Any]]:
        """Form values for a cached expense, or None if it is not loaded."""
        for expense in self.expenses.expenses:
            if expense.get("_id") == expense_id:
                return {
                    "amount": expense.get("amount"),
                    "category": expense.get("category"),
                    "description": expense.get("description") or "",
                    "date": date_part(expense.get("date")),
                }
        return None

    def request_delete(self, expense_id: str, confirm: Optional[Callable[[Dict[str, Any]], bool]] = None) -> Dict[str, Any]:
        if confirm is not None:
            expense = next((e for e in self.expenses.expenses if e.get("_id") == expense_id), None)
            if not confirm(expense):
                logger.debug("[Dashboard] Delete of %s cancelled", expense_id)
                return {"success": False, "cancelled": True}

        result = self.expenses.delete_expense(expense_id)
        if result["success"]:
            self.load()
        return result

    def apply_filters(self, search: Optional[str] = None, category: Optional[str] = None, sort: Optional[str] = None):
        """
        Filtered (and optionally sorted) view of the cache.

        Args:
            search: Free text matched against description and category
            category: Category id
            sort: "<key>-<order>", e.g. "amount-desc"
        """
        filtered = self.expenses.filter_expenses({"search": search, "category": category})
        if sort:
            sort_by, _, order = sort.partition("-")
            filtered = self.expenses.sort_expenses(filtered, sort_by, order or "desc")
        return filtered

    def logout(self) -> None:
        self.session.logout()
