"""Command-line front end for the expense client.

The session is kept in the configured session file, so `login` once and the
other commands reuse it until `logout` or the server expires it.
"""
import argparse
import getpass
import locale
import logging
import sys

from expense_client import create_client
from expense_client.config import Config
from expense_client.utils.formatting import format_currency, format_date


def _print_expenses(client, expenses):
    if not expenses:
        print("No expenses found")
        return
    for expense in expenses:
        category = client.expenses.get_category(expense.get("category"))
        label = expense.get("description") or category.name
        print(f"{expense.get('_id')}  {format_date(expense.get('date')):<13} "
              f"{category.icon} {label:<30} -{format_currency(expense.get('amount'))}")


def cmd_login(client, args):
    password = args.password or getpass.getpass("Password: ")
    return client.auth_pages.submit_login(args.email, password)["success"]


def cmd_register(client, args):
    password = args.password or getpass.getpass("Password: ")
    confirm = args.password or getpass.getpass("Confirm password: ")
    return client.auth_pages.submit_register(args.name, args.email, password, confirm)["success"]


def cmd_logout(client, args):
    client.dashboard.logout()
    return True


def cmd_whoami(client, args):
    if not client.auth.require_auth():
        return False
    name, _ = client.dashboard.user_badge()
    user = client.auth.get_current_user()
    print(f"{name} <{user.get('email', '')}>")
    return True


def cmd_list(client, args):
    summary = client.dashboard.open()
    if not summary or not summary["success"]:
        return False

    expenses = client.dashboard.apply_filters(search=args.search, category=args.category, sort=args.sort)
    _print_expenses(client, expenses)
    print(f"\nTotal: {format_currency(summary['total'])} across {summary['count']} transactions")
    for row in summary["breakdown"]:
        category = row["category"]
        print(f"  {category.icon} {category.name:<20} {format_currency(row['amount']):>12}  {row['percentage']}%")
    return True


def cmd_add(client, args):
    if not client.auth.require_auth():
        return False
    form = {"amount": args.amount, "category": args.category, "description": args.description, "date": args.date}
    return client.dashboard.submit_expense_form(form)["success"]


def cmd_edit(client, args):
    if not client.dashboard.open():
        return False
    form = client.dashboard.edit_form(args.expense_id)
    if form is None:
        print(f"Expense {args.expense_id} not found")
        return False
    for field in ("amount", "category", "description", "date"):
        value = getattr(args, field)
        if value is not None:
            form[field] = value
    return client.dashboard.submit_expense_form(form, expense_id=args.expense_id)["success"]


def cmd_delete(client, args):
    if not client.dashboard.open():
        return False

    def confirm(expense):
        if args.yes:
            return True
        return input("Are you sure you want to delete this expense? [y/N] ").strip().lower() == "y"

    return client.dashboard.request_delete(args.expense_id, confirm=confirm)["success"]


def cmd_stats(client, args):
    if not client.auth.require_auth():
        return False
    result = client.expenses.get_statistics(args.period)
    if result["success"]:
        print(result["statistics"])
    return result["success"]


def build_parser():
    parser = argparse.ArgumentParser(description="Personal expense tracker client")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login")
    p.add_argument("email")
    p.add_argument("--password")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("register")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("--password")
    p.set_defaults(func=cmd_register)

    p = sub.add_parser("logout")
    p.set_defaults(func=cmd_logout)

    p = sub.add_parser("whoami")
    p.set_defaults(func=cmd_whoami)

    p = sub.add_parser("list")
    p.add_argument("--search")
    p.add_argument("--category")
    p.add_argument("--sort", default="date-desc", help="date|amount|category, then -asc or -desc")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("add")
    p.add_argument("amount")
    p.add_argument("category")
    p.add_argument("--description", default="")
    p.add_argument("--date")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("edit")
    p.add_argument("expense_id")
    p.add_argument("--amount")
    p.add_argument("--category")
    p.add_argument("--description")
    p.add_argument("--date")
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("delete")
    p.add_argument("expense_id")
    p.add_argument("-y", "--yes", action="store_true")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("stats")
    p.add_argument("--period", default="month")
    p.set_defaults(func=cmd_stats)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s: %(message)s")

    # Category sorting collates with locale.strxfrm, which follows LC_COLLATE
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.getLogger(__name__).warning("Could not apply the environment's collation locale: %s", e)

    client = create_client()
    client.notifier.subscribe(lambda n: print(f"[{n.type.value}] {n.message}"))
    client.navigator.subscribe(lambda target: logging.getLogger(__name__).debug("navigate -> %s", target))

    return 0 if args.func(client, args) else 1


if __name__ == "__main__":
    sys.exit(main())
