from dataclasses import dataclass
from typing import Union

from expense_client.config import Config
from expense_client.api import RequestGateway
from expense_client.auth import AuthPages, SessionManager
from expense_client.core import Navigator, Notifier
from expense_client.dashboard import Dashboard
from expense_client.expenses import ExpenseManager
from expense_client.extensions import FileSessionStore, MemorySessionStore, init_store


@dataclass
class Client:
    """Everything one signed-in (or anonymous) user session needs."""
    config: Config
    store: Union[FileSessionStore, MemorySessionStore]
    notifier: Notifier
    navigator: Navigator
    gateway: RequestGateway
    auth: SessionManager
    expenses: ExpenseManager
    auth_pages: AuthPages
    dashboard: Dashboard


def create_client(config_class=Config, http=None, store=None):
    """
    Wire up a client.

    Args:
        config_class: Settings class, Config or a subclass
        http: requests.Session to send through
        store: Session store; defaults to the file store from config
    """
    config = config_class()
    if store is None:
        store = init_store(config)

    notifier = Notifier(duration=config.NOTIFICATION_DURATION)
    navigator = Navigator()
    gateway = RequestGateway(
        config.API_BASE_URL,
        store,
        navigator=navigator,
        http=http,
        timeout=config.REQUEST_TIMEOUT,
        login_page=config.LOGIN_PAGE,
    )

    auth = SessionManager(
        gateway, store, notifier, navigator,
        login_page=config.LOGIN_PAGE,
        dashboard_page=config.DASHBOARD_PAGE,
    )
    expenses = ExpenseManager(gateway, notifier)

    return Client(
        config=config,
        store=store,
        notifier=notifier,
        navigator=navigator,
        gateway=gateway,
        auth=auth,
        expenses=expenses,
        auth_pages=AuthPages(auth, navigator, notifier, dashboard_page=config.DASHBOARD_PAGE),
        dashboard=Dashboard(auth, expenses, notifier),
    )
