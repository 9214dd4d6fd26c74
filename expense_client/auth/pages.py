"""Login and registration page commands."""
from typing import Any, Dict

from expense_client.api.errors import ClientError
from expense_client.utils.enums import NotificationType
from expense_client.utils.validators import passwords_match, require_keys


class AuthPages:
    def __init__(self, session, navigator, notifier, dashboard_page="/index.html"):
        self.session = session
        self.navigator = navigator
        self.notifier = notifier
        self.dashboard_page = dashboard_page

    def enter(self) -> bool:
        """True if the page may be shown; signed-in users are sent to the dashboard."""
        return not self.session.redirect_if_auth()

    def _finish(self, result: Dict[str, Any]) -> Dict[str, Any]:
        if result["success"]:
            self.navigator.navigate(self.dashboard_page)
        return result

    def _reject(self, error: ClientError) -> Dict[str, Any]:
        self.notifier.notify(error.message, NotificationType.ERROR)
        return {"success": False, "error": error.message}

    def submit_login(self, email: str, password: str) -> Dict[str, Any]:
        credentials = {"email": email, "password": password}
        try:
            require_keys(credentials, "email", "password")
        except ClientError as e:
            return self._reject(e)
        return self._finish(self.session.login(credentials))

    def submit_register(self, name: str, email: str, password: str, confirm_password: str) -> Dict[str, Any]:
        user_data = {"name": name, "email": email, "password": password}
        try:
            passwords_match(password, confirm_password)
            require_keys(user_data, "name", "email", "password")
        except ClientError as e:
            return self._reject(e)
        return self._finish(self.session.register(user_data))
