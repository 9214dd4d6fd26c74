"""
Session Manager - authenticated identity and its lifecycle.

States:
- Anonymous: no token held
- Authenticated: token and user held in memory and in the session store

Every public call returns ``{"success": bool, ...}`` and emits exactly one
notification; gateway errors never escape.
"""
import json
import logging
from typing import Any, Dict, Optional

from expense_client.api.errors import ClientError, RequestFailed
from expense_client.extensions import TOKEN_KEY, USER_KEY
from expense_client.utils.enums import NotificationType
from expense_client.utils.validators import passwords_match

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the session token and the current user."""

    def __init__(self, gateway, store, notifier, navigator, login_page="/login.html", dashboard_page="/index.html"):
        self.gateway = gateway
        self.store = store
        self.notifier = notifier
        self.navigator = navigator
        self.login_page = login_page
        self.dashboard_page = dashboard_page

        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

        self.gateway.add_expiry_listener(self._forget)
        self.restore()

    def restore(self) -> None:
        """Load a persisted session; anything incomplete is discarded."""
        token = self.store.get(TOKEN_KEY)
        raw_user = self.store.get(USER_KEY)

        if not token and not raw_user:
            return

        user = None
        if token and raw_user:
            try:
                user = json.loads(raw_user)
            except ValueError:
                user = None

        if not isinstance(user, dict):
            logger.warning("[Session] Discarding incomplete stored session")
            self.store.clear()
            return

        self.token = token
        self.user = user
        logger.info("[Session] Restored session for user %s", user.get("id") or user.get("_id"))

    # ==================== QUERIES ====================

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        return self.user

    # ==================== STATE CHANGES ====================

    def set_session(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.store.save(token, user)

    def clear_session(self) -> None:
        self._forget()
        self.store.clear()

    def _forget(self) -> None:
        self.token = None
        self.user = None

    def _fail(self, error: ClientError) -> Dict[str, Any]:
        self.notifier.notify(error.message, NotificationType.ERROR)
        return {"success": False, "error": error.message}

    def _authenticate(self, endpoint: str, payload: Dict[str, Any], welcome: str) -> Dict[str, Any]:
        try:
            response = self.gateway.post(endpoint, payload, require_auth=False)
            token = response.get("token") or response.get("access_token")
            if not token:
                raise RequestFailed(200, "Authentication failed: no session token returned")
        except ClientError as e:
            logger.info("[Session] %s failed: %s", endpoint, e.message)
            return self._fail(e)

        user = response.get("user") or {}
        self.set_session(token, user)
        logger.info("[Session] Authenticated user %s", user.get("id") or user.get("_id"))
        self.notifier.notify(welcome, NotificationType.SUCCESS)
        return {"success": True, "user": user}

    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._authenticate("/auth/register", user_data, "Account created successfully!")

    def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        return self._authenticate("/auth/login", credentials, "Welcome back!")

    def logout(self) -> None:
        self.clear_session()
        logger.info("[Session] Logged out")
        self.notifier.notify("Logged out successfully", NotificationType.INFO)
        self.navigator.navigate(self.login_page)

    def update_profile(self, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Send profile changes and merge the returned fields into the current user."""
        try:
            response = self.gateway.put("/auth/profile", updates)
        except ClientError as e:
            return self._fail(e)

        self.user = {**(self.user or {}), **(response.get("user") or {})}
        if self.token:
            self.store.save(self.token, self.user)
        self.notifier.notify("Profile updated!", NotificationType.SUCCESS)
        return {"success": True, "user": self.user}

    def change_password(self, passwords: Dict[str, Any]) -> Dict[str, Any]:
        payload = dict(passwords)
        confirm = payload.pop("confirmPassword", None)
        try:
            if confirm is not None:
                passwords_match(payload.get("newPassword"), confirm)
            self.gateway.put("/auth/password", payload)
        except ClientError as e:
            return self._fail(e)

        self.notifier.notify("Password changed successfully!", NotificationType.SUCCESS)
        return {"success": True}

    # ==================== GUARDS ====================

    def require_auth(self) -> bool:
        """Gate a protected page; sends anonymous users to the login page."""
        if not self.is_authenticated():
            self.navigator.navigate(self.login_page)
            return False
        return True

    def redirect_if_auth(self) -> bool:
        """Gate a login/register page; sends signed-in users to the dashboard."""
        if self.is_authenticated():
            self.navigator.navigate(self.dashboard_page)
            return True
        return False
