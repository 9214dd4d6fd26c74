"""
Request Gateway - the single path every remote call takes.

Classifies raw outcomes into the client error taxonomy:
- body that cannot be encoded as JSON    -> ValidationFailure
- transport failure (no response)        -> NetworkUnavailable
- 401 from any endpoint                  -> SessionExpired
- any other non-2xx status               -> RequestFailed(status, message)

Responses pass through ``response_hooks`` in order before classification.
The first hook is the session-expiry interceptor, so a 401 always clears the
stored session and redirects to the login page, whatever the body says.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from expense_client.api.errors import NetworkUnavailable, RequestFailed, SessionExpired, ValidationFailure
from expense_client.extensions import TOKEN_KEY

logger = logging.getLogger(__name__)


class RequestGateway:
    """HTTP client for the expense service."""

    DEFAULT_HEADERS = {
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        base_url: str,
        store,
        navigator=None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        login_page: str = "/login.html",
    ):
        """
        Args:
            base_url: Service root, e.g. http://localhost:5000/api
            store: Session store holding the bearer token
            navigator: Receives the login-page redirect on session expiry
            http: requests.Session to send through (a fresh one if omitted)
            timeout: Seconds before giving up; None waits indefinitely
            login_page: Where to send the user when the session expires
        """
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.navigator = navigator
        self.http = http or requests.Session()
        self.timeout = timeout
        self.login_page = login_page

        self._expiry_listeners: List[Callable[[], None]] = []
        self.response_hooks: List[Callable[[requests.Response], None]] = [
            self._expire_session_on_unauthorized,
        ]

    def add_expiry_listener(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` whenever the server invalidates the session."""
        self._expiry_listeners.append(callback)

    def get_token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY)

    def _headers(self, require_auth: bool) -> Dict[str, str]:
        headers = dict(self.DEFAULT_HEADERS)
        if require_auth:
            token = self.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _expire_session_on_unauthorized(self, response: requests.Response) -> None:
        if response.status_code != 401:
            return

        logger.info("[Gateway] 401 from %s, clearing session", response.url)
        self.store.clear()
        for callback in self._expiry_listeners:
            callback()
        if self.navigator is not None:
            self.navigator.navigate(self.login_page)
        raise SessionExpired()

    def _parse(self, response: requests.Response) -> Dict[str, Any]:
        status = response.status_code
        ok = 200 <= status < 300

        if not response.content:
            data = {}
        else:
            try:
                data = response.json()
            except ValueError:
                if ok:
                    raise RequestFailed(status, "Invalid response from server")
                raise RequestFailed(status)

        if not ok:
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            logger.info("[Gateway] %s failed with %s", response.url, status)
            raise RequestFailed(status, message if isinstance(message, str) else None)

        # Every success envelope is an object; anything else is malformed
        if not isinstance(data, dict):
            raise RequestFailed(status, "Invalid response from server")
        return data

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Any] = None,
        require_auth: bool = False,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Issue a request against the service.

        Args:
            endpoint: Path below the base URL, e.g. /expenses
            method: HTTP method
            body: JSON-serializable payload; None sends no body
            require_auth: Attach the stored bearer token when there is one
            params: Query string parameters

        Returns:
            Decoded JSON payload

        Raises:
            SessionExpired, NetworkUnavailable, RequestFailed, ValidationFailure
        """
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {"headers": self._headers(require_auth)}
        if body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = params
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        logger.debug("[Gateway] %s %s", method, url)
        try:
            response = self.http.request(method, url, **kwargs)
        except requests.exceptions.InvalidJSONError as e:
            logger.warning("[Gateway] %s %s body could not be encoded: %s", method, url, e)
            raise ValidationFailure("Request contains values that cannot be sent") from e
        except requests.exceptions.RequestException as e:
            logger.warning("[Gateway] %s %s did not reach the server: %s", method, url, e)
            raise NetworkUnavailable() from e

        for hook in self.response_hooks:
            hook(response)

        return self._parse(response)

    # ==================== HTTP VERBS ====================

    def get(self, endpoint: str, require_auth: bool = True, params: Optional[Dict[str, Any]] = None):
        return self.request(endpoint, method="GET", require_auth=require_auth, params=params)

    def post(self, endpoint: str, body: Optional[Any] = None, require_auth: bool = True):
        return self.request(endpoint, method="POST", body=body, require_auth=require_auth)

    def put(self, endpoint: str, body: Optional[Any] = None, require_auth: bool = True):
        return self.request(endpoint, method="PUT", body=body, require_auth=require_auth)

    def delete(self, endpoint: str, require_auth: bool = True):
        return self.request(endpoint, method="DELETE", require_auth=require_auth)
