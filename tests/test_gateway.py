from unittest import mock

import pytest
import requests

from expense_client.api import NetworkUnavailable, RequestFailed, RequestGateway, SessionExpired, ValidationFailure
from expense_client.core import Navigator
from expense_client.extensions import MemorySessionStore


def _response(status, body=b"", url="http://api.test/thing"):
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    response.url = url
    return response


def _gateway(response=None, side_effect=None, store=None, navigator=None):
    http = mock.Mock(spec=requests.Session)
    if side_effect is not None:
        http.request.side_effect = side_effect
    else:
        http.request.return_value = response
    return RequestGateway(
        "http://api.test/",
        store if store is not None else MemorySessionStore(),
        navigator=navigator or Navigator(),
        http=http,
    ), http


def test_auth_header_attached_only_when_required():
    store = MemorySessionStore()
    store.save("t1", {"id": 1})
    gateway, http = _gateway(_response(200, b"{}"), store=store)

    gateway.get("/expenses")
    assert http.request.call_args.kwargs["headers"]["Authorization"] == "Bearer t1"

    gateway.post("/auth/login", {"email": "a@b.com"}, require_auth=False)
    assert "Authorization" not in http.request.call_args.kwargs["headers"]


def test_no_token_means_unauthenticated_request():
    gateway, http = _gateway(_response(200, b"{}"))
    gateway.get("/expenses")
    headers = http.request.call_args.kwargs["headers"]
    assert "Authorization" not in headers
    assert headers["Content-Type"] == "application/json"


def test_request_builds_url_and_body():
    gateway, http = _gateway(_response(200, b'{"ok": true}'))
    assert gateway.put("/expenses/e1", {}) == {"ok": True}

    args, kwargs = http.request.call_args
    assert args == ("PUT", "http://api.test/expenses/e1")
    assert kwargs["json"] == {}
    assert "timeout" not in kwargs


def test_delete_sends_no_body():
    gateway, http = _gateway(_response(200, b"{}"))
    gateway.delete("/expenses/e1")
    assert "json" not in http.request.call_args.kwargs


def test_server_message_used_for_failures():
    gateway, _ = _gateway(_response(400, b'{"message": "Amount is required"}'))
    with pytest.raises(RequestFailed) as exc:
        gateway.post("/expenses", {})
    assert exc.value.status == 400
    assert exc.value.message == "Amount is required"


def test_error_field_used_when_message_missing():
    gateway, _ = _gateway(_response(409, b'{"error": "User already exists"}'))
    with pytest.raises(RequestFailed) as exc:
        gateway.post("/auth/register", {}, require_auth=False)
    assert exc.value.message == "User already exists"


def test_generic_message_without_server_text():
    gateway, _ = _gateway(_response(500, b"{}"))
    with pytest.raises(RequestFailed) as exc:
        gateway.get("/expenses")
    assert exc.value.message == "HTTP error! status: 500"


def test_non_json_error_body_gets_generic_message():
    gateway, _ = _gateway(_response(502, b"<html>Bad Gateway</html>"))
    with pytest.raises(RequestFailed) as exc:
        gateway.get("/expenses")
    assert exc.value.status == 502
    assert exc.value.message == "HTTP error! status: 502"


def test_non_json_success_body_is_a_failure():
    gateway, _ = _gateway(_response(200, b"not json"))
    with pytest.raises(RequestFailed) as exc:
        gateway.get("/expenses")
    assert exc.value.message == "Invalid response from server"


@pytest.mark.parametrize("body", [b"[]", b"null", b"42", b'"ok"'])
def test_success_body_that_is_not_an_object_is_a_failure(body):
    gateway, _ = _gateway(_response(200, body))
    with pytest.raises(RequestFailed) as exc:
        gateway.get("/expenses")
    assert exc.value.status == 200
    assert exc.value.message == "Invalid response from server"


def test_unencodable_body_is_a_validation_failure():
    gateway, _ = _gateway(
        side_effect=requests.exceptions.InvalidJSONError("Out of range float values are not JSON compliant")
    )
    with pytest.raises(ValidationFailure) as exc:
        gateway.post("/expenses", {"amount": float("inf")})
    assert not isinstance(exc.value, NetworkUnavailable)


def test_unencodable_body_never_reaches_a_real_session():
    http = requests.Session()
    http.send = mock.Mock()
    gateway = RequestGateway("http://api.test", MemorySessionStore(), http=http)

    with pytest.raises(ValidationFailure):
        gateway.post("/expenses", {"amount": float("inf")})
    http.send.assert_not_called()


def test_empty_success_body_decodes_to_empty_dict():
    gateway, _ = _gateway(_response(204))
    assert gateway.delete("/expenses/e1") == {}


def test_transport_failure_is_network_unavailable():
    gateway, _ = _gateway(side_effect=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(NetworkUnavailable) as exc:
        gateway.get("/expenses")
    assert exc.value.message == "Network error. Please check your connection."
    assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)


def test_401_clears_session_and_redirects_whatever_the_body():
    store = MemorySessionStore()
    store.save("t1", {"id": 1})
    navigator = Navigator(initial="/index.html")
    expired = []
    gateway, _ = _gateway(_response(401, b'{"message": "ignored"}'), store=store, navigator=navigator)
    gateway.add_expiry_listener(lambda: expired.append(True))

    with pytest.raises(SessionExpired) as exc:
        gateway.get("/expenses")

    assert exc.value.message == "Session expired. Please login again."
    assert store.get("token") is None
    assert store.get("user") is None
    assert navigator.current == "/login.html"
    assert expired == [True]


def test_401_interceptor_runs_before_other_hooks():
    calls = []
    gateway, _ = _gateway(_response(401, b"not json"))
    gateway.response_hooks.append(lambda response: calls.append(response.status_code))

    with pytest.raises(SessionExpired):
        gateway.post("/auth/login", {}, require_auth=False)
    assert calls == []


def test_timeout_passed_when_configured():
    http = mock.Mock(spec=requests.Session)
    http.request.return_value = _response(200, b"{}")
    gateway = RequestGateway("http://api.test", MemorySessionStore(), http=http, timeout=2.5)

    gateway.get("/expenses", params={"category": "food"})
    kwargs = http.request.call_args.kwargs
    assert kwargs["timeout"] == 2.5
    assert kwargs["params"] == {"category": "food"}
