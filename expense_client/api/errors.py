"""Error taxonomy shared by the gateway and the managers built on it."""


class ClientError(Exception):
    """Base class for every failure surfaced by the client core."""

    default_message = "Request failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkUnavailable(ClientError):
    """The request never reached the server."""

    default_message = "Network error. Please check your connection."


class SessionExpired(ClientError):
    """The server answered 401; the stored session has been dropped."""

    default_message = "Session expired. Please login again."


class RequestFailed(ClientError):
    """The server answered with a non-success status."""

    def __init__(self, status, message=None):
        self.status = status
        super().__init__(message or f"HTTP error! status: {status}")


class ValidationFailure(ClientError):
    """A local precondition failed before anything was sent."""

    default_message = "Invalid input"
