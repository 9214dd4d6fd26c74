"""Remote service access."""

from .errors import ClientError, NetworkUnavailable, RequestFailed, SessionExpired, ValidationFailure
from .gateway import RequestGateway

__all__ = [
    "RequestGateway",
    "ClientError",
    "NetworkUnavailable",
    "RequestFailed",
    "SessionExpired",
    "ValidationFailure",
]
