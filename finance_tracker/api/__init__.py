"""Client for the Transactions REST API."""

from finance_tracker.api.client import TransactionsAPI
from finance_tracker.api.errors import (
    ApiError,
    NoResponse,
    ServerError,
    SetupError,
    describe_error,
)

__all__ = [
    "ApiError",
    "NoResponse",
    "ServerError",
    "SetupError",
    "TransactionsAPI",
    "describe_error",
]
