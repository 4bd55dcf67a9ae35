"""
Finance Tracker - terminal client for a personal transactions API.

Usage:
    from finance_tracker import TransactionsAPI, TransactionStore

    api = TransactionsAPI("http://localhost:8080/api/transactions")
    store = TransactionStore(api)

    await store.load_all()
    store.update_draft_field("description", "Coffee")
    await store.submit()
"""

from finance_tracker.api import (
    ApiError,
    NoResponse,
    ServerError,
    SetupError,
    TransactionsAPI,
    describe_error,
)
from finance_tracker.models import Creating, Draft, Editing, Mode, Transaction, TransactionType
from finance_tracker.store import TrackerState, TransactionStore

__all__ = [
    "ApiError",
    "Creating",
    "Draft",
    "Editing",
    "Mode",
    "NoResponse",
    "ServerError",
    "SetupError",
    "TrackerState",
    "Transaction",
    "TransactionStore",
    "TransactionType",
    "TransactionsAPI",
    "describe_error",
]
