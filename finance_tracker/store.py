"""State store behind the transaction tracker view.

The store owns one immutable ``TrackerState`` snapshot. Operations build a
new snapshot and push it to every subscriber; views never mutate state
directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from finance_tracker.api.client import TransactionsAPI
from finance_tracker.api.errors import ApiError, describe_error
from finance_tracker.models import Creating, Draft, Editing, Mode, Transaction

logger = logging.getLogger(__name__)

ADDED_MESSAGE = "Transaction added successfully!"
UPDATED_MESSAGE = "Transaction updated successfully!"
DELETED_MESSAGE = "Transaction deleted successfully!"
DELETE_FAILED_MESSAGE = "Error deleting transaction."

Listener = Callable[["TrackerState"], None]


@dataclass(frozen=True)
class TrackerState:
    """Everything the tracker view renders."""

    transactions: tuple[Transaction, ...] = ()
    draft: Draft = field(default_factory=Draft)
    mode: Mode = field(default_factory=Creating)
    message: Optional[str] = None
    is_loading: bool = False

    @property
    def editing_id(self) -> Optional[Any]:
        if isinstance(self.mode, Editing):
            return self.mode.transaction_id
        return None

    @property
    def is_editing(self) -> bool:
        return isinstance(self.mode, Editing)

    @property
    def is_error(self) -> bool:
        return self.message is not None and self.message.startswith("Error")


class TransactionStore:
    """CRUD operations for the tracker, with subscriber notification."""

    def __init__(self, api: TransactionsAPI, state: Optional[TrackerState] = None) -> None:
        self.api = api
        self._state = state or TrackerState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> TrackerState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes: Any) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # -- operations ----------------------------------------------------------

    async def load_all(self) -> None:
        """Replace the list with the server's current collection.

        On failure the previously loaded list stays visible.
        """
        try:
            transactions = await self.api.list_transactions()
        except ApiError as exc:
            logger.error(f"Failed to fetch transactions: {exc}")
            self._set(message=describe_error(exc))
            return

        changes: dict[str, Any] = {"transactions": tuple(transactions)}
        if self._state.is_error:
            changes["message"] = None
        self._set(**changes)

    def update_draft_field(self, name: str, value: str) -> None:
        self._set(draft=self._state.draft.with_field(name, value))

    async def submit(self) -> None:
        """Create or update from the draft, then refetch the list.

        A call made while another submit is in flight does nothing.
        """
        if self._state.is_loading:
            logger.debug("Submit ignored, another submit is in flight")
            return

        self._set(is_loading=True)
        try:
            state = self._state
            payload = state.draft.to_payload()
            try:
                if isinstance(state.mode, Editing):
                    await self.api.update_transaction(state.mode.transaction_id, payload)
                    self._set(message=UPDATED_MESSAGE, mode=Creating())
                else:
                    await self.api.create_transaction(payload)
                    self._set(message=ADDED_MESSAGE)
            except ApiError as exc:
                logger.error(f"Failed to save transaction: {exc}")
                self._set(message=describe_error(exc))
                return

            self._set(draft=Draft(), mode=Creating())
            await self.load_all()
        finally:
            self._set(is_loading=False)

    def begin_edit(self, transaction: Transaction) -> None:
        """Switch the form to editing the given transaction. No server call.

        Ignored while a submit is in flight.
        """
        if self._state.is_loading:
            return
        self._set(draft=Draft.from_transaction(transaction), mode=Editing(transaction.id))

    def cancel_edit(self) -> None:
        if self._state.is_loading:
            return
        self._set(draft=Draft(), mode=Creating())

    async def remove_one(self, transaction_id: Any) -> None:
        try:
            await self.api.delete_transaction(transaction_id)
        except ApiError as exc:
            logger.error(f"Failed to delete transaction {transaction_id}: {exc}")
            self._set(message=DELETE_FAILED_MESSAGE)
            return

        self._set(message=DELETED_MESSAGE)
        await self.load_all()
