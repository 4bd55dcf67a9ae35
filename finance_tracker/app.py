"""Finance tracker TUI, the main Textual application."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.validation import Function, Length, Number
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Select, Static

from finance_tracker.formatting import banner_class, form_title, row_cells, submit_label
from finance_tracker.models import Draft, Transaction, TransactionType
from finance_tracker.store import TrackerState, TransactionStore

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("description", "amount", "date")
TYPE_OPTIONS = [(t.value.capitalize(), t.value) for t in TransactionType]
ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _is_iso_date(value: str) -> bool:
    if not ISO_DATE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _has_cents_precision(value: str) -> bool:
    """At most two decimal places, like a 0.01 step."""
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return False
    return amount.is_finite() and amount.as_tuple().exponent >= -2


class StatusBanner(Static):
    """Success or error message from the last operation."""

    DEFAULT_CSS = """
    StatusBanner {
        height: auto;
        padding: 0 1;
        margin: 0 0 1 0;
    }
    StatusBanner.success {
        background: $success 30%;
        color: $text;
    }
    StatusBanner.error {
        background: $error 30%;
        color: $text;
    }
    """

    def show_state(self, state: TrackerState) -> None:
        cls = banner_class(state)
        self.display = cls is not None
        self.set_class(cls == "success", "success")
        self.set_class(cls == "error", "error")
        self.update(state.message or "")


class FinanceTrackerApp(App):
    """Personal finance tracker terminal UI."""

    TITLE = "Personal Finance Tracker"
    CSS = """
    #form {
        height: auto;
        padding: 0 1;
        border: round $accent;
    }
    #form-title {
        text-style: bold;
        margin-bottom: 1;
    }
    #form-fields Input, #form-fields Select {
        width: 1fr;
    }
    #form-fields {
        height: auto;
    }
    #submit {
        width: 100%;
        margin-top: 1;
    }
    #transactions {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("e", "edit_selected", "Edit"),
        Binding("d", "delete_selected", "Delete"),
        Binding("escape", "cancel_edit", "Cancel edit"),
    ]

    def __init__(self, store: TransactionStore) -> None:
        super().__init__()
        self.store = store
        self.sub_title = store.api.base_url
        self._unsubscribe = None
        self._rendered_transactions: Optional[tuple[Transaction, ...]] = None
        self._rows: dict[str, Transaction] = {}
        # Draft as currently shown in the form widgets
        self._shown_draft: Draft = store.state.draft

    def compose(self) -> ComposeResult:
        draft = self.store.state.draft
        yield Header()
        yield StatusBanner(id="message")
        with Vertical(id="form"):
            yield Label(form_title(self.store.state), id="form-title")
            with Horizontal(id="form-fields"):
                yield Input(
                    value=draft.description,
                    placeholder="Description",
                    id="description",
                    validators=[Length(minimum=1, failure_description="Description is required")],
                )
                yield Input(
                    value=draft.amount,
                    placeholder="Amount",
                    id="amount",
                    validators=[
                        Number(failure_description="Amount must be a number"),
                        Function(_has_cents_precision, "Amount can have at most two decimal places"),
                    ],
                )
                yield Input(
                    value=draft.date,
                    placeholder="YYYY-MM-DD",
                    id="date",
                    validators=[Function(_is_iso_date, "Date must be YYYY-MM-DD")],
                )
                yield Select(TYPE_OPTIONS, value=draft.type, allow_blank=False, id="type")
            yield Button(submit_label(self.store.state), id="submit", variant="primary")
        yield DataTable(id="transactions")
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one("#transactions", DataTable)
        table.add_column("Description", key="description")
        table.add_column("Date", key="date")
        table.add_column("Amount", key="amount")
        table.add_column("Type", key="type")
        table.add_column("", key="edit")
        table.add_column("", key="delete")

        self._unsubscribe = self.store.subscribe(self._render_state)
        self._render_state(self.store.state)
        await self.store.load_all()

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.store.api.close()

    # -- rendering -----------------------------------------------------------

    def _render_state(self, state: TrackerState) -> None:
        self.query_one(StatusBanner).show_state(state)
        self.query_one("#form-title", Label).update(form_title(state))

        shown = self._shown_draft
        for name in TEXT_FIELDS:
            field_input = self.query_one(f"#{name}", Input)
            value = getattr(state.draft, name)
            if value != getattr(shown, name):
                with field_input.prevent(Input.Changed):
                    field_input.value = value
            field_input.disabled = state.is_loading

        type_select = self.query_one("#type", Select)
        if state.draft.type != shown.type:
            with type_select.prevent(Select.Changed):
                type_select.value = state.draft.type
        type_select.disabled = state.is_loading

        submit = self.query_one("#submit", Button)
        submit.label = submit_label(state)
        submit.disabled = state.is_loading
        self._shown_draft = state.draft

        if state.transactions is not self._rendered_transactions:
            self._render_table(state.transactions)

    def _render_table(self, transactions: tuple[Transaction, ...]) -> None:
        table = self.query_one("#transactions", DataTable)
        table.clear()
        self._rows = {}
        # Keyed by position; ids are not guaranteed unique across types
        for index, transaction in enumerate(transactions):
            key = str(index)
            self._rows[key] = transaction
            table.add_row(*row_cells(transaction), key=key)
        self._rendered_transactions = transactions

    # -- form ----------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id in TEXT_FIELDS:
            # The widget already shows this value
            self._shown_draft = self._shown_draft.with_field(event.input.id, event.value)
            self.store.update_draft_field(event.input.id, event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "type" and isinstance(event.value, str):
            self._shown_draft = self._shown_draft.with_field("type", event.value)
            self.store.update_draft_field("type", event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.action_submit()

    def _form_problems(self) -> list[str]:
        problems = []
        for name in TEXT_FIELDS:
            field_input = self.query_one(f"#{name}", Input)
            result = field_input.validate(field_input.value)
            if result is not None and not result.is_valid:
                problems.extend(result.failure_descriptions)
        return problems

    def action_submit(self) -> None:
        if self.store.state.is_loading:
            return
        problems = self._form_problems()
        if problems:
            self.notify("\n".join(problems), title="Invalid transaction", severity="error")
            return
        self.run_worker(self.store.submit(), group="mutations")

    def action_cancel_edit(self) -> None:
        if self.store.state.is_editing:
            self.store.cancel_edit()

    # -- list ----------------------------------------------------------------

    def _selected_transaction(self) -> Optional[Transaction]:
        table = self.query_one("#transactions", DataTable)
        if table.row_count == 0:
            return None
        cell_key = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self._rows.get(cell_key.row_key.value)

    def on_data_table_cell_selected(self, event: DataTable.CellSelected) -> None:
        transaction = self._rows.get(event.cell_key.row_key.value)
        if transaction is None:
            return
        column = event.cell_key.column_key.value
        if column == "edit":
            self.store.begin_edit(transaction)
        elif column == "delete":
            self._delete(transaction)

    def action_edit_selected(self) -> None:
        transaction = self._selected_transaction()
        if transaction is not None:
            self.store.begin_edit(transaction)

    def action_delete_selected(self) -> None:
        transaction = self._selected_transaction()
        if transaction is not None:
            self._delete(transaction)

    def _delete(self, transaction: Transaction) -> None:
        logger.info(f"Deleting transaction {transaction.id}")
        self.run_worker(self.store.remove_one(transaction.id), group="mutations")

    async def action_refresh(self) -> None:
        await self.store.load_all()
