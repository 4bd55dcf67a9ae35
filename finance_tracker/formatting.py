"""Presentation helpers shared by the tracker view."""

from __future__ import annotations

from typing import Optional

from rich.text import Text

from finance_tracker.models import Transaction
from finance_tracker.store import TrackerState

INCOME_STYLE = "green"
EXPENSE_STYLE = "red"


def row_style(transaction: Transaction) -> str:
    return INCOME_STYLE if transaction.is_income else EXPENSE_STYLE


def amount_text(transaction: Transaction) -> str:
    return f"${transaction.amount}"


def row_cells(transaction: Transaction) -> tuple[Text, ...]:
    """Cells for one list row: description, date, amount, type, edit, delete."""
    style = row_style(transaction)
    return (
        Text(transaction.description, style="bold"),
        Text(transaction.date, style="dim"),
        Text(amount_text(transaction), style=f"bold {style}"),
        Text(transaction.type.value.capitalize(), style=style),
        Text("Edit", style="blue underline"),
        Text("Delete", style="red underline"),
    )


def banner_class(state: TrackerState) -> Optional[str]:
    """CSS class of the status banner, or None when it should be hidden."""
    if state.message is None:
        return None
    return "error" if state.is_error else "success"


def submit_label(state: TrackerState) -> str:
    if state.is_loading:
        return "Processing..."
    if state.is_editing:
        return "Update Transaction"
    return "Add Transaction"


def form_title(state: TrackerState) -> str:
    return "Edit Transaction" if state.is_editing else "Add New Transaction"
