"""Domain types for the finance tracker client."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Union


class TransactionType(str, Enum):
    """Whether a transaction adds or removes money."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """A transaction as last returned by the server.

    ``amount`` is kept as the text the server sent. The client does not apply
    any sign convention relative to ``type``; whatever the server stores is
    shown and sent back unchanged.
    """

    id: Any
    description: str
    amount: str
    date: str
    type: TransactionType

    @classmethod
    def from_dict(cls, data: dict) -> Transaction:
        """Build a transaction from a JSON object.

        Raises:
            ValueError: If a field is missing or the type is unknown.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        missing = [name for name in ("id", "description", "amount", "date", "type") if name not in data]
        if missing:
            raise ValueError(f"Transaction is missing fields: {', '.join(missing)}")
        return cls(
            id=data["id"],
            description=str(data["description"]),
            amount=str(data["amount"]),
            date=str(data["date"]),
            type=TransactionType(data["type"]),
        )

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


@dataclass(frozen=True)
class Draft:
    """Form fields staged for the next create or update."""

    description: str = ""
    amount: str = ""
    date: str = ""
    type: str = TransactionType.INCOME.value

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> Draft:
        return cls(
            description=transaction.description,
            amount=transaction.amount,
            date=transaction.date,
            type=transaction.type.value,
        )

    def with_field(self, name: str, value: str) -> Draft:
        """Return a copy with one field replaced. Values are not validated."""
        if name not in DRAFT_FIELDS:
            raise KeyError(name)
        return replace(self, **{name: value})

    def to_payload(self) -> dict:
        """JSON body for create and update requests."""
        return {
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "type": self.type,
        }


DRAFT_FIELDS = tuple(f.name for f in fields(Draft))


@dataclass(frozen=True)
class Creating:
    """Submitting the form creates a new transaction."""


@dataclass(frozen=True)
class Editing:
    """Submitting the form updates the transaction with this id."""

    transaction_id: Any


Mode = Union[Creating, Editing]
