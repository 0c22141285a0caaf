"""Record types shared by the normalizer and the OFX renderer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Dict, Iterator, Tuple


@dataclass(frozen=True)
class ColumnMapping:
    """Source CSV header for each semantic transaction field."""

    payee: str = "Description"
    amount: str = "Amount"
    posted_date: str = "Post Date"
    unique_id: str = "Reference"
    debit_flag: str = "Debit/Credit"

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def items(self) -> Iterator[Tuple[str, str]]:
        for name in self.field_names():
            yield name, getattr(self, name)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())


@dataclass(frozen=True)
class Transaction:
    """A normalized bank transaction.

    ``amount`` is already negated for debit rows; ``is_debit`` is kept
    separately so the renderer never has to infer the type from the sign.
    """

    payee: str
    amount: Decimal
    posted_date: date
    unique_id: str
    is_debit: bool


# Ordered ascending by posted_date, ties in input order.
TransactionSet = Tuple[Transaction, ...]


__all__ = ["ColumnMapping", "Transaction", "TransactionSet"]
