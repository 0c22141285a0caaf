"""Validation helpers for OFX generation."""

from __future__ import annotations

from datetime import date
from typing import Sequence, Tuple

from csvofx.errors import EmptyInputError
from csvofx.models import Transaction


def assert_ofx_ready(transactions: Sequence[Transaction]) -> Tuple[date, date]:
    """Return the statement date range, or raise when there is nothing to render.

    The set is expected to be sorted already, so the range is taken from the
    first and last records.
    """

    if not transactions:
        raise EmptyInputError(
            "OFX generation requires at least one transaction to compute the statement range."
        )
    return transactions[0].posted_date, transactions[-1].posted_date
