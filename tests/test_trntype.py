import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from csvofx.models import Transaction
from csvofx.trntype import infer_trntype_series


def _txn(amount: str, is_debit: bool) -> Transaction:
    return Transaction(
        payee="Payee",
        amount=Decimal(amount),
        posted_date=date(2016, 3, 4),
        unique_id="ID",
        is_debit=is_debit,
    )


def test_infer_trntype_series_follows_debit_flag_not_sign():
    transactions = [_txn("-42.10", True), _txn("15.00", False), _txn("42.10", True), _txn("-3.00", False)]

    assert infer_trntype_series(transactions) == ["DEBIT", "CREDIT", "DEBIT", "CREDIT"]


def test_infer_trntype_series_handles_empty_input():
    assert infer_trntype_series([]) == []

