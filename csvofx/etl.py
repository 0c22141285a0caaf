import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from csvofx.cleaning import (
    clean_amount,
    clean_unique_id,
    is_debit_flag,
    parse_posted_date,
    strip_company_suffix,
)
from csvofx.columns import normalize_columns, resolve_columns
from csvofx.config import DEFAULT_CONFIG, ConverterConfig
from csvofx.errors import MissingFieldError
from csvofx.io import read_input_text, read_rows
from csvofx.models import ColumnMapping, Transaction, TransactionSet


logger = logging.getLogger(__name__)


def _cell(raw_row: Mapping[str, Any], column: str, header: str, row: int) -> str:
    value = raw_row.get(column)
    # read_rows pads short rows with None.
    if not isinstance(value, str):
        raise MissingFieldError(header, row)
    return value


def build_transaction(
    raw_row: Mapping[str, Any],
    columns: Mapping[str, str],
    mapping: ColumnMapping,
    row: int,
) -> Transaction:
    """Assemble one :class:`Transaction` from a raw row, failing on the first bad field.

    ``columns`` maps each semantic field to the normalized header token (see
    :func:`csvofx.columns.resolve_columns`); ``mapping`` supplies the
    configured header names used in error messages.
    """

    cells: Dict[str, str] = {
        field_name: _cell(raw_row, columns[field_name], getattr(mapping, field_name), row)
        for field_name in ColumnMapping.field_names()
    }

    is_debit = is_debit_flag(cells["debit_flag"])
    return Transaction(
        payee=cells["payee"],
        amount=clean_amount(cells["amount"], is_debit, row=row),
        posted_date=parse_posted_date(cells["posted_date"], row=row),
        unique_id=clean_unique_id(cells["unique_id"]),
        is_debit=is_debit,
    )


def normalize_rows(df: pd.DataFrame, mapping: ColumnMapping) -> TransactionSet:
    """Turn parsed CSV rows into a date-ordered transaction set."""

    df = normalize_columns(df)
    columns = resolve_columns(mapping, df.columns)
    mapped = df[list(columns.values())]

    records = [
        build_transaction(raw_row, columns, mapping, row)
        for row, raw_row in enumerate(mapped.to_dict(orient="records"), start=1)
    ]

    # Python's sort is stable, so same-day rows keep their input order.
    ordered = tuple(sorted(records, key=lambda txn: txn.posted_date))
    logger.debug("Normalized %d transactions", len(ordered))
    return ordered


def prepare_text(text: str, config: ConverterConfig = DEFAULT_CONFIG) -> TransactionSet:
    sanitized = strip_company_suffix(text)
    df = read_rows(sanitized, quotechar=config.quotechar)
    return normalize_rows(df, config.column_mapping)


# ---------- ETL ----------
def load_and_prepare(path: Path, config: Optional[ConverterConfig] = None) -> TransactionSet:
    config = config or DEFAULT_CONFIG
    text = read_input_text(path, encoding=config.encoding)
    transactions = prepare_text(text, config)
    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions
