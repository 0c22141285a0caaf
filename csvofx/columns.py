import re
from collections import Counter
from typing import Dict, Iterable

import pandas as pd

from csvofx.errors import MissingFieldError, ParseError
from csvofx.models import ColumnMapping


def normalize_header(name: object) -> str:
    return re.sub(r"[^a-z0-9]+", "_", str(name).strip().lower()).strip("_")


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    normalized = [normalize_header(col) for col in df.columns]

    copy = df.copy()
    copy.columns = normalized
    return copy


def resolve_columns(mapping: ColumnMapping, available: Iterable[str]) -> Dict[str, str]:
    """Map each semantic field to the normalized header present in the file.

    Raises :class:`MissingFieldError` naming the configured header when the
    file does not carry it, and :class:`ParseError` when several headers
    normalize to the same mapped name.  Unmapped duplicates are ignored.
    """

    counts = Counter(available)
    resolved: Dict[str, str] = {}
    for field_name, header in mapping.items():
        token = normalize_header(header)
        if counts[token] == 0:
            raise MissingFieldError(header)
        if counts[token] > 1:
            raise ParseError(
                None, "header", header, f"{counts[token]} columns normalize to {token!r}"
            )
        resolved[field_name] = token
    return resolved
