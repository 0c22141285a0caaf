import csv
import io
import logging
from pathlib import Path

import pandas as pd

from csvofx.errors import EmptyInputError, InputIOError, OutputIOError, ParseError


logger = logging.getLogger(__name__)

OFX_SUFFIX = ".ofx"


def read_input_text(path: Path, encoding: str = "utf-8-sig") -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise InputIOError(f"cannot read input file {path}: {exc}") from exc


def read_rows(text: str, quotechar: str = "|") -> pd.DataFrame:
    """Parse CSV text into a DataFrame of raw strings.

    The first row is the header.  Every cell is kept as ``str`` (no NA
    inference, so ``N/A`` stays text).  Rows shorter than the header are padded
    with ``None`` so callers can tell a missing field from an empty one; rows
    longer than the header raise :class:`ParseError`.  Blank lines are skipped.
    """

    reader = csv.reader(io.StringIO(text, newline=""), quotechar=quotechar)
    try:
        rows = [row for row in reader if row]
    except csv.Error as exc:
        raise ParseError(None, "csv", None, f"line {reader.line_num}: {exc}") from exc

    if not rows:
        raise EmptyInputError("input file contains no CSV header or rows")

    header, data = rows[0], rows[1:]
    width = len(header)

    padded = []
    for row_number, row in enumerate(data, start=1):
        if len(row) > width:
            raise ParseError(row_number, "csv", row, f"expected {width} fields, saw {len(row)}")
        padded.append(row + [None] * (width - len(row)))

    df = pd.DataFrame(padded, columns=header, dtype=object)
    logger.debug("Parsed %d CSV rows with columns %s", len(df), list(df.columns))
    return df


def derive_output_path(input_path: Path) -> Path:
    """Replace the input extension with ``.ofx``, or append it when absent."""
    return input_path.with_suffix(OFX_SUFFIX)


def write_output(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputIOError(f"cannot write output file {path}: {exc}") from exc
