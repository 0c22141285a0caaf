import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from csvofx.errors import ParseError


DEBIT_MARKER = "D"
POSTED_DATE_FORMAT = "%m/%d/%Y"

# Vendor exports leave ", Inc" unquoted inside payee names.  The comma, any
# spaces and a trailing "." go with it; "inc" must be a whole word so ",Income"
# survives, and the match never crosses a line break.
_COMPANY_SUFFIX = re.compile(r",[ \t]*inc\b\.?", re.IGNORECASE)
_CENTS = Decimal("0.01")
_AMOUNT_NOISE = re.compile(r"[$(),\s]")
_POSTED_DATE_SHAPE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")


# ---------- cleaning ----------
def strip_company_suffix(text: str) -> str:
    """Remove ``, Inc`` style suffixes from raw CSV text before parsing."""
    return _COMPANY_SUFFIX.sub("", text)


def is_debit_flag(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return str(raw).strip() == DEBIT_MARKER


def clean_amount(raw: Optional[str], is_debit: bool = False, row: Optional[int] = None) -> Decimal:
    """Parse a currency cell such as ``$1,234.56`` or ``(42.10)`` exactly.

    Parentheses are only stripped; the sign comes from the debit flag, which
    negates the parsed value.
    """
    text = _AMOUNT_NOISE.sub("", "" if raw is None else str(raw))
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ParseError(row, "amount", raw, "not a decimal number") from None
    if not value.is_finite():
        raise ParseError(row, "amount", raw, "not a finite number")
    try:
        value.quantize(_CENTS)
    except InvalidOperation:
        raise ParseError(row, "amount", raw, "too large to render in cents") from None
    return -value if is_debit else value


def parse_posted_date(raw: Optional[str], row: Optional[int] = None) -> date:
    text = "" if raw is None else str(raw).strip()
    if not _POSTED_DATE_SHAPE.fullmatch(text):
        raise ParseError(row, "posted_date", raw, "expected MM/DD/YYYY")
    try:
        return datetime.strptime(text, POSTED_DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(row, "posted_date", raw, str(exc)) from None


def clean_unique_id(raw: Optional[str]) -> str:
    if raw is None:
        return ""
    return str(raw).strip().replace('"', "")


__all__ = [
    "DEBIT_MARKER",
    "strip_company_suffix",
    "is_debit_flag",
    "clean_amount",
    "parse_posted_date",
    "clean_unique_id",
]
