"""Render a normalized transaction set as an OFX 1.02 (SGML) statement.

Leaf elements are written without closing tags, as the SGML dialect allows.
Payee text is emitted verbatim unless ``escape_markup`` is requested, which is
only needed when the output is fed to a strict XML parser.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

import pandas as pd

from csvofx.date_time import POSTING_TIME, START_OF_DAY, ofx_date, ofx_datetime
from csvofx.models import Transaction
from csvofx.trntype import infer_trntype_series
from csvofx.validate import assert_ofx_ready


logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

OFX_HEADER = """OFXHEADER:100
DATA:OFXSGML
VERSION:102
SECURITY:NONE
ENCODING:UTF-8
CHARSET:NONE
COMPRESSION:NONE
OLDFILEUID:NONE
NEWFILEUID:NONE
"""


def format_amount(amount: Decimal) -> str:
    """Fixed-point with two places, computed on the decimal itself."""
    quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        quantized = abs(quantized)
    return f"{quantized:.2f}"


def escape_markup(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _render_transaction(txn: Transaction, trntype: str, escape: bool) -> str:
    name = escape_markup(txn.payee) if escape else txn.payee
    return "\n".join(
        [
            "<STMTTRN>",
            f"<TRNTYPE>{trntype}",
            f"<DTPOSTED>{ofx_date(txn.posted_date, POSTING_TIME)}",
            f"<TRNAMT>{format_amount(txn.amount)}",
            f"<FITID>{txn.unique_id}",
            f"<NAME>{name}",
            "</STMTTRN>",
        ]
    )


# ---------- OFX ----------
def build_ofx(
    transactions: Sequence[Transaction],
    acctid: str,
    bankid: str = "000000000",
    currency: str = "USD",
    *,
    now: Optional[datetime] = None,
    tz_offset: str = "-6",
    escape: bool = False,
) -> str:
    first_date, last_date = assert_ofx_ready(transactions)

    if now is None:
        now = pd.Timestamp.now().to_pydatetime()
    dtserver = ofx_datetime(now, tz_offset)

    trntypes = infer_trntype_series(transactions)
    trns_str = "\n".join(
        _render_transaction(txn, trntype, escape)
        for txn, trntype in zip(transactions, trntypes)
    )

    logger.debug(
        "Rendering %d transactions from %s to %s", len(transactions), first_date, last_date
    )

    return f"""{OFX_HEADER}
<OFX>
<SIGNONMSGSRSV1>
<SONRS>
<STATUS>
<CODE>0
<SEVERITY>INFO
</STATUS>
<DTSERVER>{dtserver}
<LANGUAGE>ENG
</SONRS>
</SIGNONMSGSRSV1>
<BANKMSGSRSV1>
<STMTTRNRS>
<TRNUID>0
<STATUS>
<CODE>0
<SEVERITY>INFO
<MESSAGE>OK
</STATUS>
<STMTRS>
<CURDEF>{currency}
<BANKACCTFROM>
<BANKID>{bankid}
<ACCTID>{acctid}
<ACCTTYPE>CHECKING
</BANKACCTFROM>
<BANKTRANLIST>
<DTSTART>{ofx_date(first_date, START_OF_DAY)}
<DTEND>{ofx_date(last_date, POSTING_TIME)}
{trns_str}
</BANKTRANLIST>
<LEDGERBAL>
<BALAMT>0.00
<DTASOF>{dtserver}
</LEDGERBAL>
</STMTRS>
</STMTTRNRS>
</BANKMSGSRSV1>
</OFX>
"""
