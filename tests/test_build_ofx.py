import re
import sys
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from csvofx.build_ofx import build_ofx, format_amount
from csvofx.date_time import ofx_date, ofx_datetime
from csvofx.errors import EmptyInputError
from csvofx.etl import prepare_text
from csvofx.models import Transaction
from csvofx.validate import assert_ofx_ready


NOW = datetime(2016, 3, 10, 8, 5, 9)
HEADER = "Post Date,Reference,Description,Amount,Debit/Credit\n"


def _txn(posted: date, amount: str, is_debit: bool = False, fitid: str = "F1", payee: str = "Payee"):
    return Transaction(
        payee=payee,
        amount=Decimal(amount),
        posted_date=posted,
        unique_id=fitid,
        is_debit=is_debit,
    )


def _stmttrns(ofx_text: str) -> list:
    return re.findall(r"<STMTTRN>\n(.*?)\n</STMTTRN>", ofx_text, flags=re.S)


def test_ofx_datetime_formats_timestamp():
    assert ofx_datetime(NOW) == "20160310080509.000[-6]"
    assert ofx_datetime(NOW, "+1") == "20160310080509.000[+1]"


def test_ofx_datetime_handles_none():
    assert ofx_datetime(None) is None


def test_ofx_date_uses_fixed_time():
    assert ofx_date(date(2016, 3, 4)) == "20160304130000"
    assert ofx_date(date(2016, 3, 4), "000000") == "20160304000000"


@pytest.mark.parametrize(
    "amount, expected",
    [
        ("15", "15.00"),
        ("-42.1", "-42.10"),
        ("1234.565", "1234.57"),
        ("0.1", "0.10"),
        ("-0.00", "0.00"),
        ("1E+3", "1000.00"),
    ],
)
def test_format_amount(amount, expected):
    assert format_amount(Decimal(amount)) == expected


def test_assert_ofx_ready_rejects_empty_set():
    with pytest.raises(EmptyInputError, match="at least one transaction"):
        assert_ofx_ready(())


def test_assert_ofx_ready_returns_range():
    transactions = (_txn(date(2016, 3, 1), "1"), _txn(date(2016, 3, 9), "2"))

    assert assert_ofx_ready(transactions) == (date(2016, 3, 1), date(2016, 3, 9))


def test_build_ofx_requires_transactions():
    with pytest.raises(EmptyInputError):
        build_ofx((), acctid="12345", now=NOW)


def test_build_ofx_uses_transaction_date_range():
    transactions = (
        _txn(date(2016, 3, 4), "1.00", fitid="A"),
        _txn(date(2016, 3, 9), "2.00", fitid="B"),
    )

    ofx_text = build_ofx(transactions, acctid="12345", now=NOW)

    assert "<DTSTART>20160304000000\n" in ofx_text
    assert "<DTEND>20160309130000\n" in ofx_text
    assert "<DTSERVER>20160310080509.000[-6]\n" in ofx_text
    assert "<DTASOF>20160310080509.000[-6]\n" in ofx_text
    assert "<BALAMT>0.00\n" in ofx_text
    assert "<ACCTID>12345\n" in ofx_text


def test_build_ofx_header_block():
    ofx_text = build_ofx((_txn(date(2016, 3, 4), "1"),), acctid="1", now=NOW)

    header, body = ofx_text.split("\n\n", 1)
    assert header.splitlines() == [
        "OFXHEADER:100",
        "DATA:OFXSGML",
        "VERSION:102",
        "SECURITY:NONE",
        "ENCODING:UTF-8",
        "CHARSET:NONE",
        "COMPRESSION:NONE",
        "OLDFILEUID:NONE",
        "NEWFILEUID:NONE",
    ]
    assert body.startswith("<OFX>\n")
    assert body.rstrip().endswith("</OFX>")
    assert "<MESSAGE>OK\n" in body


def test_build_ofx_renders_credit_and_debit_blocks():
    text = (
        HEADER
        + "03/04/2016,C1,|Credit Row|,|$15.00|,\n"
        + "03/04/2016,D1,|Debit Row|,|$42.10|,D\n"
    )
    transactions = prepare_text(text)

    ofx_text = build_ofx(transactions, acctid="12345", now=NOW)
    blocks = _stmttrns(ofx_text)

    assert blocks == [
        "<TRNTYPE>CREDIT\n<DTPOSTED>20160304130000\n<TRNAMT>15.00\n<FITID>C1\n<NAME>Credit Row",
        "<TRNTYPE>DEBIT\n<DTPOSTED>20160304130000\n<TRNAMT>-42.10\n<FITID>D1\n<NAME>Debit Row",
    ]


def test_build_ofx_keeps_payee_quotes_verbatim():
    text = HEADER + '03/04/2016,Q1,|Bob\'s "Shop", Inc|,|$15.00|,\n'

    ofx_text = build_ofx(prepare_text(text), acctid="12345", now=NOW)

    assert '<NAME>Bob\'s "Shop"\n' in ofx_text


def test_build_ofx_escapes_markup_on_request():
    transactions = (_txn(date(2016, 3, 4), "1", payee="A&B <Co>"),)

    plain = build_ofx(transactions, acctid="1", now=NOW)
    escaped = build_ofx(transactions, acctid="1", now=NOW, escape=True)

    assert "<NAME>A&B <Co>\n" in plain
    assert "<NAME>A&amp;B &lt;Co&gt;\n" in escaped


def test_build_ofx_account_settings():
    ofx_text = build_ofx(
        (_txn(date(2016, 3, 4), "1"),),
        acctid="999",
        bankid="111000025",
        currency="CAD",
        now=NOW,
        tz_offset="0:GMT",
    )

    assert "<BANKID>111000025\n" in ofx_text
    assert "<CURDEF>CAD\n" in ofx_text
    assert "<DTSERVER>20160310080509.000[0:GMT]\n" in ofx_text
