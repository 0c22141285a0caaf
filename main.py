"""
main.py

Convert a bank CSV export into an OFX 1.02 statement for personal-finance
import tools.

Usage:
    pip install -e .            # installs pandas, numpy, PyYAML
    csvofx transactions.csv [statement.ofx] [--config settings.yaml]

The output path defaults to the input path with its extension replaced by
``.ofx``.  Set ``ACCOUNT_NUMBER_OVERRIDE`` to change the account id embedded in
the statement.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from csvofx.build_ofx import build_ofx
from csvofx.config import ConverterConfig, load_config
from csvofx.errors import ConversionError
from csvofx.etl import load_and_prepare
from csvofx.io import derive_output_path, write_output


LOG_LEVEL_ENV = "CSVOFX_LOG_LEVEL"

logger = logging.getLogger("csvofx")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
        level = getattr(logging, name, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="csvofx",
        description="Convert a bank CSV export into an OFX 1.02 statement.",
    )
    parser.add_argument("input", type=Path, help="CSV export to convert")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="destination OFX file (default: input path with an .ofx extension)",
    )
    parser.add_argument(
        "--config", type=Path, help="JSON or YAML file overriding the column mapping and statement settings"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def convert(input_path: Path, output_path: Optional[Path], config: ConverterConfig) -> Path:
    """Run the whole pipeline; nothing is written unless rendering succeeds."""

    out_path = output_path or derive_output_path(input_path)

    transactions = load_and_prepare(input_path, config)
    ofx_text = build_ofx(
        transactions,
        acctid=config.account_number,
        bankid=config.bank_id,
        currency=config.currency,
        tz_offset=config.tz_offset,
        escape=config.escape_markup,
    )

    write_output(out_path, ofx_text)
    return out_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        out_path = convert(args.input, args.output, config)
    except ConversionError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("OFX written to %s", out_path)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
