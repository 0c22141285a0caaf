"""Transaction-type selection for OFX ``<TRNTYPE>`` elements.

The type comes from the debit flag captured during normalization, never from
the sign of the amount.
"""

from typing import Sequence

import numpy as np

from csvofx.models import Transaction


DEBIT = "DEBIT"
CREDIT = "CREDIT"


def infer_trntype_series(transactions: Sequence[Transaction]) -> list[str]:
    flags = np.fromiter((txn.is_debit for txn in transactions), dtype=bool, count=len(transactions))
    return np.where(flags, DEBIT, CREDIT).tolist()
