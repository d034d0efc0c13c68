"""Merge funding payments and margin borrow history into sheet rows."""

import logging
from collections.abc import Sequence

from funding_sheet.exchange.dto import FundingPayment, MergedRow, SpotMarginHistory

logger = logging.getLogger(__name__)


def merge_records(
    funding: Sequence[FundingPayment], margin: Sequence[SpotMarginHistory]
) -> list[FundingPayment] | list[MergedRow]:
    """Pair the two series by position.

    Without margin history the funding payments come back unchanged. Otherwise
    the longer list sets the row count and the shorter one is padded with "".
    The series share no key; row i of one is assumed to match row i of the other.
    """
    if not margin:
        return list(funding)

    if len(funding) != len(margin):
        logger.debug(
            f"Merging unequal series: {len(funding)} funding payments, "
            f"{len(margin)} margin records"
        )

    rows = []
    for index in range(max(len(funding), len(margin))):
        payment = funding[index] if index < len(funding) else None
        borrow = margin[index] if index < len(margin) else None
        rows.append(
            MergedRow(
                future=payment.future if payment else "",
                payment=payment.payment if payment else "",
                rate=payment.rate if payment else "",
                time=payment.time if payment else "",
                coin=borrow.coin if borrow else "",
                cost=borrow.cost if borrow else "",
                borrow_rate=borrow.rate if borrow else "",
                size=borrow.size if borrow else "",
                borrow_time=borrow.time if borrow else "",
            )
        )
    return rows
