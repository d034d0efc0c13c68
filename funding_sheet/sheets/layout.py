"""Sheet layout: headers, body rows and summary formulas.

Two layouts exist. The narrow one holds funding payments only; the wide one
adds margin borrow columns when margin history was merged in. Summary cells
sit to the right of the data and use sheet formulas over whole columns, so
they stay correct whatever the row count.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from funding_sheet.exchange.dto import CellValue, FundingPayment, MergedRow
from funding_sheet.reporting.date_window import DateWindow

NARROW_HEADER = ["future", "payment", "rate", "time"]
WIDE_HEADER = [
    "future",
    "payment",
    "rate",
    "time",
    "coin",
    "cost",
    "borrow_rate",
    "size",
    "borrow_time",
]


@dataclass(frozen=True)
class SummaryCell:
    label_cell: str
    label: str
    value_cell: str
    formula: str


@dataclass(frozen=True)
class SheetUpdate:
    sheet_name: str
    header: list[str]
    rows: list[list[CellValue]]
    summary_cells: list[SummaryCell]

    @property
    def is_wide(self) -> bool:
        return self.header == WIDE_HEADER


def sheet_name(window: DateWindow, market: str | None = None) -> str:
    """"OCT" for the combined sheet, "OCT_BTC-PERP" for a single market."""
    return f"{window.label}_{market}" if market else window.label


def narrow_summary(hkd_rate: float) -> list[SummaryCell]:
    return [
        SummaryCell("F2", "Net (usd)", "G2", "=ABS(SUM(B2:B))"),
        SummaryCell("F3", "hkd", "G3", f"=MULTIPLY(G2,{hkd_rate})"),
        SummaryCell("F4", "Avg rate", "G4", "=AVERAGE(C2:C)"),
    ]


def wide_summary(hkd_rate: float) -> list[SummaryCell]:
    return [
        SummaryCell("K2", "Funding (usd)", "L2", "=ABS(SUM(B2:B))"),
        SummaryCell("K3", "Borrow (usd)", "L3", "=SUM(F2:F)"),
        SummaryCell("K4", "Net (usd)", "L4", "=L2-L3"),
        SummaryCell("K5", "hkd", "L5", f"=MULTIPLY(L4,{hkd_rate})"),
        SummaryCell("K6", "Avg funding rate", "L6", "=AVERAGE(C2:C)"),
        SummaryCell("K7", "Avg borrow rate", "L7", "=AVERAGE(G2:G)"),
    ]


def build_sheet_update(
    window: DateWindow,
    records: Sequence[FundingPayment] | Sequence[MergedRow],
    hkd_rate: float,
    market: str | None = None,
) -> SheetUpdate:
    wide = any(isinstance(record, MergedRow) for record in records)
    return SheetUpdate(
        sheet_name=sheet_name(window, market),
        header=list(WIDE_HEADER if wide else NARROW_HEADER),
        rows=[record.to_row() for record in records],
        summary_cells=wide_summary(hkd_rate) if wide else narrow_summary(hkd_rate),
    )
