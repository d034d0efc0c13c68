"""Data Transfer Objects for exchange records."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# A spreadsheet cell: source value, or "" when a merged row has no value
CellValue = str | int | float


@dataclass(frozen=True)
class FundingPayment:
    future: str
    id: int
    payment: float  # negative when the account received funding
    rate: float
    time: str  # ISO-8601, as returned by the exchange

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "FundingPayment":
        return cls(
            future=raw["future"],
            id=raw["id"],
            payment=raw["payment"],
            rate=raw["rate"],
            time=raw["time"],
        )

    def to_row(self) -> list[CellValue]:
        return [self.future, self.payment, self.rate, self.time]


@dataclass(frozen=True)
class AccountPosition:
    future: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "AccountPosition":
        return cls(future=raw["future"])


@dataclass(frozen=True)
class SpotMarginHistory:
    coin: str
    cost: float
    rate: float
    size: float
    time: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "SpotMarginHistory":
        return cls(
            coin=raw["coin"],
            cost=raw["cost"],
            rate=raw["rate"],
            size=raw["size"],
            time=raw["time"],
        )


@dataclass(frozen=True)
class MergedRow:
    """Funding payment and margin borrow record sharing a row position."""

    future: CellValue = ""
    payment: CellValue = ""
    rate: CellValue = ""
    time: CellValue = ""
    coin: CellValue = ""
    cost: CellValue = ""
    borrow_rate: CellValue = ""
    size: CellValue = ""
    borrow_time: CellValue = ""

    def to_row(self) -> list[CellValue]:
        return [
            self.future,
            self.payment,
            self.rate,
            self.time,
            self.coin,
            self.cost,
            self.borrow_rate,
            self.size,
            self.borrow_time,
        ]


@dataclass
class FetchResult(Generic[T]):
    """Outcome of a fetch: records on success, the rejection reason otherwise.

    Lets callers tell "no data this period" apart from "request rejected".
    """

    success: bool
    records: list[T] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def ok(cls, records: list[T]) -> "FetchResult[T]":
        return cls(success=True, records=records)

    @classmethod
    def failed(cls, error: str) -> "FetchResult[T]":
        return cls(success=False, records=[], error=error)
