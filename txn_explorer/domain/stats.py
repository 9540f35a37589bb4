"""Summary statistics over the full transaction dataset."""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from txn_explorer.domain.filtering import DEFAULT_FRAUD_COLUMN, DEFAULT_STATUS_COLUMN
from txn_explorer.domain.records import Record

FRAUD_FLAG = "1"
DECLINED_STATE = "declined"

_RATE_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class Stats:
    total: int
    fraud_count: int
    declined_count: int
    fraud_rate: float


def percentage(part: int, whole: int) -> float:
    """``part`` as a percentage of ``whole``, rounded half up to two places."""
    exact = Decimal(part) * 100 / Decimal(whole)
    return float(exact.quantize(_RATE_PLACES, rounding=ROUND_HALF_UP))


def compute_stats(
    records: Sequence[Record],
    status_column: str = DEFAULT_STATUS_COLUMN,
    fraud_column: str = DEFAULT_FRAUD_COLUMN,
    fraud_value: str = FRAUD_FLAG,
    declined_value: str = DECLINED_STATE,
) -> Stats:
    """Counts over every record, regardless of the current table query."""
    total = len(records)
    fraud_count = sum(1 for record in records if record.get(fraud_column) == fraud_value)
    declined_count = sum(1 for record in records if record.get(status_column) == declined_value)
    fraud_rate = percentage(fraud_count, total) if total > 0 else 0
    return Stats(
        total=total,
        fraud_count=fraud_count,
        declined_count=declined_count,
        fraud_rate=fraud_rate,
    )


def format_stats(stats: Stats) -> dict[str, str]:
    """Display strings for the stat cards.

    An empty dataset shows a bare ``0%``; otherwise the rate always has two
    decimals, including ``0.00%``.
    """
    if stats.total > 0:
        fraud_rate = f"{stats.fraud_rate:.2f}%"
    else:
        fraud_rate = "0%"
    return {
        "total": f"{stats.total:,}",
        "fraud_count": f"{stats.fraud_count:,}",
        "declined_count": f"{stats.declined_count:,}",
        "fraud_rate": fraud_rate,
    }
