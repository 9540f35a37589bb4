"""Sort engine for records of unknown schema."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from txn_explorer.domain.records import Record
from txn_explorer.domain.values import NumberValue, parse_value


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    """``column=None`` keeps ingestion order."""

    column: str | None = None
    direction: SortDirection = SortDirection.ASC


def toggle_sort(current: SortConfig, column: str) -> SortConfig:
    """Same column flips the direction; a new column starts ascending."""
    if current.column == column and current.direction == SortDirection.ASC:
        return SortConfig(column=column, direction=SortDirection.DESC)
    return SortConfig(column=column, direction=SortDirection.ASC)


# Text below this sorts ahead of every number, text at or above it after.
_DIGIT_FLOOR = "0"


def sort_key(raw: str | None) -> tuple[int, float, str]:
    """Numbers compare numerically, everything else lexically.

    Text is split around the numbers at the first digit, which keeps blank
    cells and values like ``"$5"`` ahead of numbers and letters after them,
    the same as a plain string comparison would place them.
    """
    value = parse_value(raw)
    if isinstance(value, NumberValue):
        return (1, value.number, "")
    if value.text < _DIGIT_FLOOR:
        return (0, 0.0, value.text)
    return (2, 0.0, value.text)


def sort_records(records: Iterable[Record], config: SortConfig) -> list[Record]:
    """Stable sort by one column. Ties keep their input order in both directions."""
    if config.column is None:
        return list(records)
    column = config.column
    return sorted(
        records,
        key=lambda record: sort_key(record.get(column)),
        reverse=config.direction == SortDirection.DESC,
    )
