"""Typed view of raw cell values.

Every cell in a record is a string. Sorting and the numeric predicate
operators need to know whether a cell is a number, so both go through
``parse_value`` instead of coercing ad hoc.
"""

import re
from dataclasses import dataclass

# Plain decimal literal: sign, digits with optional fraction, optional exponent
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class NumberValue:
    number: float
    raw: str


@dataclass(frozen=True)
class TextValue:
    text: str


CellValue = NumberValue | TextValue


def parse_value(raw: str | None) -> CellValue:
    """Classify a raw cell as a number or as text.

    Missing and empty cells are text. Only values that fully match a decimal
    literal (surrounding whitespace ignored) are numbers, so ``"nan"``,
    ``"Infinity"`` and ``"1_000"`` stay text.
    """
    if raw is None:
        return TextValue("")
    candidate = raw.strip()
    if candidate and _NUMBER_PATTERN.fullmatch(candidate):
        return NumberValue(float(candidate), raw)
    return TextValue(raw)


def is_numeric(raw: str | None) -> bool:
    return isinstance(parse_value(raw), NumberValue)
