"""In-memory store for ingested transaction records."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

Record = Mapping[str, str]


class RecordStore:
    """Holds the ordered transaction records of the current dataset.

    The column list is taken from the first record when the dataset is
    loaded and is not re-derived afterwards. Records are stored as read-only
    mappings; filtering and sorting always produce new sequences.
    """

    def __init__(self) -> None:
        self._records: tuple[Record, ...] = ()
        self._columns: tuple[str, ...] = ()
        self._loaded = False

    def load(self, raw_records: Iterable[Mapping[str, str]]) -> None:
        """Replace the dataset with a copy of ``raw_records``."""
        records = tuple(
            MappingProxyType(
                {str(key): "" if value is None else str(value) for key, value in row.items()}
            )
            for row in raw_records
        )
        self._records = records
        self._columns = tuple(records[0].keys()) if records else ()
        self._loaded = True

    def all(self) -> tuple[Record, ...]:
        """All records in ingestion order."""
        return self._records

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)
