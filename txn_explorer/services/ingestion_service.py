"""CSV ingestion for the transaction dataset.

The source is either a local file or an http(s) URL. Transport failures are
retried with exponential backoff; malformed payloads are not.
"""

import asyncio
import csv
import io
import logging
from pathlib import Path

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from txn_explorer.core.config import DataSourceConfig
from txn_explorer.core.errors import NetworkError, ParseError, should_retry

logger = logging.getLogger(__name__)


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse a header row plus comma-separated rows into records.

    Blank lines are skipped. A row with more or fewer fields than the header
    is a parse error rather than a silently padded record.
    """
    reader = csv.reader(io.StringIO(text))
    try:
        rows = [row for row in reader if row]
    except csv.Error as e:
        raise ParseError(f"CSV parsing failed: {e}", original_error=e) from e

    if not rows:
        return []

    header, *body = rows
    problems = []
    records = []
    for line_number, row in enumerate(body, start=2):
        if len(row) > len(header):
            problems.append(f"Too many fields on row {line_number}")
            continue
        if len(row) < len(header):
            problems.append(f"Too few fields on row {line_number}")
            continue
        records.append(dict(zip(header, row, strict=True)))

    if problems:
        raise ParseError(
            f"CSV parsing errors: {', '.join(problems)}",
            details={"errors": problems},
        )
    return records


class CsvIngestionService:
    """Loads transaction records from the configured data source."""

    def __init__(
        self,
        config: DataSourceConfig,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._client = client

    async def _fetch_remote(self) -> str:
        try:
            if self._client is not None:
                response = await self._client.get(self.config.location)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.get(self.config.location)
        except httpx.TransportError as e:
            raise NetworkError("Failed to fetch CSV file", original_error=e) from e

        if not response.is_success:
            raise NetworkError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                details={"status_code": response.status_code},
            )
        return response.text

    async def _read_local(self) -> str:
        path = Path(self.config.location)
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise NetworkError(f"Failed to read CSV file {path}", original_error=e) from e
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError("CSV file is not valid UTF-8", original_error=e) from e

    async def fetch_text(self) -> str:
        if self.config.is_remote:
            return await self._fetch_remote()
        return await self._read_local()

    async def _load_once(self) -> list[dict[str, str]]:
        text = await self.fetch_text()
        return parse_csv(text)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            "CSV data loading failed, retrying",
            extra={
                "attempt": retry_state.attempt_number,
                "retry_in_seconds": delay,
                "error": str(error),
            },
        )

    async def load_records(self) -> list[dict[str, str]]:
        """Load and parse the dataset, retrying network failures only.

        Raises:
            NetworkError: the source stayed unreachable for every attempt
            ParseError: the payload is not a well-formed CSV table
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=self.config.base_delay_seconds,
                max=self.config.max_delay_seconds,
            ),
            retry=retry_if_exception(should_retry),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    records = await self._load_once()
        except (NetworkError, ParseError) as e:
            logger.error(
                "CSV data loading failed",
                extra={"location": self.config.location, "code": e.code, "error": e.message},
            )
            raise

        logger.info(
            "Loaded transaction data",
            extra={"location": self.config.location, "records": len(records)},
        )
        return records
