"""Unit tests for CSV ingestion."""

import httpx
import pytest

from txn_explorer.core.config import DataSourceConfig
from txn_explorer.core.errors import NetworkError, ParseError
from txn_explorer.services.ingestion_service import CsvIngestionService, parse_csv

REMOTE_URL = "https://data.example.com/transactions.csv"


def remote_config(**overrides) -> DataSourceConfig:
    fields = {
        "location": REMOTE_URL,
        "max_attempts": 3,
        "base_delay_seconds": 0,
        "max_delay_seconds": 0,
    }
    fields.update(overrides)
    return DataSourceConfig(**fields)


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestParseCsv:
    """Test parse_csv."""

    def test_header_and_rows(self, sample_csv, sample_records):
        """Test the sample export parses into string records."""
        assert parse_csv(sample_csv) == sample_records

    def test_quoted_fields(self):
        """Test quoted fields with commas stay whole."""
        records = parse_csv('name,city\n"Smith, Alice","New York"\n')
        assert records == [{"name": "Smith, Alice", "city": "New York"}]

    def test_blank_lines_skipped(self):
        """Test empty lines are ignored."""
        assert parse_csv("a,b\n\n1,2\n\n") == [{"a": "1", "b": "2"}]

    def test_header_only(self):
        """Test a header without rows is an empty dataset."""
        assert parse_csv("a,b\n") == []

    def test_empty_text(self):
        """Test empty input is an empty dataset."""
        assert parse_csv("") == []

    def test_field_count_mismatch(self):
        """Test rows with the wrong number of fields are parse errors."""
        with pytest.raises(ParseError) as exc_info:
            parse_csv("a,b\n1,2,3\n4\n")
        assert exc_info.value.details["errors"] == [
            "Too many fields on row 2",
            "Too few fields on row 3",
        ]
        assert exc_info.value.message.startswith("CSV parsing errors:")


@pytest.mark.asyncio
class TestRemoteIngestion:
    """Test loading over HTTP."""

    async def test_success(self, sample_csv, sample_records):
        """Test a successful download."""
        service = CsvIngestionService(
            remote_config(), client=client_for(lambda request: httpx.Response(200, text=sample_csv))
        )
        assert await service.load_records() == sample_records

    async def test_http_error_retried_then_raised(self):
        """Test a failing status is retried up to max attempts."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        service = CsvIngestionService(remote_config(), client=client_for(handler))
        with pytest.raises(NetworkError) as exc_info:
            await service.load_records()
        assert len(calls) == 3
        assert exc_info.value.message == "HTTP 503: Service Unavailable"

    async def test_transport_error_retried(self):
        """Test connection failures are retried."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        service = CsvIngestionService(remote_config(max_attempts=2), client=client_for(handler))
        with pytest.raises(NetworkError) as exc_info:
            await service.load_records()
        assert len(calls) == 2
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    async def test_recovers_after_transient_failure(self, sample_csv, sample_records):
        """Test a later attempt can succeed."""
        responses = [httpx.Response(500), httpx.Response(200, text=sample_csv)]

        def handler(request):
            return responses.pop(0)

        service = CsvIngestionService(remote_config(), client=client_for(handler))
        assert await service.load_records() == sample_records
        assert responses == []

    async def test_parse_error_not_retried(self):
        """Test a malformed payload fails on the first attempt."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, text="a,b\n1,2,3\n")

        service = CsvIngestionService(remote_config(), client=client_for(handler))
        with pytest.raises(ParseError):
            await service.load_records()
        assert len(calls) == 1


@pytest.mark.asyncio
class TestLocalIngestion:
    """Test loading from a local file."""

    async def test_local_file(self, data_source_config, sample_records):
        """Test reading the configured file."""
        assert await CsvIngestionService(data_source_config).load_records() == sample_records

    async def test_byte_order_mark_stripped(self, tmp_path):
        """Test a UTF-8 BOM does not leak into the first column name."""
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffa,b\n1,2\n".encode("utf-8"))
        config = DataSourceConfig(location=str(path))
        assert await CsvIngestionService(config).load_records() == [{"a": "1", "b": "2"}]

    async def test_missing_file(self, tmp_path):
        """Test a missing file is a network error after every attempt."""
        config = DataSourceConfig(
            location=str(tmp_path / "missing.csv"),
            max_attempts=2,
            base_delay_seconds=0,
            max_delay_seconds=0,
        )
        with pytest.raises(NetworkError):
            await CsvIngestionService(config).load_records()

    async def test_undecodable_file(self, tmp_path):
        """Test invalid UTF-8 is a parse error."""
        path = tmp_path / "bad.csv"
        path.write_bytes(b"a,b\n\xff\xfe,1\n")
        with pytest.raises(ParseError):
            await CsvIngestionService(DataSourceConfig(location=str(path))).load_records()


class TestDataSourceConfig:
    """Test data source location handling."""

    def test_remote_detection(self):
        """Test http(s) locations are remote."""
        assert DataSourceConfig(location="https://x/y.csv").is_remote is True
        assert DataSourceConfig(location="http://x/y.csv").is_remote is True
        assert DataSourceConfig(location="./data.csv").is_remote is False
