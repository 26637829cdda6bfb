"""HTTP client for the Gridfox data API."""

import time
from types import TracebackType
from urllib.parse import quote, urlencode

import httpx
import structlog

from statuspage.gridfox.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from statuspage.gridfox.redact import redact_headers


logger = structlog.get_logger()

API_KEY_HEADER = "gridfox-api-key"

# Left unescaped in query strings, matching a browser-built Gridfox URL.
QUERY_SAFE_CHARS = "$(),"


class GridfoxResponseError(Exception):
    """Raised when a Gridfox response body has no records list."""

    def __init__(self, table_name: str, reason: str) -> None:
        """Initialize the error.

        Args:
            table_name: Table that was queried.
            reason: What was wrong with the body.
        """
        self.table_name = table_name
        self.reason = reason
        super().__init__(f"Unexpected Gridfox response for table '{table_name}': {reason}")


class GridfoxClient:
    """Reads records from Gridfox tables.

    Issues plain GET requests to ``{api_url}/data/{table}``. There is no
    retry; HTTP and decoding errors propagate to the caller.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gridfox API key.
            api_url: API root URL.
            timeout_seconds: Per-request timeout.
            transport: Optional transport, used by tests.
        """
        self._headers = {
            API_KEY_HEADER: api_key,
            "content-type": "application/json",
        }
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers=self._headers,
            timeout=timeout_seconds,
            transport=transport,
        )
        self._log = logger.bind(component="gridfox", api_url=api_url)

    def fetch_records(
        self,
        table_name: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, object]]:
        """Fetch the records of a table.

        Args:
            table_name: Gridfox table name.
            params: Query parameters (``paged``, ``$filter``).

        Returns:
            The ``records`` list from the response body.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status.
            GridfoxResponseError: If the body has no ``records`` list.
        """
        start_time = time.perf_counter()
        log = self._log.bind(table=table_name, params=params or {})
        log.debug("gridfox_request", headers=redact_headers(self._headers))

        response = self._client.get(self._table_url(table_name, params))
        response.raise_for_status()
        payload = response.json()

        records = payload.get("records") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise GridfoxResponseError(table_name, "missing 'records' list")

        log.info(
            "gridfox_records_fetched",
            status_code=response.status_code,
            records=len(records),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return records

    @staticmethod
    def _table_url(table_name: str, params: dict[str, str] | None) -> str:
        """Build a table path with a %20-escaped query.

        httpx form-encodes params (spaces as '+'); Gridfox $filter
        expressions are sent percent-encoded instead.
        """
        path = f"/data/{table_name}"
        if not params:
            return path
        query = urlencode(params, safe=QUERY_SAFE_CHARS, quote_via=quote)
        return f"{path}?{query}"

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "GridfoxClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
