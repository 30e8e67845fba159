"""REST client for the journal API using httpx."""

import logging
from typing import Any, Optional

import httpx

from tradejournal.codec import entry_from_wire, new_entry_payload
from tradejournal.models import FilterState, JournalEntry, TradingStats, TradingSummary
from tradejournal.remote.base import BaseJournalRemote
from tradejournal.remote.errors import (
    EntryNotFoundError,
    RemoteError,
    ResponseError,
    TransportError,
)

logger = logging.getLogger(__name__)


class RestJournalRemote(BaseJournalRemote):
    """Journal remote talking to the Django REST backend.

    Endpoints live under ``{base_url}/journal/``. Multi-valued fields
    travel as comma-joined strings, ``pnl`` as a decimal string and
    ``date`` as ``YYYY-MM-DD`` or null.
    """

    DEFAULT_BASE_URL = "http://localhost:8000/api"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the REST remote.

        Args:
            base_url: API root, e.g. ``http://localhost:8000/api``.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
        entry_id: Optional[str] = None,
    ) -> httpx.Response:
        """Send a request and map failures onto remote errors.

        Args:
            method: HTTP method.
            path: Path relative to the API root.
            params: Query parameters.
            json: JSON body.
            entry_id: Set for single-entry lookups so 404 becomes
                EntryNotFoundError.

        Returns:
            Successful response.
        """
        logger.debug("%s %s params=%s body=%s", method, path, params, json)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.status_code == 404 and entry_id is not None:
            raise EntryNotFoundError(entry_id, response.text)
        if not response.is_success:
            raise ResponseError(response.status_code, response.text)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from {response.request.url}") from e

    def _entry(self, data: Any) -> JournalEntry:
        try:
            return entry_from_wire(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Malformed journal entry: {data!r}") from e

    @staticmethod
    def _entry_path(entry_id: str) -> str:
        return f"/journal/entries/{entry_id}/"

    async def list_entries(self, filter_state: FilterState) -> list[JournalEntry]:
        """List entries for a filter (``?month=&year=`` or ``?all=true``)."""
        response = await self._request(
            "GET", "/journal/entries/", params=filter_state.query_params()
        )
        data = self._json(response)
        # Paginated responses wrap the rows in "results"
        if isinstance(data, dict):
            if "results" not in data:
                raise RemoteError("Paginated entry list has no results")
            data = data["results"]
        if not isinstance(data, list):
            raise RemoteError(f"Expected a list of entries, got {type(data).__name__}")
        return [self._entry(item) for item in data]

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """Fetch one entry; 404 raises EntryNotFoundError."""
        response = await self._request("GET", self._entry_path(entry_id), entry_id=entry_id)
        return self._entry(self._json(response))

    async def create_entry(self) -> JournalEntry:
        """POST an entry with every field at its default."""
        response = await self._request("POST", "/journal/entries/", json=new_entry_payload())
        return self._entry(self._json(response))

    async def update_entry(self, entry_id: str, patch: dict[str, Any]) -> JournalEntry:
        """PATCH the changed fields and return the canonical record."""
        response = await self._request("PATCH", self._entry_path(entry_id), json=patch)
        return self._entry(self._json(response))

    async def delete_entry(self, entry_id: str) -> None:
        """DELETE an entry; any non-2xx status is a failure."""
        await self._request("DELETE", self._entry_path(entry_id))

    async def get_stats(self, filter_state: FilterState) -> TradingStats:
        """Fetch the stats snapshot for a filter."""
        response = await self._request(
            "GET", "/journal/stats/", params=filter_state.query_params()
        )
        try:
            return TradingStats.model_validate(self._json(response))
        except ValueError as e:
            raise RemoteError(f"Malformed trading stats: {e}") from e

    async def get_summary(self) -> TradingSummary:
        """Fetch the whole-history trading summary."""
        response = await self._request("GET", "/journal/summary/")
        try:
            return TradingSummary.model_validate(self._json(response))
        except ValueError as e:
            raise RemoteError(f"Malformed trading summary: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
