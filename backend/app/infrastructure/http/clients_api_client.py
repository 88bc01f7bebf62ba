"""HTTP client for the clients CRUD API — the list engine's page source.

Speaks the wire contract served by ``/api/v1/clients`` using httpx and
raises ClientsApiError for any non-success answer.
"""

import logging
from typing import Any

import httpx

from app.application.interfaces import ListSource
from app.application.schemas.client import ClientDetail, ClientListItem
from app.domain.entities import ListQuery, PageResult
from app.domain.exceptions import ClientsApiError

logger = logging.getLogger(__name__)


class ClientsApiClient(ListSource):
    """Infrastructure adapter — talks to the clients API over HTTP.

    Pass an ``httpx.AsyncClient`` to share a connection pool (and in tests, a
    mock transport); otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8020",
        *,
        resource_path: str = "/api/v1/clients",
        column_param: str = "column",
        search_param: str = "search",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._resource_path = "/" + resource_path.strip("/")
        self._column_param = column_param
        self._search_param = search_param
        self._http_client = http_client
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{self._resource_path}"

    def build_params(self, query: ListQuery) -> dict[str, str]:
        """Query-string parameters for a page request. Partial filters are left out."""
        params = {"page": str(query.page), "page_size": str(query.page_size)}
        if query.has_filter:
            params[self._column_param] = query.filter_column
            params[self._search_param] = query.filter_text
        return params

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientsApiError(None, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.is_error:
            self._raise_api_error(response)
        return response

    async def fetch_page(self, query: ListQuery) -> PageResult[dict[str, Any]]:
        """Fetch one listing page.

        Accepts the ``{items, total}`` envelope and, for older servers, a bare
        JSON array whose length is taken as the total.
        """
        response = await self._request("GET", self.endpoint, params=self.build_params(query))
        data = response.json()

        items: list[dict[str, Any]] = []
        total = 0
        if isinstance(data, list):
            items = data
            total = len(data)
        elif isinstance(data, dict):
            if isinstance(data.get("items"), list):
                items = data["items"]
            total = data["total"] if isinstance(data.get("total"), int) else len(items)

        logger.debug("Fetched page %d (%d items, total=%d)", query.page, len(items), total)
        return PageResult(items=items, total=total, page=query.page, page_size=query.page_size)

    async def get_client(self, client_id: int) -> ClientDetail:
        response = await self._request("GET", f"{self.endpoint}/{client_id}")
        return ClientDetail.model_validate(response.json())

    async def create_client(self, fields: dict[str, Any]) -> tuple[ClientListItem, str | None]:
        """Create a client; returns the list projection and the Location header."""
        response = await self._request("POST", self.endpoint, json=fields)
        return ClientListItem.model_validate(response.json()), response.headers.get("location")

    async def update_client(self, client_id: int, fields: dict[str, Any]) -> None:
        await self._request("PUT", f"{self.endpoint}/{client_id}", json=fields)

    async def delete_client(self, client_id: int) -> None:
        await self._request("DELETE", f"{self.endpoint}/{client_id}")

    @staticmethod
    def _raise_api_error(response: httpx.Response) -> None:
        """Raise ClientsApiError from an error response.

        Understands both the ``{"error": {"message": ...}}`` envelope and
        FastAPI's ``{"detail": ...}`` body.
        """
        try:
            data = response.json()
            if isinstance(data.get("error"), dict):
                message = data["error"].get("message", response.text)
            else:
                message = str(data.get("detail", response.text))
        except Exception:
            message = response.text

        raise ClientsApiError(status_code=response.status_code, message=message)
