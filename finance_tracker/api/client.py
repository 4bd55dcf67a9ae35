"""Async HTTP client for the Transactions API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from finance_tracker.api.errors import NoResponse, ServerError, SetupError
from finance_tracker.models import Transaction

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class TransactionsAPI:
    """Thin async wrapper around the ``/api/transactions`` REST resource.

    URLs are joined by hand rather than through httpx's ``base_url`` so the
    collection is requested without a trailing slash.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    def _item_url(self, transaction_id: Any) -> str:
        return f"{self.base_url}/{transaction_id}"

    async def _request(self, method: str, url: str, json: Optional[dict] = None) -> httpx.Response:
        """Send one request and translate every failure into an ApiError.

        Raises:
            ServerError: Non-2xx response.
            NoResponse: Transport failure after the request was built.
            SetupError: The request could not be built or sent.
        """
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, json=json)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as exc:
            raise SetupError(str(exc)) from exc
        except httpx.RequestError as exc:
            raise NoResponse(str(exc) or exc.__class__.__name__) from exc
        except (TypeError, ValueError) as exc:
            # Raised while encoding a body that is not JSON serializable
            raise SetupError(str(exc)) from exc

        if response.is_error:
            raise ServerError(response.status_code, _server_message(response))
        return response

    # -- endpoints -----------------------------------------------------------

    async def list_transactions(self) -> list[Transaction]:
        response = await self._request("GET", self.base_url)
        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
            return [Transaction.from_dict(item) for item in payload]
        except ValueError as exc:
            logger.warning(f"Malformed transaction list from {self.base_url}: {exc}")
            raise ServerError(response.status_code, "Unexpected response body") from exc

    async def create_transaction(self, payload: dict) -> Optional[Any]:
        response = await self._request("POST", self.base_url, json=payload)
        return _body_or_none(response)

    async def update_transaction(self, transaction_id: Any, payload: dict) -> Optional[Any]:
        response = await self._request("PUT", self._item_url(transaction_id), json=payload)
        return _body_or_none(response)

    async def delete_transaction(self, transaction_id: Any) -> None:
        await self._request("DELETE", self._item_url(transaction_id))


def _server_message(response: httpx.Response) -> Optional[str]:
    """Extract the optional ``message`` field from an error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _body_or_none(response: httpx.Response) -> Optional[Any]:
    """Created/updated resource, or None when the server only acknowledges."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
