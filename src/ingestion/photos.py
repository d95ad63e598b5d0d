"""
Resilient retrieval from the photo collection endpoint
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from core.entities import Item
from ingestion.base import CollectionClient, PhotoRecord
from ingestion.errors import (
    RATE_LIMIT_STATUS,
    RateLimited,
    ServerError,
    TransientNetworkError,
    parse_retry_after,
)
from ingestion.retry import Sleep, retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://jsonplaceholder.typicode.com/photos"
DEFAULT_MAX_RETRIES = 4
DEFAULT_INITIAL_DELAY_MS = 1000
REQUEST_TIMEOUT = 30

_PAGE_ADAPTER = TypeAdapter(List[PhotoRecord])


class PhotoClient(CollectionClient):
    """
    httpx-based client for the photo collection.

    Every logical call gets its own AsyncClient and its own retry budget;
    nothing is shared between concurrent calls.
    """

    def __init__(
        self,
        endpoint_url: str = DEFAULT_ENDPOINT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay_ms: float = DEFAULT_INITIAL_DELAY_MS,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.endpoint_url = endpoint_url.rstrip("/")
        self.max_retries = max_retries
        self.initial_delay_ms = initial_delay_ms
        self.transport = transport
        self.sleep = sleep

    async def fetch_page(self, page: int = 1, limit: int = 20) -> List[Item]:
        params = {"_page": page, "_limit": limit}

        records = await self._fetch(
            self.endpoint_url,
            params=params,
            parse=_PAGE_ADAPTER.validate_json,
            description=f"page {page} (limit {limit})",
        )

        logger.info(f"Fetched {len(records)} items from page {page}")
        return [record.to_item() for record in records]

    async def fetch_by_id(self, item_id: int) -> Item:
        record = await self._fetch(
            f"{self.endpoint_url}/{item_id}",
            params=None,
            parse=PhotoRecord.model_validate_json,
            description=f"item {item_id}",
        )
        return record.to_item()

    async def _fetch(self, url: str, *, params: Optional[Dict[str, Any]], parse, description: str):
        # Status of every response seen, redirects included, before its body is read
        statuses: List[int] = []

        async def record_status(response: httpx.Response) -> None:
            statuses.append(response.status_code)

        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT,
            transport=self.transport,
            follow_redirects=True,
            event_hooks={"response": [record_status]},
        ) as client:

            async def attempt():
                response = await _get(client, url, params, statuses)
                try:
                    return parse(response.content)
                except ValidationError as e:
                    logger.debug(f"Unusable body for {description}: {e}")
                    raise ServerError(
                        response.status_code,
                        "Http failure during parsing",
                    ) from e

            return await retry_with_backoff(
                attempt,
                max_retries=self.max_retries,
                initial_delay_ms=self.initial_delay_ms,
                sleep=self.sleep,
                description=description,
            )


async def _get(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]],
    statuses: List[int],
) -> httpx.Response:
    """
    Single GET, with transport, request and status failures mapped onto FetchError.

    ``statuses`` is filled by the client's response hook; its last entry is
    the status of the response that was being handled when a request error hit.
    """
    try:
        response = await client.get(url, params=params)
    except httpx.TransportError as e:
        raise TransientNetworkError(str(e) or e.__class__.__name__) from e
    except httpx.TooManyRedirects as e:
        raise ServerError(_last_status(statuses), "Too many redirects") from e
    except httpx.DecodingError as e:
        raise ServerError(_last_status(statuses), "Http failure during parsing") from e
    except httpx.RequestError as e:
        raise ServerError(_last_status(statuses), str(e) or e.__class__.__name__) from e

    if response.status_code >= 400:
        retry_after = parse_retry_after(response.headers.get("Retry-After"))
        if response.status_code == RATE_LIMIT_STATUS:
            raise RateLimited(response.reason_phrase, retry_after=retry_after)
        raise ServerError(response.status_code, response.reason_phrase, retry_after=retry_after)

    return response


def _last_status(statuses: List[int]) -> int:
    return statuses[-1] if statuses else 0
