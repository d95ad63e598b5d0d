"""Shared fixtures for the photo clustering tests."""

import json
from typing import Callable, List

import httpx
import pytest

from core.entities import Item


class RecordingSleep:
    """Stands in for asyncio.sleep and records every requested delay."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def photo_json(photo_id: int, album_id: int = 1, title: str = "accusamus beatae") -> dict:
    return {
        "albumId": album_id,
        "id": photo_id,
        "title": title,
        "url": f"https://via.placeholder.com/600/{photo_id}",
        "thumbnailUrl": f"https://via.placeholder.com/150/{photo_id}",
    }


def scripted_transport(responses: List[Callable[[httpx.Request], httpx.Response]]):
    """
    MockTransport answering each request with the next scripted handler.

    Returns the transport and the list of requests it received.
    """
    requests: List[httpx.Request] = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if not queue:
            raise AssertionError(f"Unexpected extra request: {request.url}")
        return queue.pop(0)(request)

    return httpx.MockTransport(handler), requests


def ok(payload) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, content=json.dumps(payload).encode())


def status(code: int, headers: dict = None) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(code, headers=headers or {})


def connect_error() -> Callable[[httpx.Request], httpx.Response]:
    def raise_error(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)
    return raise_error


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def sample_items():
    titles = [
        "accusamus beatae ad facilis cum similique qui sunt",
        "reprehenderit est deserunt velit ipsam",
        "officia porro iure quia iusto qui ipsa ut modi",
        "culpa odio esse rerum omnis laboriosam voluptate repudiandae",
        "natus nisi omnis corporis facere molestiae rerum in",
        "accusamus ea aliquid et amet sequi nemo",
        "officia delectus consequatur vero aut veniam explicabo molestias",
        "aut porro officiis laborum odit ea laudantium corporis",
        "qui eius qui autem sed",
        "beatae et provident et ut vel",
    ]
    return [
        Item(id=i + 1, group_id=(i % 3) + 1, title=title)
        for i, title in enumerate(titles)
    ]
