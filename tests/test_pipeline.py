from typing import Dict, List

import pytest

from conftest import ok, photo_json, scripted_transport, status
from core.entities import Item
from ingestion.base import CollectionClient
from ingestion.errors import TerminalFetchFailure
from ingestion.source_factory import create_client_from_config
from processing.clustering import cluster_items
from services.config import PipelineConfig, RetrievalConfig
from workflows.photo_clusters import PhotoClusterPipeline


class FakeClient(CollectionClient):
    def __init__(self, pages: Dict[int, List[Item]], failing=()):
        self.pages = pages
        self.failing = set(failing)
        self.calls = []

    async def fetch_page(self, page: int = 1, limit: int = 20) -> List[Item]:
        self.calls.append((page, limit))
        if page in self.failing:
            raise TerminalFetchFailure("Network error. Please check your connection.",
                                       kind="network", status=None, attempts=5)
        return self.pages.get(page, [])[:limit]

    async def fetch_by_id(self, item_id: int) -> Item:
        raise NotImplementedError


@pytest.mark.asyncio
async def test_pipeline_clusters_all_fetched_pages(sample_items):
    client = FakeClient({1: sample_items[:5], 2: sample_items[5:]})
    pipeline = PhotoClusterPipeline(PipelineConfig(pages=[1, 2], page_size=5), client)

    clusters = await pipeline.run()

    assert client.calls == [(1, 5), (2, 5)]
    assert clusters == cluster_items(sample_items)


@pytest.mark.asyncio
async def test_failed_page_is_skipped(sample_items):
    client = FakeClient({1: sample_items[:4], 2: sample_items[4:8]}, failing=[2])
    pipeline = PhotoClusterPipeline(PipelineConfig(pages=[1, 2]), client)

    clusters = await pipeline.run()

    assert sum(c.size for c in clusters) == 4
    assert clusters == cluster_items(sample_items[:4])


@pytest.mark.asyncio
async def test_total_failure_degrades_to_empty_clusters():
    client = FakeClient({}, failing=[1])
    pipeline = PhotoClusterPipeline(PipelineConfig(), client)

    clusters = await pipeline.run()

    assert [c.label for c in clusters] == ["A", "B", "C", "D"]
    assert all(c.size == 0 for c in clusters)


@pytest.mark.asyncio
async def test_end_to_end_with_http_client(recording_sleep):
    payload = [photo_json(i, (i % 3) + 1, f"photo {i} " + "ab" * i) for i in range(1, 9)]
    transport, requests = scripted_transport([status(503), ok(payload)])
    client = create_client_from_config(
        RetrievalConfig(endpoint_url="https://example.test/photos"),
        transport=transport,
        sleep=recording_sleep,
    )

    clusters = await PhotoClusterPipeline(PipelineConfig(page_size=8), client).run()

    assert [c.size for c in clusters] == [2, 2, 2, 2]
    assert sorted(w.id for c in clusters for w in c.items) == list(range(1, 9))
    assert len(requests) == 2
    assert recording_sleep.delays == [1.0]


def test_factory_applies_retrieval_settings():
    client = create_client_from_config(
        RetrievalConfig(endpoint_url="https://example.test/photos/", max_retries=1, initial_delay_ms=10)
    )

    assert client.endpoint_url == "https://example.test/photos"
    assert client.max_retries == 1
    assert client.initial_delay_ms == 10


@pytest.mark.asyncio
async def test_repeated_pages_do_not_duplicate_items(sample_items):
    client = FakeClient({1: sample_items[:4]})
    pipeline = PhotoClusterPipeline(PipelineConfig(pages=[1, 1]), client)

    clusters = await pipeline.run()

    assert client.calls == [(1, 20)]
    assert sum(c.size for c in clusters) == 4
