"""
Photo clustering pipeline: fetch configured pages, then cluster the batch.
"""
import logging
from typing import List

from core.entities import ClusterResult, Item
from ingestion.base import CollectionClient
from ingestion.errors import TerminalFetchFailure
from processing.clustering import cluster_items
from services.config import PipelineConfig
from workflows.base import ClusterPipeline

logger = logging.getLogger(__name__)


class PhotoClusterPipeline(ClusterPipeline):
    """
    Pulls each configured page once and clusters everything that arrived.

    A page whose retrieval fails terminally contributes nothing; the rest
    of the run carries on.
    """

    name = "photo_clusters"

    def __init__(self, pipeline_config: PipelineConfig, client: CollectionClient):
        self.pages = pipeline_config.pages
        self.page_size = pipeline_config.page_size
        self.client = client

    async def fetch(self) -> List[Item]:
        items: List[Item] = []

        for page in self.pages:
            try:
                fetched = await self.client.fetch_page(page=page, limit=self.page_size)
                items.extend(fetched)
            except TerminalFetchFailure as e:
                logger.error(
                    f"[{self.name}] Page {page} unavailable ({e.kind}, attempts={e.attempts}): {e.message}"
                )

        logger.info(f"[{self.name}] Fetched {len(items)} items from {len(self.pages)} pages")
        return items

    async def run(self) -> List[ClusterResult]:
        items = await self.fetch()

        if not items:
            logger.info(f"[{self.name}] No items fetched, returning empty clusters")

        clusters = cluster_items(items)

        for cluster in clusters:
            logger.info(
                f"[{self.name}] Cluster {cluster.label}: {cluster.size} items, "
                f"mean score {cluster.mean_score:.2f}, mean weight {cluster.mean_weight:.3f}"
            )

        return clusters
