import asyncio
import logging
import time

from ingestion.source_factory import create_client_from_config
from services.config import load_config
from services.logging import setup_logging
from workflows.photo_clusters import PhotoClusterPipeline


async def main() -> None:
    start_time = time.perf_counter()
    config = load_config()
    setup_logging(config.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    logger.info("Starting photo clustering run")

    client = create_client_from_config(config.retrieval)
    pipeline = PhotoClusterPipeline(config.pipeline, client)

    clusters = await pipeline.run()

    for cluster in clusters:
        ids = [weighted.id for weighted in cluster.items]
        logger.info(f"Cluster {cluster.label} ids: {ids}")

    end_time = time.perf_counter()
    logger.info(f"Total time: {end_time - start_time}")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
