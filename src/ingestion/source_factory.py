"""
Source Factory - Creates the collection client from configuration.
"""
import logging

from ingestion.photos import PhotoClient
from services.config import RetrievalConfig

logger = logging.getLogger(__name__)


def create_client_from_config(retrieval_config: RetrievalConfig, **kwargs) -> PhotoClient:
    """
    Create the photo collection client.

    Args:
        retrieval_config: Endpoint and retry settings
        **kwargs: Passed through to PhotoClient (transport, sleep)

    Returns:
        Configured PhotoClient instance
    """
    client = PhotoClient(
        endpoint_url=retrieval_config.endpoint_url,
        max_retries=retrieval_config.max_retries,
        initial_delay_ms=retrieval_config.initial_delay_ms,
        **kwargs,
    )
    logger.info(
        f"Created photo client: {client.endpoint_url} "
        f"(max_retries={client.max_retries}, initial_delay_ms={client.initial_delay_ms})"
    )
    return client
