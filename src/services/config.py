"""
Loads and handles config from config.yml
The collection endpoint can be overridden with PHOTOS_API_URL from .env
"""
import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://jsonplaceholder.typicode.com/photos"


class RetrievalConfig(BaseModel):
    """Endpoint and retry policy for the collection client."""
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    max_retries: int = Field(4, ge=0)
    initial_delay_ms: float = Field(1000, ge=0)


class PipelineConfig(BaseModel):
    """Which pages the clustering pipeline pulls per run."""
    pages: List[int] = [1]
    page_size: int = Field(20, ge=1)

    @field_validator("pages")
    @classmethod
    def _unique_pages(cls, pages: List[int]) -> List[int]:
        # Each page is fetched once so item ids stay unique within a batch
        return list(dict.fromkeys(pages))


class Config(BaseModel):
    LOG_LEVEL: str = "INFO"

    retrieval: RetrievalConfig = RetrievalConfig()
    pipeline: PipelineConfig = PipelineConfig()


def _get_config_path() -> str:
    """Get the path to config.yml, handling different working directories."""
    # Try relative path first
    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    # Try from project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    raise FileNotFoundError("Cannot find resources/config.yml")


def _parse_retrieval_config(data: Dict[str, Any]) -> RetrievalConfig:
    """Parse retrieval configuration from YAML data."""
    return RetrievalConfig(
        endpoint_url=os.getenv("PHOTOS_API_URL") or data.get("endpoint_url", DEFAULT_ENDPOINT_URL),
        max_retries=data.get("max_retries", 4),
        initial_delay_ms=data.get("initial_delay_ms", 1000),
    )


def _parse_pipeline_config(data: Dict[str, Any]) -> PipelineConfig:
    """Parse pipeline configuration from YAML data."""
    pages = data.get("pages", [1])
    if isinstance(pages, int):
        pages = [pages]

    return PipelineConfig(
        pages=pages,
        page_size=data.get("page_size", 20),
    )


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from config.yml and overrides from .env."""
    load_dotenv()

    config_path = path or _get_config_path()

    with open(config_path, 'r') as file:
        config = yaml.safe_load(file) or {}

    logger.debug(f"Loaded configuration from {config_path}")

    return Config(
        LOG_LEVEL=str(config.get("LOG_LEVEL", "INFO")).upper(),
        retrieval=_parse_retrieval_config(config.get("retrieval") or {}),
        pipeline=_parse_pipeline_config(config.get("pipeline") or {}),
    )
