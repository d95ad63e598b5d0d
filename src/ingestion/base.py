"""
Base classes for Ingestion
"""
from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from core.entities import Item


class PhotoRecord(BaseModel):
    """
    Wire schema of a single record served by the photo collection.
    """
    model_config = ConfigDict(populate_by_name=True)

    group_id: int = Field(..., alias="albumId", ge=0)
    id: int = Field(..., ge=0)
    title: str
    url: str = ""
    thumbnail_url: str = Field("", alias="thumbnailUrl")

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            group_id=self.group_id,
            title=self.title,
            url=self.url,
            thumbnail_url=self.thumbnail_url,
        )


class CollectionClient(ABC):
    """
    Base interface for resilient collection retrieval.
    """

    @abstractmethod
    async def fetch_page(self, page: int = 1, limit: int = 20) -> List[Item]:
        """
        Fetch one bounded page of items.
        Raises only TerminalFetchFailure once retries are exhausted.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_by_id(self, item_id: int) -> Item:
        """
        Fetch a single item, with the same retry policy as fetch_page.
        """
        raise NotImplementedError
