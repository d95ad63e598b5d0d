"""
Contains base class for clustering pipelines
"""
from abc import ABC, abstractmethod
from typing import List

from core.entities import ClusterResult


class ClusterPipeline(ABC):
    """
    Orchestrates retrieval → scoring → quartile clustering.
    """

    name: str

    @abstractmethod
    async def run(self) -> List[ClusterResult]:
        """
        Execute the pipeline and return the four clusters.
        Must never raise on retrieval failure.
        """
        raise NotImplementedError
