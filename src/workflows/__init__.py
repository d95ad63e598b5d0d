"""
Workflows module - Pipeline orchestration for photo clustering.
"""
from workflows.base import ClusterPipeline
from workflows.photo_clusters import PhotoClusterPipeline

__all__ = [
    "ClusterPipeline",
    "PhotoClusterPipeline",
]
