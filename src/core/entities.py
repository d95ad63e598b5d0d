from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Item:
    """
    Canonical representation of a retrieved collection item.
    """
    id: int
    group_id: int
    title: str
    url: str = ""
    thumbnail_url: str = ""


@dataclass(frozen=True)
class ScoredItem:
    """
    Item plus its complexity score.
    """
    item: Item
    complexity_score: float


@dataclass(frozen=True)
class WeightedItem:
    """
    Scored item plus its non-linear weight and, once the batch is known,
    the weight normalized into [0, 1].
    """
    item: Item
    complexity_score: float
    weight: float
    normalized_weight: float = 0.0

    @property
    def id(self) -> int:
        return self.item.id


@dataclass(frozen=True)
class ClusterResult:
    """
    One of the four ranked quartile groups.
    """
    label: str
    items: Tuple[WeightedItem, ...] = field(default_factory=tuple)
    mean_score: float = 0.0
    mean_weight: float = 0.0

    @property
    def size(self) -> int:
        return len(self.items)
