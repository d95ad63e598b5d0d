"""
Quartile clustering of a scored batch.

Scores and weights every item, normalizes the weights across the batch,
ranks by normalized weight and slices the ranking into four groups A-D.
"""
import logging
import math
from typing import List, Sequence

from core.entities import ClusterResult, Item, WeightedItem
from core.scoring import score_item, weigh_item

logger = logging.getLogger(__name__)

CLUSTER_LABELS = ("A", "B", "C", "D")


def normalize_weights(weighted: Sequence[WeightedItem]) -> List[WeightedItem]:
    """
    Min-max normalize weights into [0, 1].

    When every weight is equal the span falls back to 1, so each item
    normalizes to 0 rather than NaN.
    """
    if not weighted:
        return []

    weights = [w.weight for w in weighted]
    min_weight = min(weights)
    max_weight = max(weights)
    span = (max_weight - min_weight) or 1

    logger.debug(
        f"Normalizing {len(weighted)} weights (min={min_weight:.4f}, max={max_weight:.4f})"
    )

    return [
        WeightedItem(
            item=w.item,
            complexity_score=w.complexity_score,
            weight=w.weight,
            normalized_weight=(w.weight - min_weight) / span,
        )
        for w in weighted
    ]


def partition_quartiles(ranked: Sequence[WeightedItem]) -> List[List[WeightedItem]]:
    """
    Split a ranked sequence into four slices of ceil(n / 4).

    The last slice takes whatever remains and may be short or empty.
    """
    quartile_size = math.ceil(len(ranked) / 4)

    return [
        list(ranked[0:quartile_size]),
        list(ranked[quartile_size:quartile_size * 2]),
        list(ranked[quartile_size * 2:quartile_size * 3]),
        list(ranked[quartile_size * 3:]),
    ]


def mean_score(members: Sequence[WeightedItem]) -> float:
    if not members:
        return 0.0
    return sum(m.complexity_score for m in members) / len(members)


def mean_weight(members: Sequence[WeightedItem]) -> float:
    if not members:
        return 0.0
    return sum(m.normalized_weight for m in members) / len(members)


def cluster_items(items: Sequence[Item]) -> List[ClusterResult]:
    """
    Partition a batch into four complexity-ranked clusters.

    Args:
        items: Batch to cluster, in any order. Never mutated.

    Returns:
        Exactly four ClusterResult values labelled A, B, C, D. A holds the
        highest normalized weights, D the lowest. Ties keep input order.
    """
    scored = [score_item(item) for item in items]

    weighted = [
        WeightedItem(
            item=s.item,
            complexity_score=s.complexity_score,
            weight=weigh_item(s),
        )
        for s in scored
    ]

    normalized = normalize_weights(weighted)

    # sorted() is stable, including with reverse=True
    ranked = sorted(normalized, key=lambda w: w.normalized_weight, reverse=True)

    groups = partition_quartiles(ranked)

    logger.debug(
        f"Clustered {len(ranked)} items into groups of {[len(g) for g in groups]}"
    )

    return [
        ClusterResult(
            label=label,
            items=tuple(members),
            mean_score=mean_score(members),
            mean_weight=mean_weight(members),
        )
        for label, members in zip(CLUSTER_LABELS, groups)
    ]
