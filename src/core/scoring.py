"""
Per-item scoring stages of the cluster engine.

Both stages are pure functions of a single item, so they can be applied
independently across a batch.
"""

import math

from core.entities import Item, ScoredItem

TITLE_LENGTH_FACTOR = 2.5
GROUP_FACTOR = 1.8
ID_MOD_FACTOR = 3.2
VARIANCE_FACTOR = 4.1

# Prime modulus avoids periodic artifacts in sequential ids
ID_MODULUS = 13


def character_variance(title: str) -> float:
    """
    Percentage of distinct characters in the lowercased title.
    """
    chars = title.lower()
    return len(set(chars)) / max(len(chars), 1) * 100


def complexity_score(item: Item) -> float:
    title_length = len(item.title)
    id_mod = item.id % ID_MODULUS

    return (
        title_length * TITLE_LENGTH_FACTOR
        + item.group_id * GROUP_FACTOR
        + id_mod * ID_MOD_FACTOR
        + character_variance(item.title) * VARIANCE_FACTOR
    )


def non_linear_weight(score: float, group_id: int, item_id: int) -> float:
    """
    ln(score + 1) * sqrt(group_id) * (1 + sin(id / 100)).

    A group id of 0 collapses the weight to 0.
    """
    log_component = math.log(score + 1)
    sqrt_component = math.sqrt(group_id)
    trig_component = 1 + math.sin(item_id / 100)

    return log_component * sqrt_component * trig_component


def score_item(item: Item) -> ScoredItem:
    return ScoredItem(item=item, complexity_score=complexity_score(item))


def weigh_item(scored: ScoredItem) -> float:
    return non_linear_weight(
        scored.complexity_score,
        scored.item.group_id,
        scored.item.id,
    )
