from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, Iterator, Tuple

logger = logging.getLogger(__name__)


class ConsumableType(IntEnum):
    """Stackable power-up kinds. Values are the wire tags and must not change."""

    NONE = 0
    COIN_MAGNET = 1
    SCORE_MULTIPLIER = 2
    INVINCIBILITY = 3
    EXTRA_LIFE = 4


# Kinds a player can actually hold (NONE is only a placeholder tag).
STOCKABLE_TYPES: Tuple[ConsumableType, ...] = tuple(t for t in ConsumableType if t is not ConsumableType.NONE)


class ConsumableInventory:
    """Count map over a consumable dictionary.

    A kind the player does not hold is simply absent; the map never stores a
    zero or negative count.
    """

    def __init__(self, counts: Dict[ConsumableType, int]) -> None:
        self._counts = counts

    def add(self, kind: ConsumableType) -> int:
        """Add one ``kind`` and return the new count."""
        kind = ConsumableType(kind)
        self._counts[kind] = self._counts.get(kind, 0) + 1
        logger.debug("Added %s (count: %d)", kind.name, self._counts[kind])
        return self._counts[kind]

    def consume(self, kind: ConsumableType) -> bool:
        """Use one ``kind``. Returns False (and does nothing) when none are held."""
        kind = ConsumableType(kind)
        held = self._counts.get(kind, 0)
        if held <= 0:
            return False
        if held == 1:
            del self._counts[kind]
        else:
            self._counts[kind] = held - 1
        logger.debug("Consumed %s (remaining: %d)", kind.name, held - 1)
        return True

    def set_count(self, kind: ConsumableType, count: int) -> None:
        kind = ConsumableType(kind)
        if count <= 0:
            self._counts.pop(kind, None)
        else:
            self._counts[kind] = int(count)

    def count(self, kind: ConsumableType) -> int:
        return self._counts.get(ConsumableType(kind), 0)

    def __contains__(self, kind: object) -> bool:
        return kind in self._counts

    def __iter__(self) -> Iterator[Tuple[ConsumableType, int]]:
        return iter(list(self._counts.items()))

    def __len__(self) -> int:
        return len(self._counts)
