from __future__ import annotations

import bisect
import logging
from typing import Iterator, List, Optional

from .state import MAX_HIGHSCORES, HighscoreEntry

logger = logging.getLogger(__name__)


class HighscoreLedger:
    """Top-10 leaderboard kept sorted by score, highest first.

    Among equal scores the most recent submission is placed first: a new
    entry always goes in front of every existing entry with an equal or
    lower score.
    """

    def __init__(self, entries: List[HighscoreEntry], capacity: int = MAX_HIGHSCORES) -> None:
        self._entries = entries
        self.capacity = capacity

    def rank_of(self, score: int) -> int:
        """0-based position a new ``score`` would take."""
        return bisect.bisect_left(self._entries, -score, key=lambda e: -e.score)

    def insert(self, score: int, name: str) -> Optional[int]:
        """Insert an entry and drop anything past the capacity.

        Returns the position the entry landed at, or None when it ranks too
        low to be kept.
        """
        place = self.rank_of(score)
        if place >= self.capacity:
            logger.debug("Score %d by %r does not make the top %d", score, name, self.capacity)
            return None
        self._entries.insert(place, HighscoreEntry(name=name, score=score))
        del self._entries[self.capacity :]
        logger.info("Highscore %d by %r ranked #%d", score, name, place + 1)
        return place

    def __iter__(self) -> Iterator[HighscoreEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HighscoreEntry:
        return self._entries[index]
