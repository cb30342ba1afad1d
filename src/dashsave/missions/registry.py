from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..binary import RecordReader, RecordWriter
from ..errors import MissionNotHeld
from ..rng import RandomProvider
from ..wallet import Currency, CurrencyWallet
from .base import Mission, RunContext
from .catalog import MissionCatalog, default_catalog

if TYPE_CHECKING:
    from ..state import PersistentState

logger = logging.getLogger(__name__)

MISSION_FLOOR = 2


def write_missions(writer: RecordWriter, missions: List[Mission], catalog: MissionCatalog) -> None:
    """Length-prefixed sequence of (kind tag, payload)."""
    writer.write_count(len(missions))
    for mission in missions:
        catalog.write(writer, mission)


def read_missions(reader: RecordReader, catalog: MissionCatalog) -> List[Mission]:
    count = reader.read_count("mission")
    return [catalog.read(reader) for _ in range(count)]


class MissionRegistry:
    """Active mission set of a state.

    The registry only stores and iterates; all progress logic lives in the
    catalog's per-kind behaviour. The set is kept at ``floor`` records: every
    claim and every load is followed by :meth:`top_up`.
    """

    def __init__(
        self,
        state: "PersistentState",
        rng: Optional[RandomProvider] = None,
        catalog: Optional[MissionCatalog] = None,
        floor: int = MISSION_FLOOR,
    ) -> None:
        self._state = state
        self._rng = rng or RandomProvider()
        self.catalog = catalog or default_catalog()
        self.floor = floor

    @property
    def missions(self) -> List[Mission]:
        return self._state.missions

    def top_up(self) -> int:
        """Create random missions until the floor is met. Returns how many were added."""
        kinds = self.catalog.kinds()
        added = 0
        while len(self._state.missions) < self.floor:
            kind = kinds[self._rng.randrange(len(kinds))]
            mission = self.catalog.create(kind, self._rng)
            self._state.missions.append(mission)
            added += 1
            logger.debug("New mission: %s", self.catalog.describe(mission))
        return added

    def on_run_start(self, ctx: RunContext) -> None:
        for mission in self._state.missions:
            self.catalog.run_start(mission, ctx)

    def on_tick(self, ctx: RunContext) -> None:
        for mission in self._state.missions:
            self.catalog.update(mission, ctx)

    def any_complete(self) -> bool:
        return any(m.is_complete for m in self._state.missions)

    def claim(self, mission: Mission) -> int:
        """Pay out ``mission``'s reward in premium currency and replace it.

        Returns the reward granted.
        """
        index = self._index_of(mission)
        if index is None:
            raise MissionNotHeld(f"Mission {mission!r} is not active")
        CurrencyWallet(self._state).earn(Currency.PREMIUM, mission.reward)
        del self._state.missions[index]
        logger.info("Claimed mission %s for %d premium", mission.kind.name, mission.reward)
        self.top_up()
        return mission.reward

    def _index_of(self, mission: Mission) -> Optional[int]:
        # By identity: two records of the same kind and progress compare equal.
        for i, held in enumerate(self._state.missions):
            if held is mission:
                return i
        return None

    def encode(self, writer: RecordWriter) -> None:
        write_missions(writer, self._state.missions, self.catalog)

    def decode(self, reader: RecordReader) -> None:
        self._state.missions[:] = read_missions(reader, self.catalog)
