from __future__ import annotations

from typing import Dict, List, Optional

from ..binary import RecordReader, RecordWriter
from ..errors import MalformedRecord
from ..rng import RandomProvider
from .base import Mission, MissionType, RunContext
from .kinds import BUILTIN_BEHAVIORS, MissionBehavior


class MissionCatalog:
    """Maps mission kinds to their behaviour and payload codec."""

    def __init__(self, behaviors: Optional[Dict[MissionType, MissionBehavior]] = None) -> None:
        self._behaviors: Dict[MissionType, MissionBehavior] = {}
        for kind, behavior in (behaviors or {}).items():
            self.register(kind, behavior)

    def register(self, kind: MissionType, behavior: MissionBehavior) -> None:
        self._behaviors[MissionType(kind)] = behavior

    def kinds(self) -> List[MissionType]:
        return sorted(self._behaviors)

    def behavior(self, kind: MissionType) -> MissionBehavior:
        try:
            return self._behaviors[kind]
        except KeyError:
            raise KeyError(f"Unknown mission kind: {kind!r}") from None

    def create(self, kind: MissionType, rng: RandomProvider) -> Mission:
        mission = Mission(kind=MissionType(kind))
        self.behavior(mission.kind).created(mission, rng)
        return mission

    def run_start(self, mission: Mission, ctx: RunContext) -> None:
        self.behavior(mission.kind).run_start(mission, ctx)

    def update(self, mission: Mission, ctx: RunContext) -> None:
        self.behavior(mission.kind).update(mission, ctx)

    def describe(self, mission: Mission) -> str:
        return self.behavior(mission.kind).describe(mission)

    def write(self, writer: RecordWriter, mission: Mission) -> None:
        writer.write_int32(int(mission.kind))
        writer.write_float32(mission.progress)
        writer.write_float32(mission.max)
        writer.write_int32(mission.reward)

    def read(self, reader: RecordReader) -> Mission:
        tag = reader.read_int32()
        try:
            kind = MissionType(tag)
        except ValueError:
            raise MalformedRecord(f"Unknown mission kind tag {tag}") from None
        if kind not in self._behaviors:
            raise MalformedRecord(f"No behaviour registered for mission kind {kind.name}")
        progress = reader.read_float32()
        target = reader.read_float32()
        reward = reader.read_int32()
        if reward < 0:
            raise MalformedRecord(f"Negative reward {reward} for {kind.name} mission")
        return Mission(kind=kind, progress=progress, max=target, reward=reward)


def default_catalog() -> MissionCatalog:
    return MissionCatalog(BUILTIN_BEHAVIORS)
