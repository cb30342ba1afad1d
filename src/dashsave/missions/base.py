from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from ..binary import as_float32


class MissionType(IntEnum):
    """Known mission kinds. Values are the wire discriminants."""

    SINGLE_RUN = 0
    PICKUP = 1
    OBSTACLE_JUMP = 2
    SLIDING = 3
    MULTIPLIER = 4


@dataclass
class RunContext:
    """Tracker readings a mission observes during a run.

    All counters are cumulative for the current run.
    """

    distance: float = 0.0
    coins: int = 0
    obstacles_jumped: int = 0
    slide_distance: float = 0.0
    multiplier: int = 1
    is_rerun: bool = False


@dataclass
class Mission:
    """A single active mission record.

    ``progress`` and ``max`` are persisted as float32 and are kept quantized
    so that what is held in memory is exactly what reads back from disk.
    """

    kind: MissionType
    progress: float = 0.0
    max: float = 0.0
    reward: int = 0
    # Per-run baselines; not persisted.
    last_coins: int = field(default=0, compare=False, repr=False)
    last_obstacles: int = field(default=0, compare=False, repr=False)
    last_slide: float = field(default=0.0, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.kind = MissionType(self.kind)
        self.progress = as_float32(self.progress)
        self.max = as_float32(self.max)

    def set_progress(self, value: float) -> None:
        self.progress = as_float32(value)

    @property
    def is_complete(self) -> bool:
        return self.max > 0 and self.progress / self.max >= 1.0
