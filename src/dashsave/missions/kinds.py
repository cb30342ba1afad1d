"""Built-in mission behaviours.

Each kind is a row in a behaviour table keyed by MissionType. ``created``
picks one of four difficulty tiers; the reward (premium currency) is the
tier index plus one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from ..binary import as_float32
from ..rng import RandomProvider
from .base import Mission, MissionType, RunContext


@dataclass(frozen=True)
class MissionBehavior:
    targets: Sequence[float]
    describe: Callable[[Mission], str]
    run_start: Callable[[Mission, RunContext], None]
    update: Callable[[Mission, RunContext], None]

    def created(self, mission: Mission, rng: RandomProvider) -> None:
        tier = rng.randrange(len(self.targets))
        mission.max = as_float32(self.targets[tier])
        mission.reward = tier + 1
        mission.set_progress(0.0)


def _reset_progress(mission: Mission, ctx: RunContext) -> None:
    if not ctx.is_rerun:
        mission.set_progress(0.0)


def _track_distance(mission: Mission, ctx: RunContext) -> None:
    mission.set_progress(ctx.distance)


def _pickup_start(mission: Mission, ctx: RunContext) -> None:
    if not ctx.is_rerun:
        mission.last_coins = 0


def _pickup_update(mission: Mission, ctx: RunContext) -> None:
    gained = ctx.coins - mission.last_coins
    mission.last_coins = ctx.coins
    if gained > 0:
        mission.set_progress(mission.progress + gained)


def _jump_start(mission: Mission, ctx: RunContext) -> None:
    if not ctx.is_rerun:
        mission.last_obstacles = 0


def _jump_update(mission: Mission, ctx: RunContext) -> None:
    jumped = ctx.obstacles_jumped - mission.last_obstacles
    mission.last_obstacles = ctx.obstacles_jumped
    if jumped > 0:
        mission.set_progress(mission.progress + jumped)


def _slide_start(mission: Mission, ctx: RunContext) -> None:
    if not ctx.is_rerun:
        mission.last_slide = 0.0


def _slide_update(mission: Mission, ctx: RunContext) -> None:
    slid = ctx.slide_distance - mission.last_slide
    mission.last_slide = ctx.slide_distance
    if slid > 0:
        mission.set_progress(mission.progress + slid)


def _multiplier_update(mission: Mission, ctx: RunContext) -> None:
    if ctx.multiplier > mission.progress:
        mission.set_progress(ctx.multiplier)


BUILTIN_BEHAVIORS: Dict[MissionType, MissionBehavior] = {
    MissionType.SINGLE_RUN: MissionBehavior(
        targets=(500, 1000, 1500, 2000),
        describe=lambda m: f"Run {int(m.max)}m in a single run",
        run_start=_reset_progress,
        update=_track_distance,
    ),
    MissionType.PICKUP: MissionBehavior(
        targets=(1000, 2000, 3000, 4000),
        describe=lambda m: f"Pick up {int(m.max)} fishbones",
        run_start=_pickup_start,
        update=_pickup_update,
    ),
    MissionType.OBSTACLE_JUMP: MissionBehavior(
        targets=(20, 50, 75, 100),
        describe=lambda m: f"Jump over {int(m.max)} barriers",
        run_start=_jump_start,
        update=_jump_update,
    ),
    MissionType.SLIDING: MissionBehavior(
        targets=(20, 30, 75, 150),
        describe=lambda m: f"Slide for {int(m.max)}m",
        run_start=_slide_start,
        update=_slide_update,
    ),
    MissionType.MULTIPLIER: MissionBehavior(
        targets=(3, 5, 8, 10),
        describe=lambda m: f"Reach a x{int(m.max)} multiplier",
        run_start=_reset_progress,
        update=_multiplier_update,
    ),
}
