import pytest

from dashsave.errors import MissionNotHeld, SaveValidationError
from dashsave.missions import (
    BUILTIN_BEHAVIORS,
    Mission,
    MissionCatalog,
    MissionRegistry,
    MissionType,
    RunContext,
)
from dashsave.rng import RandomProvider
from dashsave.state import PersistentState


def _registry(seed=5, **kwargs):
    state = PersistentState.fresh()
    return state, MissionRegistry(state, rng=RandomProvider(seed), **kwargs)


def test_top_up_restores_floor_exactly():
    state, reg = _registry()
    assert reg.top_up() == 2
    assert len(state.missions) == 2
    assert reg.top_up() == 0
    assert len(state.missions) == 2


def test_top_up_noop_above_floor():
    state, reg = _registry()
    state.missions.extend(Mission(kind=MissionType.SLIDING, max=20, reward=1) for _ in range(3))
    assert reg.top_up() == 0
    assert len(state.missions) == 3


def test_top_up_is_deterministic_for_a_seed():
    a, reg_a = _registry(seed=42)
    b, reg_b = _registry(seed=42)
    reg_a.top_up()
    reg_b.top_up()
    assert a.missions == b.missions


def test_created_missions_use_a_target_tier():
    state, reg = _registry(seed=3, floor=30)
    reg.top_up()
    for mission in state.missions:
        targets = BUILTIN_BEHAVIORS[mission.kind].targets
        assert mission.max in targets
        assert mission.reward == list(targets).index(mission.max) + 1
        assert mission.progress == 0


def test_custom_catalog_limits_kinds():
    catalog = MissionCatalog({MissionType.MULTIPLIER: BUILTIN_BEHAVIORS[MissionType.MULTIPLIER]})
    state, reg = _registry(catalog=catalog, floor=5)
    reg.top_up()
    assert {m.kind for m in state.missions} == {MissionType.MULTIPLIER}


def test_single_run_tracks_distance_and_resets_each_run():
    state, reg = _registry()
    mission = Mission(kind=MissionType.SINGLE_RUN, max=500, reward=1)
    state.missions.append(mission)

    reg.on_run_start(RunContext())
    reg.on_tick(RunContext(distance=320.5))
    assert mission.progress == 320.5
    assert not reg.any_complete()

    reg.on_run_start(RunContext())
    assert mission.progress == 0
    reg.on_tick(RunContext(distance=512.0))
    assert reg.any_complete()


def test_pickup_accumulates_across_runs():
    state, reg = _registry()
    mission = Mission(kind=MissionType.PICKUP, max=1000, reward=1)
    state.missions.append(mission)

    reg.on_run_start(RunContext())
    reg.on_tick(RunContext(coins=300))
    reg.on_tick(RunContext(coins=500))
    assert mission.progress == 500

    reg.on_run_start(RunContext())
    reg.on_tick(RunContext(coins=100))
    assert mission.progress == 600


def test_rerun_keeps_baselines():
    state, reg = _registry()
    mission = Mission(kind=MissionType.OBSTACLE_JUMP, max=20, reward=1)
    state.missions.append(mission)

    reg.on_run_start(RunContext())
    reg.on_tick(RunContext(obstacles_jumped=4))
    reg.on_run_start(RunContext(obstacles_jumped=4, is_rerun=True))
    reg.on_tick(RunContext(obstacles_jumped=6))
    assert mission.progress == 6


def test_sliding_and_multiplier():
    state, reg = _registry()
    slide = Mission(kind=MissionType.SLIDING, max=20, reward=1)
    mult = Mission(kind=MissionType.MULTIPLIER, max=3, reward=1)
    state.missions.extend([slide, mult])

    reg.on_run_start(RunContext())
    reg.on_tick(RunContext(slide_distance=12.0, multiplier=2))
    reg.on_tick(RunContext(slide_distance=21.0, multiplier=1))
    assert slide.progress == 21.0
    assert mult.progress == 2
    assert slide.is_complete and not mult.is_complete


def test_claim_grants_premium_and_tops_up():
    state, reg = _registry()
    done = Mission(kind=MissionType.MULTIPLIER, progress=5, max=5, reward=3)
    other = Mission(kind=MissionType.PICKUP, max=1000, reward=1)
    state.missions.extend([done, other])

    assert reg.claim(done) == 3
    assert state.premium == 3
    assert all(m is not done for m in state.missions)
    assert state.missions[0] is other
    assert len(state.missions) == 2


def test_claim_of_unheld_mission_raises_and_leaves_registry_alone():
    state, reg = _registry()
    reg.top_up()
    before = list(state.missions)
    stranger = Mission(kind=before[0].kind, progress=before[0].progress, max=before[0].max, reward=before[0].reward)

    with pytest.raises(MissionNotHeld):
        reg.claim(stranger)
    assert state.missions == before
    assert all(a is b for a, b in zip(state.missions, before))
    assert state.premium == 0


def test_registry_encode_decode():
    from dashsave.binary import RecordReader, RecordWriter

    state, reg = _registry()
    reg.top_up()
    state.missions[0].set_progress(12.25)
    w = RecordWriter()
    reg.encode(w)

    other_state, other = _registry(seed=99)
    other.decode(RecordReader(w.getvalue()))
    assert other_state.missions == state.missions


def test_failed_payout_keeps_mission_and_floor():
    state, reg = _registry()
    bad = Mission(kind=MissionType.PICKUP, max=1000, reward=-3)
    other = Mission(kind=MissionType.SLIDING, max=20, reward=1)
    state.missions.extend([bad, other])

    with pytest.raises(SaveValidationError):
        reg.claim(bad)
    assert state.missions[0] is bad and state.missions[1] is other
    assert state.premium == 0
