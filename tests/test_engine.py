import pytest

from models.state import Activity, GameTime, Needs, Room, SimStatus, SimulationState, TerminalReason
from simulation.errors import InvalidSpeedError


def clock_reading(engine):
    t = engine.time
    return t.day, t.hour, t.minute


def event_types(engine):
    return [event["type"] for event in engine.event_log]


def test_clock_ticks_every_tenth_of_a_second(env, engine):
    engine.start()
    env.run(until=0.45)
    assert clock_reading(engine) == (1, 7, 4)
    assert engine.status is SimStatus.RUNNING


def test_speed_multiplier_scales_minutes_per_tick(env, engine):
    engine.cycle_speed()
    engine.cycle_speed()
    assert engine.speed == 4
    engine.start()
    env.run(until=0.25)
    assert clock_reading(engine) == (1, 7, 8)
    engine.cycle_speed()
    assert engine.speed == 1


def test_set_speed_rejects_other_values(engine):
    with pytest.raises(InvalidSpeedError):
        engine.set_speed(3)
    assert engine.speed == 1
    assert engine.set_speed(2)
    assert engine.speed == 2


def test_pause_stops_the_clock_and_resume_restarts_it(env, engine):
    engine.start()
    env.run(until=0.25)
    assert engine.pause()
    assert engine.status is SimStatus.PAUSED
    env.run(until=1.05)
    assert clock_reading(engine) == (1, 7, 2)

    assert not engine.pause()
    assert engine.resume()
    env.run(until=1.38)
    assert clock_reading(engine) == (1, 7, 5)


def test_toggle_pause(engine):
    engine.start()
    engine.toggle_pause()
    assert engine.paused
    engine.toggle_pause()
    assert not engine.paused


def test_bed_scenario_through_the_engine(engine):
    assert engine.perform("bed")
    needs = engine.needs
    assert (needs.energy, needs.sleep, needs.health, needs.happiness) == (100, 100, 95, 80)
    assert clock_reading(engine) == (1, 15, 0)
    assert engine.activity is Activity.SLEEPING
    assert engine.is_used_today("bed")
    assert "ACTION_PERFORMED" in event_types(engine)


def test_second_use_on_same_day_changes_nothing(engine):
    engine.perform("bed")
    before = engine.snapshot()
    assert not engine.perform("bed")
    assert engine.snapshot() == before
    rejected = engine.event_log[-1]
    assert rejected["type"] == "ACTION_REJECTED"
    assert rejected["payload"]["reason"] == "ActionAlreadyUsedError"


def test_unknown_action_is_absorbed(engine):
    before = engine.snapshot()
    assert not engine.perform("hot-tub")
    assert engine.snapshot() == before


def test_perform_is_a_noop_while_paused(engine):
    engine.start()
    engine.pause()
    before = engine.snapshot()
    assert not engine.perform("bed")
    assert engine.snapshot() == before


def test_activity_reverts_to_idle_after_two_seconds(env, engine):
    engine.start()
    engine.perform("bed")
    env.run(until=1.9)
    assert engine.activity is Activity.SLEEPING
    env.run(until=2.1)
    assert engine.activity is Activity.IDLE


def test_new_action_supersedes_pending_revert(env, engine):
    engine.perform("bed")
    env.run(until=1.5)
    engine.perform("computer")
    env.run(until=2.5)
    assert engine.activity is Activity.RELAXING
    env.run(until=3.6)
    assert engine.activity is Activity.IDLE


def test_change_room_forces_idle(env, engine):
    engine.perform("bed")
    assert engine.change_room("kitchen")
    assert engine.location is Room.KITCHEN
    assert engine.activity is Activity.IDLE
    assert [action.id for action, _ in engine.available_actions()] == [
        "table", "water", "fridge", "stove", "microwave"
    ]
    with pytest.raises(ValueError):
        engine.change_room("attic")


def test_available_actions_flag_used_objects(engine):
    engine.perform("computer")
    assert [(action.id, used) for action, used in engine.available_actions()] == [
        ("bed", False), ("computer", True)
    ]


def test_day_rollover_by_ticking_frees_actions(make_engine):
    engine = make_engine(time=GameTime(day=1, hour=23, minute=58), used_today={(1, "sofa")})
    assert engine.is_used_today("sofa")
    for _ in range(4):
        engine.tick()
    assert clock_reading(engine) == (2, 0, 2)
    assert not engine.is_used_today("sofa")
    assert event_types(engine).count("DAY_START") == 1
    assert engine.change_room("living")
    assert engine.perform("sofa")


def test_game_over_is_absorbing_until_reset(env, make_engine):
    engine = make_engine(needs=Needs(energy=0.05, sleep=50, health=50, happiness=50))
    engine.start()
    engine.perform("computer")
    env.run(until=0.15)
    assert engine.status is SimStatus.TERMINAL
    assert engine.terminal.reason is TerminalReason.ENERGY
    assert "GAME_OVER" in event_types(engine)

    frozen = engine.snapshot()
    env.run(until=5.0)
    assert not engine.tick().advanced
    assert not engine.perform("bed")
    assert not engine.pause()
    assert not engine.change_room("gym")
    assert not engine.cycle_speed()
    assert engine.snapshot() == frozen
    assert engine.activity is Activity.RELAXING

    engine.reset()
    assert engine.status is SimStatus.RUNNING
    assert engine.snapshot() == {**SimulationState().model_dump(mode="json"), "status": "running", "used_today": []}
    env.run(until=5.25)
    assert clock_reading(engine) == (1, 7, 2)


def test_reset_cancels_the_stale_idle_revert(env, engine):
    engine.start()
    engine.perform("bed")
    env.run(until=1.5)
    engine.reset()
    engine.perform("computer")
    env.run(until=2.5)
    assert engine.activity is Activity.RELAXING
    assert engine.is_used_today("computer")
    assert not engine.is_used_today("bed")


def test_shutdown_stops_every_timer(env, engine):
    engine.start()
    engine.perform("bed")
    engine.shutdown()
    env.run(until=3.0)
    assert clock_reading(engine) == (1, 15, 0)
    assert engine.activity is Activity.SLEEPING
    assert event_types(engine)[-1] == "SIM_END"


def test_need_levels_and_week(make_engine):
    engine = make_engine(needs=Needs(energy=80, sleep=45, health=10, happiness=70), time=GameTime(day=8))
    assert engine.need_levels() == {
        "energy": "good", "sleep": "warning", "health": "critical", "happiness": "good"
    }
    assert engine.week_progress() == "2/2"


def test_queries_return_copies(engine):
    needs = engine.needs
    needs.energy = 1
    assert engine.needs.energy == 80


def test_dispatch_routes_commands(env):
    from simulation.engine import SimulationEngine

    shown = []
    engine = SimulationEngine(env, echo=False, output=shown.append)
    engine.dispatch("change_room", "kitchen")
    engine.dispatch("perform", "water")
    engine.dispatch("speed", None)
    engine.dispatch("speed", "4")
    engine.dispatch("status")
    assert engine.location is Room.KITCHEN
    assert engine.is_used_today("water")
    assert engine.speed == 4
    assert "Day 1, 07:05" in shown[0]


def test_dispatch_logs_bad_input(engine):
    engine.dispatch("speed", "3")
    engine.dispatch("speed", "fast")
    engine.dispatch("change_room", "attic")
    engine.dispatch(None, "dance")
    assert engine.speed == 1
    assert engine.location is Room.BEDROOM
    errors = [event for event in engine.event_log if event["type"] == "ERROR"]
    assert len(errors) == 4
    assert "dance" in errors[-1]["payload"]["error"]
