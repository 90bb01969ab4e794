import json
import math
from typing import Optional, Tuple

from models import catalog
from config import (
    NEED_LEVEL_GOOD, NEED_LEVEL_WARNING, DAYS_PER_WEEK, WEEK_GOAL
)

COMMAND_ALIASES = {
    "go": "change_room", "room": "change_room", "move": "change_room",
    "do": "perform", "use": "perform",
    "pause": "pause", "resume": "resume", "play": "resume", "toggle": "toggle_pause",
    "speed": "speed", "reset": "reset", "restart": "reset",
    "status": "status", "look": "status", "quit": "quit", "exit": "quit",
}


def format_clock(time) -> str:
    return f"{time.hour:02d}:{time.minute:02d}"


def get_simulation_timestamp(time) -> str:
    """Converts a game time to a 'Day N, HH:MM' string."""
    return f"Day {time.day}, {format_clock(time)}"


def need_level(value: float) -> str:
    if value >= NEED_LEVEL_GOOD:
        return "good"
    if value >= NEED_LEVEL_WARNING:
        return "warning"
    return "critical"


def week_progress(day: int) -> str:
    return f"{math.ceil(day / DAYS_PER_WEEK)}/{WEEK_GOAL}"


def log_event(engine, event_type: str, source: str, payload: dict):
    """Creates a structured log entry and appends it to the engine's event log."""
    state = engine.state
    timestamp_str = get_simulation_timestamp(state.time)
    log_entry = {
        "time": round(engine.env.now, 2),
        "timestamp": timestamp_str,
        "type": event_type,
        "source": source,
        "payload": payload
    }
    engine.event_log.append(log_entry)
    if engine.echo:
        print(f"{timestamp_str} | {source}: {payload.get('message', json.dumps(payload))}")
    return log_entry


def describe_state(engine) -> str:
    """
    Builds a short text panel of the current state: clock, needs, room and the
    objects the character can use right now.
    """
    state = engine.state
    needs = state.needs
    need_lines = "\n".join(
        f"- {name.capitalize()}: {round(getattr(needs, name))} ({need_level(getattr(needs, name))})"
        for name in ("energy", "sleep", "health", "happiness")
    )
    objects = []
    for action, used in engine.available_actions():
        marker = "x" if used else " "
        objects.append(f"  [{marker}] {action.id}: {action.name} ({action.duration} min)")

    summary = f"""
Week {week_progress(state.time.day)} | {get_simulation_timestamp(state.time)} | Speed {state.speed_multiplier}x | {state.status.value.upper()}
{need_lines}
Room: {state.location.value} | Activity: {state.activity.value}
Objects:
{chr(10).join(objects) if objects else "  (nothing here)"}
"""
    if state.terminal is not None:
        summary += f"GAME OVER: {state.terminal.message}\n"
    return summary


def parse_command(raw_command: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Parses a typed command line into (command, argument).
    Accepts aliases ("go kitchen", "do bed"), a bare action or room id, and an optional
    leading slash. Returns (None, raw) when nothing matches.
    """
    text = raw_command.strip().lower()
    if text.startswith("/"):
        text = text[1:]
    if not text:
        return None, None

    head, _, rest = text.partition(" ")
    rest = rest.strip() or None
    if head in COMMAND_ALIASES:
        return COMMAND_ALIASES[head], rest

    # Bare ids: "bed" performs, "kitchen" moves
    if catalog.lookup(head) is not None and rest is None:
        return "perform", head
    if head in catalog.room_ids() and rest is None:
        return "change_room", head
    return None, raw_command.strip()
