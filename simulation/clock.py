"""Game clock: time arithmetic, passive need decay and game-over detection."""
from typing import NamedTuple, Optional, Tuple

from config import (
    MINUTES_PER_HOUR, HOURS_PER_DAY, SPEED_STEPS,
    ENERGY_NIGHT_WINDOW, ENERGY_DECAY_NIGHT, ENERGY_DECAY_DAY,
    SLEEP_NIGHT_WINDOW, SLEEP_DECAY_NIGHT, SLEEP_DECAY_DAY,
    HEALTH_DECAY, HAPPINESS_DECAY, TERMINAL_NEEDS, TERMINAL_MESSAGES
)
from models.state import GameTime, Needs, SimulationState, Terminal, TerminalReason
from simulation.errors import InvalidSpeedError


class TickResult(NamedTuple):
    advanced: bool
    days_rolled: int = 0
    terminal: Optional[Terminal] = None


def advance_time(time: GameTime, minutes: int) -> Tuple[GameTime, int]:
    """Adds minutes to a game time, carrying into hours and days. Returns (new_time, days_rolled)."""
    hours_carried, minute = divmod(time.minute + minutes, MINUTES_PER_HOUR)
    days_rolled, hour = divmod(time.hour + hours_carried, HOURS_PER_DAY)
    return GameTime(day=time.day + days_rolled, hour=hour, minute=minute), days_rolled


def in_window(hour: int, window: Tuple[int, int]) -> bool:
    start, end = window
    return hour >= start or hour <= end


def decay_needs(needs: Needs, hour: int) -> Needs:
    """Applies one tick of passive decay for the given hour of day."""
    energy_decay = ENERGY_DECAY_NIGHT if in_window(hour, ENERGY_NIGHT_WINDOW) else ENERGY_DECAY_DAY
    sleep_decay = SLEEP_DECAY_NIGHT if in_window(hour, SLEEP_NIGHT_WINDOW) else SLEEP_DECAY_DAY
    return needs.shifted(
        energy=-energy_decay,
        sleep=-sleep_decay,
        health=-HEALTH_DECAY,
        happiness=-HAPPINESS_DECAY,
    )


def check_terminal(needs: Needs) -> Optional[Terminal]:
    # happiness at zero is miserable but never fatal
    for need in TERMINAL_NEEDS:
        if getattr(needs, need) <= 0:
            return Terminal(reason=TerminalReason(need), message=TERMINAL_MESSAGES[need])
    return None


def tick(state: SimulationState) -> TickResult:
    """
    Advances the clock by one tick: time, day rollover, decay, then the game-over check.
    Does nothing while paused or after game over.
    """
    if state.paused or state.terminal is not None:
        return TickResult(advanced=False)

    new_time, days_rolled = advance_time(state.time, state.speed_multiplier)
    new_needs = decay_needs(state.needs, new_time.hour)
    terminal = check_terminal(new_needs)

    state.time = new_time
    if days_rolled:
        state.used_today = set()
    state.needs = new_needs
    if terminal is not None:
        state.terminal = terminal
    return TickResult(advanced=True, days_rolled=days_rolled, terminal=terminal)


def next_speed(current: int) -> int:
    index = SPEED_STEPS.index(current) if current in SPEED_STEPS else -1
    return SPEED_STEPS[(index + 1) % len(SPEED_STEPS)]


def validate_speed(multiplier) -> int:
    if multiplier not in SPEED_STEPS or isinstance(multiplier, bool):
        raise InvalidSpeedError(multiplier)
    return int(multiplier)
