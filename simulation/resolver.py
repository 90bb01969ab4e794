from typing import NamedTuple

from config import CLEAR_USAGE_ON_ACTION_ROLLOVER
from models import catalog
from models.catalog import ActionDefinition
from models.state import SimulationState
from simulation.clock import advance_time
from simulation.errors import ActionAlreadyUsedError, SimulationNotRunningError, UnknownActionError


class ActionResult(NamedTuple):
    action: ActionDefinition
    days_rolled: int


def perform(state: SimulationState, action_id: str,
            clear_usage_on_rollover: bool = CLEAR_USAGE_ON_ACTION_ROLLOVER) -> ActionResult:
    """
    Applies a catalog action to the state: marks it used for the day, shifts the needs,
    moves the clock forward by the action's duration and sets the character's activity.

    Raises UnknownActionError, ActionAlreadyUsedError or SimulationNotRunningError
    without touching the state. Game-over checks are left to the clock.
    """
    if state.terminal is not None or state.paused:
        raise SimulationNotRunningError(state.status.value)

    action = catalog.lookup(action_id)
    if action is None:
        raise UnknownActionError(action_id)
    if state.is_used_today(action.id):
        raise ActionAlreadyUsedError(action.id, state.time.day)

    new_needs = state.needs.shifted(**action.deltas())
    new_time, days_rolled = advance_time(state.time, action.duration)

    used = set(state.used_today)
    used.add((state.time.day, action.id))
    if days_rolled:
        used = set()
        if not clear_usage_on_rollover:
            used.add((new_time.day, action.id))

    state.needs = new_needs
    state.time = new_time
    state.used_today = used
    state.activity = action.activity
    return ActionResult(action=action, days_rolled=days_rolled)
