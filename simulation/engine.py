from typing import Dict, List, Optional, Tuple

from config import CLEAR_USAGE_ON_ACTION_ROLLOVER, ECHO_EVENTS
from models import catalog
from models.catalog import ActionDefinition
from models.state import Activity, GameTime, Needs, Room, SimStatus, SimulationState, Terminal
from simulation import clock, resolver
from simulation.errors import SimulationError
from simulation.processes import clock_process, idle_revert_process
from utils import log_event, describe_state, need_level, week_progress


class SimulationEngine:
    """
    Owns the simulation state and its two timers (the clock and the idle revert).
    Commands mutate the state; queries hand out copies or immutable values.
    """

    def __init__(self, env, echo: bool = ECHO_EVENTS,
                 clear_usage_on_rollover: bool = CLEAR_USAGE_ON_ACTION_ROLLOVER,
                 state: Optional[SimulationState] = None, output=print):
        self.env = env
        self.state = state if state is not None else SimulationState()
        self.event_log: List[dict] = []
        self.echo = echo
        self.clear_usage_on_rollover = clear_usage_on_rollover
        self.output = output
        self.started = False
        self.stopped = False
        self._clock = None
        self._idle_timer = None

    # --- Timer ownership ---

    def start(self):
        if self.started:
            return
        self.started = True
        log_event(self, "SIM_START", "SIM_CORE", {"message": "Simulation starting."})
        self._start_clock()

    def shutdown(self):
        if self.stopped:
            return
        self.stopped = True
        self._cancel_clock("shutdown")
        self._cancel_idle_timer("shutdown")
        log_event(self, "SIM_END", "SIM_CORE", {"message": f"Simulation ended at {self.env.now:.2f}s."})

    def _start_clock(self):
        if not self.started or self.stopped or self.state.status is not SimStatus.RUNNING:
            return
        if self._clock is not None and self._clock.is_alive:
            return
        self._clock = self.env.process(clock_process(self.env, self))

    def _interrupt(self, process, cause):
        if process is not None and process.is_alive and process is not self.env.active_process:
            process.interrupt(cause)

    def _cancel_clock(self, cause):
        self._interrupt(self._clock, cause)
        self._clock = None

    def _cancel_idle_timer(self, cause):
        self._interrupt(self._idle_timer, cause)
        self._idle_timer = None

    # --- Commands ---

    def tick(self) -> clock.TickResult:
        result = clock.tick(self.state)
        if result.days_rolled:
            log_event(self, "DAY_START", "CLOCK", {"day": self.state.time.day})
        if result.terminal is not None:
            self._cancel_idle_timer("game over")
            log_event(self, "GAME_OVER", "CLOCK", {
                "reason": result.terminal.reason.value,
                "message": result.terminal.message,
            })
        return result

    def pause(self) -> bool:
        if self.state.status is not SimStatus.RUNNING:
            return False
        self.state.paused = True
        self._cancel_clock("pause")
        log_event(self, "STATE_CHANGE", "PLAYER", {"status": SimStatus.PAUSED.value})
        return True

    def resume(self) -> bool:
        if self.state.status is not SimStatus.PAUSED:
            return False
        self.state.paused = False
        self._start_clock()
        log_event(self, "STATE_CHANGE", "PLAYER", {"status": SimStatus.RUNNING.value})
        return True

    def toggle_pause(self) -> bool:
        return self.resume() if self.state.paused else self.pause()

    def set_speed(self, multiplier) -> bool:
        multiplier = clock.validate_speed(multiplier)
        if self.state.terminal is not None:
            return False
        self.state.speed_multiplier = multiplier
        log_event(self, "SPEED_CHANGE", "PLAYER", {"speed": multiplier})
        return True

    def cycle_speed(self) -> bool:
        return self.set_speed(clock.next_speed(self.state.speed_multiplier))

    def change_room(self, room) -> bool:
        room = Room(room)
        if self.state.terminal is not None:
            return False
        self.state.location = room
        self.state.activity = Activity.IDLE
        self._cancel_idle_timer("room change")
        log_event(self, "ROOM_CHANGE", "PLAYER", {"room": room.value})
        return True

    def perform(self, action_id: str) -> bool:
        day = self.state.time.day
        try:
            result = resolver.perform(self.state, action_id, self.clear_usage_on_rollover)
        except SimulationError as e:
            log_event(self, "ACTION_REJECTED", "PLAYER", {
                "action": action_id, "reason": type(e).__name__, "detail": str(e)
            })
            return False

        action = result.action
        log_event(self, "ACTION_PERFORMED", "PLAYER", {
            "action": action.id,
            "message": f"{action.name} ({action.duration} min)",
            "day": day,
        })
        if result.days_rolled:
            log_event(self, "DAY_START", "CLOCK", {"day": self.state.time.day})

        # A newer action replaces the pending revert instead of stacking another one.
        self._cancel_idle_timer("superseded")
        self._idle_timer = self.env.process(idle_revert_process(self.env, self, self.state))
        return True

    def reset(self):
        self._cancel_clock("reset")
        self._cancel_idle_timer("reset")
        self.state = SimulationState()
        log_event(self, "RESET", "PLAYER", {"message": "New game started."})
        self._start_clock()

    def dispatch(self, command: Optional[str], arg: Optional[str] = None):
        """Runs a parsed front-end command. Bad input is logged, never raised."""
        handlers = {
            "perform": lambda: self.perform(arg),
            "change_room": lambda: self.change_room(arg),
            "pause": self.pause,
            "resume": self.resume,
            "toggle_pause": self.toggle_pause,
            "reset": self.reset,
            "speed": lambda: self.set_speed(int(arg)) if arg else self.cycle_speed(),
            "status": lambda: self.output(describe_state(self)),
            "quit": self.shutdown,
        }
        handler = handlers.get(command)
        if handler is None:
            log_event(self, "ERROR", "COMMAND", {"error": f"Unknown command: {arg or command}"})
            return None
        try:
            return handler()
        except (ValueError, TypeError) as e:
            log_event(self, "ERROR", "COMMAND", {"command": command, "error": str(e)})
            return None

    # --- Queries ---

    @property
    def needs(self) -> Needs:
        return self.state.needs.model_copy()

    @property
    def time(self) -> GameTime:
        return self.state.time

    @property
    def location(self) -> Room:
        return self.state.location

    @property
    def activity(self) -> Activity:
        return self.state.activity

    @property
    def speed(self) -> int:
        return self.state.speed_multiplier

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def terminal(self) -> Optional[Terminal]:
        return self.state.terminal

    @property
    def status(self) -> SimStatus:
        return self.state.status

    def is_used_today(self, action_id: str) -> bool:
        return self.state.is_used_today(action_id)

    def available_actions(self) -> List[Tuple[ActionDefinition, bool]]:
        """Actions in the current room, each paired with its used-today flag."""
        return [(action, self.state.is_used_today(action.id)) for action in catalog.by_room(self.state.location)]

    def need_levels(self) -> Dict[str, str]:
        needs = self.state.needs
        return {name: need_level(getattr(needs, name)) for name in ("energy", "sleep", "health", "happiness")}

    def week_progress(self) -> str:
        return week_progress(self.state.time.day)

    def snapshot(self) -> dict:
        data = self.state.model_dump(mode="json")
        data["status"] = self.state.status.value
        data["used_today"] = sorted(action_id for _, action_id in self.state.used_today)
        return data
