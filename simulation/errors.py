class SimulationError(Exception):
    """Base class for rejected simulation commands."""


class UnknownActionError(SimulationError):
    def __init__(self, action_id: str):
        super().__init__(f"Unknown action: {action_id}")
        self.action_id = action_id


class ActionAlreadyUsedError(SimulationError):
    def __init__(self, action_id: str, day: int):
        super().__init__(f"Action '{action_id}' was already used on day {day}")
        self.action_id = action_id
        self.day = day


class SimulationNotRunningError(SimulationError):
    """Raised for actions attempted while paused or after game over."""

    def __init__(self, status: str):
        super().__init__(f"Simulation is {status}")
        self.status = status


class InvalidSpeedError(SimulationError, ValueError):
    def __init__(self, multiplier):
        super().__init__(f"Invalid speed multiplier: {multiplier}")
        self.multiplier = multiplier
