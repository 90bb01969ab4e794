from enum import Enum
from typing import Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import (
    INITIAL_NEEDS, START_DAY, START_HOUR, START_MINUTE, START_ROOM,
    NEED_MIN, NEED_MAX, SPEED_STEPS
)


class Room(str, Enum):
    BEDROOM = "bedroom"
    LIVING = "living"
    KITCHEN = "kitchen"
    GYM = "gym"
    BATHROOM = "bathroom"


class Activity(str, Enum):
    IDLE = "idle"
    SLEEPING = "sleeping"
    EATING = "eating"
    EXERCISING = "exercising"
    RELAXING = "relaxing"
    DRINKING_WATER = "drinkingWater"
    SHOWERING = "showering"


class TerminalReason(str, Enum):
    ENERGY = "energy"
    SLEEP = "sleep"
    HEALTH = "health"


class SimStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    TERMINAL = "terminal"


def clamp_need(value: float) -> float:
    return max(NEED_MIN, min(NEED_MAX, value))


class Needs(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    energy: float = Field(default=INITIAL_NEEDS["energy"], ge=NEED_MIN, le=NEED_MAX)
    sleep: float = Field(default=INITIAL_NEEDS["sleep"], ge=NEED_MIN, le=NEED_MAX)
    health: float = Field(default=INITIAL_NEEDS["health"], ge=NEED_MIN, le=NEED_MAX)
    happiness: float = Field(default=INITIAL_NEEDS["happiness"], ge=NEED_MIN, le=NEED_MAX)

    def shifted(self, energy: float = 0, sleep: float = 0, health: float = 0, happiness: float = 0) -> "Needs":
        """Returns a new Needs with the deltas applied, each value clamped to the valid range."""
        return Needs(
            energy=clamp_need(self.energy + energy),
            sleep=clamp_need(self.sleep + sleep),
            health=clamp_need(self.health + health),
            happiness=clamp_need(self.happiness + happiness),
        )


class GameTime(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int = Field(default=START_DAY, ge=1)
    hour: int = Field(default=START_HOUR, ge=0, le=23)
    minute: int = Field(default=START_MINUTE, ge=0, le=59)


class Terminal(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: TerminalReason
    message: str


class SimulationState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    needs: Needs = Field(default_factory=Needs)
    time: GameTime = Field(default_factory=GameTime)
    speed_multiplier: int = SPEED_STEPS[0]
    paused: bool = False
    terminal: Optional[Terminal] = None
    location: Room = Room(START_ROOM)
    activity: Activity = Activity.IDLE
    # (day, action_id) pairs; only ever holds entries for time.day
    used_today: Set[Tuple[int, str]] = Field(default_factory=set)

    @field_validator("speed_multiplier")
    @classmethod
    def _check_speed(cls, value: int) -> int:
        if value not in SPEED_STEPS:
            raise ValueError(f"Invalid speed multiplier: {value} (expected one of {SPEED_STEPS})")
        return value

    @property
    def status(self) -> SimStatus:
        if self.terminal is not None:
            return SimStatus.TERMINAL
        if self.paused:
            return SimStatus.PAUSED
        return SimStatus.RUNNING

    def is_used_today(self, action_id: str) -> bool:
        return (self.time.day, action_id) in self.used_today
