from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.state import Activity, Room


class ActionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    energy: int = 0
    sleep: int = 0
    health: int = 0
    happiness: int = 0
    duration: int = Field(gt=0)  # simulated minutes
    room: Room
    activity: Activity

    def deltas(self) -> Dict[str, int]:
        return {"energy": self.energy, "sleep": self.sleep, "health": self.health, "happiness": self.happiness}


class RoomDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Room
    name: str


ROOMS: List[RoomDefinition] = [
    RoomDefinition(id=Room.BEDROOM, name="Bedroom"),
    RoomDefinition(id=Room.LIVING, name="Living Room"),
    RoomDefinition(id=Room.KITCHEN, name="Kitchen"),
    RoomDefinition(id=Room.GYM, name="Gym"),
    RoomDefinition(id=Room.BATHROOM, name="Bathroom"),
]

_RAW_ACTIONS = [
    # id, name, energy, sleep, health, happiness, minutes, room, activity
    ("bed", "Sleep", 40, 50, 10, 5, 480, Room.BEDROOM, Activity.SLEEPING),
    ("sofa", "Relax", 5, -5, 0, 15, 60, Room.LIVING, Activity.RELAXING),
    ("table", "Eat", 15, -5, 20, 10, 30, Room.KITCHEN, Activity.EATING),
    ("water", "Drink Water", 5, 0, 15, 5, 5, Room.KITCHEN, Activity.DRINKING_WATER),
    ("exercise", "Exercise", -20, 10, 25, 20, 60, Room.GYM, Activity.EXERCISING),
    ("shower", "Shower", 10, 5, 15, 15, 20, Room.BATHROOM, Activity.SHOWERING),
    ("computer", "Use Computer", -10, -15, -5, 20, 120, Room.BEDROOM, Activity.RELAXING),
    ("tv", "Watch TV", -5, -10, -2, 15, 90, Room.LIVING, Activity.RELAXING),
    ("videogame", "Play Games", -15, -20, -5, 25, 120, Room.LIVING, Activity.RELAXING),
    ("treadmill", "Treadmill", -25, 15, 30, 15, 45, Room.GYM, Activity.EXERCISING),
    ("dumbbells", "Weights", -30, 20, 35, 20, 60, Room.GYM, Activity.EXERCISING),
    ("yoga-mat", "Yoga", -10, 25, 20, 30, 45, Room.GYM, Activity.EXERCISING),
    ("skincare", "Skincare", 5, 10, 10, 20, 15, Room.BATHROOM, Activity.RELAXING),
    ("fridge", "Snack", 10, -2, 5, 8, 10, Room.KITCHEN, Activity.EATING),
    ("stove", "Cook", -5, 0, 25, 15, 45, Room.KITCHEN, Activity.EATING),
    ("microwave", "Reheat", 8, -3, 8, 5, 5, Room.KITCHEN, Activity.EATING),
]

ACTIONS: List[ActionDefinition] = [
    ActionDefinition(
        id=action_id, name=name, energy=energy, sleep=sleep, health=health, happiness=happiness,
        duration=duration, room=room, activity=activity
    )
    for action_id, name, energy, sleep, health, happiness, duration, room, activity in _RAW_ACTIONS
]

_BY_ID: Dict[str, ActionDefinition] = {action.id: action for action in ACTIONS}


def lookup(action_id: str) -> Optional[ActionDefinition]:
    """Finds a catalog action by id, or None when the id is unknown."""
    return _BY_ID.get(action_id)


def by_room(room: Union[Room, str]) -> List[ActionDefinition]:
    """Lists the actions placed in a room, in catalog order."""
    room = Room(room)
    return [action for action in ACTIONS if action.room == room]


def room_ids() -> List[str]:
    return [room.id.value for room in ROOMS]
