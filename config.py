# --- Starting Conditions ---
INITIAL_NEEDS = {
    "energy": 80.0,
    "sleep": 70.0,
    "health": 85.0,
    "happiness": 75.0,
}
START_DAY = 1
START_HOUR = 7
START_MINUTE = 0
START_ROOM = "bedroom"

NEED_MIN = 0.0
NEED_MAX = 100.0

# --- Clock Configuration ---
# Wall-clock seconds between two ticks. One tick advances the game clock by
# `speed_multiplier` minutes.
TICK_INTERVAL_SECONDS = 0.1
SPEED_STEPS = (1, 2, 4)
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24

# Wall-clock seconds before the character drops back to idle after an action.
IDLE_REVERT_SECONDS = 2.0

# How often the command inbox is drained (wall-clock seconds).
COMMAND_POLL_SECONDS = 0.05

# --- Passive Decay (per tick) ---
# Night windows are inclusive on both ends: hour >= start or hour <= end.
ENERGY_NIGHT_WINDOW = (22, 6)
ENERGY_DECAY_NIGHT = 0.3
ENERGY_DECAY_DAY = 0.1

SLEEP_NIGHT_WINDOW = (23, 5)
SLEEP_DECAY_NIGHT = 0.4
SLEEP_DECAY_DAY = 0.1

HEALTH_DECAY = 0.05
HAPPINESS_DECAY = 0.08

# --- Game Over ---
# Checked in this order; the first need at zero decides the reason.
TERMINAL_NEEDS = ("energy", "sleep", "health")
TERMINAL_MESSAGES = {
    "energy": "Your energy ran out! Alex fainted from exhaustion.",
    "sleep": "Alex can't stay awake any longer! Sleep is urgently needed.",
    "health": "Alex's health is too low! Medical care is needed.",
}

# --- Feature Switches ---
# An action whose duration crosses midnight wipes the day's usage, its own
# entry included, so it can be used again right away. Set to False to keep
# the action marked as used on the new day.
CLEAR_USAGE_ON_ACTION_ROLLOVER = True

# Echo every logged event to stdout.
ECHO_EVENTS = True

# --- Presentation ---
NEED_LEVEL_GOOD = 70
NEED_LEVEL_WARNING = 40
DAYS_PER_WEEK = 7
WEEK_GOAL = 2

# --- Front End ---
# Wall seconds per simulated second; 1.0 plays in real time.
DEFAULT_TIME_FACTOR = 1.0
EVENT_LOG_PREFIX = "dreamstory_log"
ACTION_LOG_PREFIX = "dreamstory_actions"
