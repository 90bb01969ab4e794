import queue

import simpy

from config import TICK_INTERVAL_SECONDS, IDLE_REVERT_SECONDS, COMMAND_POLL_SECONDS
from models.state import Activity


def clock_process(env, engine):
    """Ticks the game clock on a fixed cadence until interrupted or the game is over."""
    try:
        while True:
            yield env.timeout(TICK_INTERVAL_SECONDS)
            engine.tick()
            if engine.state.terminal is not None:
                return
    except simpy.Interrupt:
        # pause or reset: the owner starts a new clock when needed
        return


def idle_revert_process(env, engine, state):
    """Drops the character back to idle after an action, unless cancelled first."""
    try:
        yield env.timeout(IDLE_REVERT_SECONDS)
    except simpy.Interrupt:
        return
    # A reset swaps the state out; never touch a discarded one.
    if engine.state is not state or state.terminal is not None:
        return
    state.activity = Activity.IDLE


def command_process(env, engine, inbox):
    """
    Drains commands queued by the input thread so every mutation runs on the
    simulation loop, one at a time.
    """
    while True:
        yield env.timeout(COMMAND_POLL_SECONDS)
        while True:
            try:
                command, arg = inbox.get_nowait()
            except queue.Empty:
                break
            engine.dispatch(command, arg)
            inbox.task_done()
        if engine.stopped:
            return
