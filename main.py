import argparse
import datetime
import json
import os
import queue
import threading

import simpy
import simpy.rt
from dotenv import load_dotenv

from config import DEFAULT_TIME_FACTOR, ECHO_EVENTS, EVENT_LOG_PREFIX, ACTION_LOG_PREFIX
from simulation.engine import SimulationEngine
from simulation.processes import command_process
from utils import describe_state, parse_command

RUN_STEP_SECONDS = 0.5


def load_settings():
    """Reads .env / environment overrides for the front end."""
    load_dotenv()
    factor = float(os.getenv("DREAMSTORY_TIME_FACTOR", DEFAULT_TIME_FACTOR))
    echo = os.getenv("DREAMSTORY_ECHO_EVENTS", str(ECHO_EVENTS)).strip().lower() in ("1", "true", "yes", "on")
    return factor, echo


def script_process(env, inbox, lines):
    """Feeds scripted commands into the inbox; 'wait N' pauses the script for N seconds."""
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.lower().startswith("wait"):
            yield env.timeout(float(line.split()[1]))
            continue
        inbox.put(parse_command(line))
    inbox.put(("quit", None))


def read_input(inbox):
    """Reads player commands from stdin; runs on its own thread and only enqueues."""
    while True:
        try:
            line = input()
        except EOFError:
            inbox.put(("quit", None))
            return
        command, arg = parse_command(line)
        if command is None and arg is None:
            continue
        inbox.put((command, arg))
        if command == "quit":
            return


def write_action_log(event_log, filename):
    """Filters for performed actions and game milestones and writes a readable log."""
    with open(filename, 'w') as f:
        f.write("--- Dream Story Action Log ---\n\n")
        for event in event_log:
            if event['type'] in ('ACTION_PERFORMED', 'DAY_START', 'GAME_OVER', 'RESET'):
                payload = event['payload']
                detail = payload.get('message') or f"Day {payload.get('day')}"
                f.write(f"[{event['timestamp']}] {event['type']}: {detail}\n")


def main():
    parser = argparse.ArgumentParser(description="Dream Story: real-time life simulation")
    parser.add_argument("--factor", type=float, default=None, help="Wall seconds per simulated second")
    parser.add_argument("--fast", action="store_true", help="Run without real-time pacing")
    parser.add_argument("--script", type=str, default=None, help="File of commands to replay")
    parser.add_argument("--max-seconds", type=float, default=None, help="Stop after this many simulated seconds")
    parser.add_argument("--quiet", action="store_true", help="Do not echo events")
    args = parser.parse_args()

    factor, echo = load_settings()
    if args.factor is not None:
        factor = args.factor
    if args.quiet:
        echo = False

    if args.fast:
        env = simpy.Environment()
    else:
        env = simpy.rt.RealtimeEnvironment(factor=factor, strict=False)

    engine = SimulationEngine(env, echo=echo)
    inbox = queue.Queue()
    env.process(command_process(env, engine, inbox))

    interactive = args.script is None
    if interactive:
        print("--- Commands: go <room>, do <action>, pause, resume, speed [n], status, reset, quit ---")
        threading.Thread(target=read_input, args=(inbox,), daemon=True).start()
    else:
        with open(args.script) as f:
            env.process(script_process(env, inbox, f.readlines()))

    print(describe_state(engine))
    engine.start()

    print("\n--- Running Simulation ---")
    try:
        while not engine.stopped:
            if args.max_seconds is not None and env.now >= args.max_seconds:
                break
            if engine.terminal is not None and (args.fast or not interactive) and inbox.empty():
                break
            env.run(until=env.now + RUN_STEP_SECONDS)
    except KeyboardInterrupt:
        print("\n  Interrupted by user.")

    engine.shutdown()
    print("\n--- Simulation Complete ---")
    print(describe_state(engine))

    # --- Create timestamped log files ---
    timestamp_str = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    full_log_filename = f"{EVENT_LOG_PREFIX}_{timestamp_str}.json"
    action_log_filename = f"{ACTION_LOG_PREFIX}_{timestamp_str}.txt"

    with open(full_log_filename, 'w') as f:
        json.dump(engine.event_log, f, indent=2)
    print(f"\nFull event log saved to {full_log_filename}")

    write_action_log(engine.event_log, action_log_filename)
    print(f"Action log saved to {action_log_filename}")


if __name__ == "__main__":
    main()
