# deathrelay

`deathrelay` follows a game output log (`output_log_*.txt`) as it grows.
Whenever a `[DEATH][name]` line names one of your targets, it sends that
target's number as an OSC int32 on `/avatar/parameters/ToN_DeathID`. By
default the message goes to `127.0.0.1:9000`. An avatar can then react to the
death.

## What it does

- It looks for the log directory at
  `<home>/AppData/LocalLow/VRChat/VRChat`. There it picks the most recently
  modified `output_log_*.txt`.
- It starts reading at the end of the file. After that it checks every
  500 ms for new lines.
- For each `[DEATH][...]` line that names a target, it queues the target's
  number.
  - At most one queued number is sent every 500 ms.
  - Targets are numbered from 1, in the order they are given.
- On a line containing `RoundOver` it drops every number still queued. It
  then sends `true` on `/avatar/parameters/ToN_DeathID_Reset`.
- Recording is optional. When it is on, a line containing
  `and the round type is` starts a round.
  - During the round, every player who dies and is not a target is recorded
    once.
  - At `RoundOver` the round ends and recording switches itself off.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
deathrelay [--host HOST] [--port PORT] COMMAND ...
```

`--host` and `--port` set where OSC messages go. The defaults are
`127.0.0.1` and `9000`.

| Command | What it does | Exit status |
| --- | --- | --- |
| `deathrelay latest [--log-dir DIR]` | Prints the path of the newest log file. It searches `DIR` if given, otherwise the default log directory. | 1 if no log file is found |
| `deathrelay format "Alice, Bob"` | Prints the names as numbered HTML `<li class="data-block">` items. | 0 |
| `deathrelay open PATH` | Runs `explorer` on the folder that holds `PATH`. | 1 if `PATH` has no parent or the command cannot be started |
| `deathrelay reset` | Sends the reset parameter once. | 1 if sending fails |
| `deathrelay watch "Alice, Bob" [--log FILE] [--record]` | Follows `FILE`, or the newest log, and relays deaths of the named targets. `--record` turns on player recording. | 1 if no log file is found |

`watch` prints each event as it happens and runs until it is interrupted
with Ctrl+C.

## Library use

```python
from deathrelay.logs import get_latest_log_file, split_and_format
from deathrelay.watcher import LogWatcher, Target

targets = [Target(number=1, value="Alice"), Target(number=2, value="Bob")]

def on_event(name, payload):
    print(name, payload)

watcher = LogWatcher(targets, on_event, None)
path = get_latest_log_file()
if path is not None:
    watcher.start(path)
    ...
    watcher.stop()
```

`LogWatcher(targets, emit, sender)`

- `emit` is an optional `emit(event, payload)` callback.
- `sender` is an optional `sender(address, args)` callable. It defaults to
  `deathrelay.osc.send_message`.

The events are:

- `log-hit`: a target died. The payload is the target's number.
- `reset-hit`: a reset was sent. The payload is `None`.
- `round-over`: a recorded round ended. The payload is `None`.
- `recording-new-player`: a non-target player died during a recorded round.
  The payload is the player's name.

Methods and attributes of `LogWatcher`:

| Name | What it does |
| --- | --- |
| `start(path=None)` | Starts the background threads and returns the file being followed. This is `None` if no log was found. In that case only the queue thread runs. Call `stop()` when done. |
| `stop()` | Stops the threads and waits for them. |
| `toggle_recording(enabled)` | Turns player recording on or off. Turning it on clears the recorded players. |
| `send_reset()` | Clears the queue and sends the reset parameter straight away. |
| `handle_line(line)` | Processes one log line (`str` or `bytes`). |
| `read_new_lines(stream)` | Processes every remaining line of an open stream. |
| `flush_queue(now=None)` | Sends the next queued number if one is due. |
| `recorded_players` | The names recorded so far. |

`OscQueue` is the rate-limited queue the watcher uses. It has `push`,
`clear`, `pop_due` and `len()`.

Helpers in `deathrelay.logs`:

- `get_log_dir(home=None)`
- `find_latest_log_file(log_dir)`
- `get_latest_log_file()`
- `split_and_format(text)`
- `open_explorer(path)`

`deathrelay.osc.encode_message(address, args)` builds a plain OSC message.
It accepts `bool`, `int`, `float`, `str`, `bytes` and `None` arguments.
`deathrelay.osc.send_message(address, args, host, port)` sends such a message
over UDP and returns whether it was sent.

## What it does not do

- There is no graphical window. Events are reported only through the `emit`
  callback, or printed by `deathrelay watch`.
- The default log directory follows the Windows layout under the user's
  home. Elsewhere, pass `--log` or `--log-dir`.
- `deathrelay open` relies on the Windows `explorer` command.