"""Watching a game log for deaths and relaying them as OSC parameters."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from deathrelay import osc
from deathrelay.logs import find_latest_log_file, get_log_dir

DEATH_ID_ADDRESS = "/avatar/parameters/ToN_DeathID"
RESET_ADDRESS = "/avatar/parameters/ToN_DeathID_Reset"
MIN_SEND_INTERVAL = 0.5
QUEUE_POLL_INTERVAL = 0.1
LOG_POLL_INTERVAL = 0.5

ROUND_START_MARKER = "and the round type is"
ROUND_OVER_MARKER = "RoundOver"
DEATH_MARKER = "[DEATH]["

Emitter = Callable[[str, Any], None]
Sender = Callable[[str, list], Any]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """A watched player name and the number sent when they die."""

    number: int
    value: str


class OscQueue:
    """Thread-safe FIFO of death numbers, released at a limited rate."""

    def __init__(self, min_interval: float = MIN_SEND_INTERVAL) -> None:
        self._items: deque[int] = deque()
        self._lock = threading.Lock()
        self._min_interval = min_interval
        self._last_send: float | None = None

    def push(self, number: int) -> None:
        with self._lock:
            self._items.append(number)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def _reset_timer(self) -> None:
        with self._lock:
            self._last_send = None

    def pop_due(self, now: float | None = None) -> int | None:
        """Pop the next number if the send interval has passed.

        A due slot is used up even when the queue is empty.
        """
        if now is None:
            now = time.monotonic()
        with self._lock:
            if self._last_send is not None and now - self._last_send < self._min_interval:
                return None
            self._last_send = now
            return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _death_name(line: str) -> str | None:
    start = line.find(DEATH_MARKER)
    if start < 0:
        return None
    begin = start + len(DEATH_MARKER)
    end = line.find("]", begin)
    if end < 0:
        return None
    return line[begin:end]


class LogWatcher:
    """Follows a log file, queues death numbers and tracks recordings."""

    def __init__(
        self,
        targets: Iterable[Target],
        emit: Emitter | None = None,
        sender: Sender | None = None,
    ) -> None:
        self.targets = list(targets)
        self._numbers: dict[str, int] = {}
        for target in self.targets:
            self._numbers.setdefault(target.value, target.number)
        self._emit_cb = emit
        self._sender = sender if sender is not None else osc.send_message
        self.queue = OscQueue()
        self.recording = False
        self.in_round = False
        self._recorded: set[str] = set()
        self._players_lock = threading.Lock()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    @property
    def recorded_players(self) -> frozenset[str]:
        with self._players_lock:
            return frozenset(self._recorded)

    def _emit(self, event: str, payload: Any) -> None:
        if self._emit_cb is not None:
            self._emit_cb(event, payload)

    def toggle_recording(self, enabled: bool) -> None:
        """Turn recording of unknown dead players on or off."""
        self.recording = enabled
        self.in_round = False
        if enabled:
            with self._players_lock:
                self._recorded.clear()
            log.info("Recording started - cleared recorded player list")
        else:
            log.info("Recording stopped")

    def send_reset(self) -> None:
        """Drop pending numbers and send the reset parameter."""
        self.queue.clear()
        self._sender(RESET_ADDRESS, [True])
        self._emit("reset-hit", None)

    def _record_new_player(self, name: str) -> None:
        with self._players_lock:
            if name in self._recorded or name in self._numbers:
                return
            self._recorded.add(name)
        log.info("Recorded new player: %s", name)
        self._emit("recording-new-player", name)

    def handle_line(self, line: str | bytes) -> None:
        """React to one log line."""
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")

        if self.recording and ROUND_START_MARKER in line and not self.in_round:
            self.in_round = True
            with self._players_lock:
                self._recorded.clear()
            log.info("Round start - cleared recorded player list")

        if ROUND_OVER_MARKER in line:
            self.queue.clear()
            if self.recording and self.in_round:
                self.in_round = False
                self.recording = False
                log.info("RoundOver detected - stopped recording automatically")
                self._emit("round-over", None)
            self._sender(RESET_ADDRESS, [True])
            self._emit("reset-hit", None)

        name = _death_name(line)
        if name is None:
            return
        if self.recording and self.in_round:
            self._record_new_player(name)
        number = self._numbers.get(name)
        if number is not None:
            self.queue.push(number)
            self._emit("log-hit", number)

    def read_new_lines(self, stream: IO) -> int:
        """Handle every line from the stream's position to its end."""
        count = 0
        for line in iter(stream.readline, stream.read(0)):
            self.handle_line(line)
            count += 1
        return count

    def flush_queue(self, now: float | None = None) -> int | None:
        """Send the next queued number if one is due."""
        number = self.queue.pop_due(now)
        if number is not None:
            self._sender(DEATH_ID_ADDRESS, [number])
        return number

    def _run_queue(self, stop: threading.Event) -> None:
        while not stop.is_set():
            self.flush_queue()
            stop.wait(QUEUE_POLL_INTERVAL)

    def _run_watch(self, path: Path, stop: threading.Event) -> None:
        try:
            stream = open(path, "rb")
        except OSError as exc:
            log.error("Cannot open log file %s: %s", path, exc)
            return
        with stream:
            position = stream.seek(0, 2)
            while not stop.wait(LOG_POLL_INTERVAL):
                stream.seek(position)
                self.read_new_lines(stream)
                position = stream.tell()

    def start(self, path: str | Path | None = None) -> Path | None:
        """Start following ``path`` or the newest log; return the file followed."""
        self.stop()
        self._stop = stop = threading.Event()
        self.queue.clear()
        self.queue._reset_timer()

        threads = [threading.Thread(target=self._run_queue, args=(stop,), daemon=True)]
        if path is None:
            log_dir = get_log_dir()
            found = find_latest_log_file(log_dir) if log_dir is not None else None
        else:
            found = Path(path)
        if found is not None:
            threads.append(
                threading.Thread(target=self._run_watch, args=(found, stop), daemon=True)
            )
        for thread in threads:
            thread.start()
        self._threads = threads
        return found

    def stop(self) -> None:
        """Stop the background threads and wait for them."""
        self._stop.set()
        for thread in self._threads:
            thread.join()
        self._threads = []