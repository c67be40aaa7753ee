"""Delivery sinks and the timed loop that drains the announcement queue."""

from __future__ import annotations

import logging
import shlex
import subprocess
import threading
from typing import Optional, Protocol

from ace_assist.announcements import AnnouncementQueue
from ace_assist.constants import DRAIN_INTERVAL, IDLE_INTERVAL

log = logging.getLogger(__name__)


class DeliverySink(Protocol):
    """Whatever actually hands text to the screen reader or TTS engine."""

    def send(self, text: str) -> bool: ...


class ConsoleSink:
    """Print a single line of output suitable for a screen reader."""

    def send(self, text: str) -> bool:
        print(text, flush=True)
        return True


class CommandSink:
    """Speak through an external TTS command, e.g. ``espeak`` or ``say``.

    The announcement is passed as the final argument.  A non-zero exit status
    counts as a failed delivery.
    """

    def __init__(self, command: str, timeout: float = 10.0):
        self.argv = shlex.split(command)
        if not self.argv:
            raise ValueError("empty speech command")
        self.timeout = timeout

    def send(self, text: str) -> bool:
        result = subprocess.run(self.argv + [text], capture_output=True,
                                timeout=self.timeout)
        if result.returncode != 0:
            log.warning("%s exited with %d: %s", self.argv[0], result.returncode,
                        result.stderr.decode("utf-8", errors="replace").strip())
            return False
        return True


class InMemorySink:
    """Records delivered text in order."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, text: str) -> bool:
        self.sent.append(text)
        return True


class DrainLoop:
    """Sole consumer of the queue: one announcement per ``interval``.

    After a delivery the loop waits the full interval; when the queue is empty
    it only waits ``idle_interval`` before looking again.  Both waits end early
    when :meth:`stop` is called.
    """

    def __init__(self, queue: AnnouncementQueue, sink: DeliverySink,
                 interval: float = DRAIN_INTERVAL,
                 idle_interval: float = IDLE_INTERVAL):
        self.queue = queue
        self.sink = sink
        self.interval = interval
        self.idle_interval = idle_interval
        self.delivered = 0
        self.failed = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._drain_loop, daemon=True,
                                        name="announcement-drain")
        self._thread.start()

    def stop(self, timeout: float = 2.0):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                # Still inside sink.send(); keep the handle so start() cannot
                # add a second consumer.
                log.warning("Drain loop did not stop within %.1fs", timeout)
                return
            self._thread = None

    def run_once(self) -> bool:
        """Deliver at most one announcement.  Returns False if nothing was pending."""
        item = self.queue.dequeue()
        if item is None:
            return False
        try:
            ok = self.sink.send(item.text)
        except Exception:
            self.failed += 1
            log.exception("Delivery failed for %r", item.text)
            return True
        if ok is False:
            self.failed += 1
            log.warning("Sink rejected %r", item.text)
        else:
            self.delivered += 1
        return True

    def flush(self) -> int:
        """Deliver everything pending without waiting.  Returns the number handled."""
        count = 0
        while self.run_once():
            count += 1
        return count

    def _drain_loop(self):
        while not self._stop.is_set():
            if self.run_once():
                self._stop.wait(self.interval)
            else:
                self._stop.wait(self.idle_interval)
