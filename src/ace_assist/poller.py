"""Game state polling loop, state dump, and command handling."""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
import time
from typing import Callable, Optional

from ace_assist.announcements import Category
from ace_assist.constants import POLL_HZ
from ace_assist.game_state import CursorControl, GameSnapshot, GameStateSource
from ace_assist.minigames import RotationPuzzleMonitor, VideoTapeMonitor
from ace_assist.monitors import (
    ChoiceMonitor,
    DialogueMonitor,
    InvestigationMonitor,
    LuminolMonitor,
    MenuMonitor,
)
from ace_assist.orchestra import OrchestraMonitor
from ace_assist.pipeline import AnnouncementPipeline

log = logging.getLogger(__name__)


class StatePoller:
    """Samples the game state at ``poll_hz`` and feeds every monitor."""

    def __init__(self, source: GameStateSource, pipeline: AnnouncementPipeline,
                 poll_hz: float = POLL_HZ,
                 cursor: Optional[CursorControl] = None,
                 after_poll: Optional[Callable[[GameSnapshot], None]] = None):
        self.source = source
        self.pipeline = pipeline
        self.after_poll = after_poll
        self.poll_interval = 1.0 / poll_hz
        router = pipeline.router
        self.puzzle = RotationPuzzleMonitor(pipeline)
        self.tape = VideoTapeMonitor(pipeline, cursor=cursor)
        self.orchestra = OrchestraMonitor(pipeline)
        self.monitors = [
            DialogueMonitor(router),
            MenuMonitor(router),
            ChoiceMonitor(router),
            InvestigationMonitor(router),
            LuminolMonitor(router),
            self.puzzle,
            self.tape,
        ]
        self._state: Optional[GameSnapshot] = None
        self._state_lock = threading.Lock()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def get_state(self) -> Optional[GameSnapshot]:
        with self._state_lock:
            return self._state

    def start(self):
        self._running = True
        self._thread = threading.Thread(target=self._poll_loop, daemon=True,
                                        name="state-poller")
        self._thread.start()

    def stop(self):
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)

    def poll_once(self) -> Optional[GameSnapshot]:
        """Read one snapshot and run the monitors over it.

        A failed read skips the poll; the monitors see no change.
        """
        try:
            snapshot = self.source.read()
        except Exception:
            log.debug("Game state not readable this poll", exc_info=True)
            return None
        if snapshot is None:
            return None

        with self._state_lock:
            self._state = snapshot

        for monitor in self.monitors:
            try:
                monitor.update(snapshot)
            except Exception:
                log.exception("%s failed on tick %d", type(monitor).__name__,
                              snapshot.tick)
        if self.after_poll is not None:
            try:
                self.after_poll(snapshot)
            except Exception:
                log.exception("Post-poll hook failed on tick %d", snapshot.tick)
        return snapshot

    def _poll_loop(self):
        while self._running:
            self.poll_once()
            time.sleep(self.poll_interval)


def dump_snapshot(snapshot: GameSnapshot, path: str = "dump.json") -> str:
    """Write a snapshot to a JSON file in the replay format."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dataclasses.asdict(snapshot), f, indent=2)
    return path


COMMANDS: dict[str, str] = {
    "hint":  "Hint or controls for the current puzzle, video tape or music player",
    "state": "Describe the current puzzle, video tape or music player",
    "next":  "Move the cursor to the next video tape target",
    "prev":  "Move the cursor to the previous video tape target",
    "dump":  "Write the latest game state to dump.json",
    "help":  "List available commands",
    "quit":  "Exit the program",
}


def handle_command(cmd: str, poller: StatePoller) -> bool:
    """Handle a command. Returns True if recognized."""
    parts = cmd.strip().lstrip("/").split(maxsplit=1)
    if not parts:
        return False
    name = parts[0].lower()
    arg = parts[1] if len(parts) > 1 else ""
    pipeline = poller.pipeline
    strings = pipeline.strings
    try:
        return _dispatch(name, arg, poller, pipeline)
    except Exception:
        log.exception("Command %r failed", cmd)
        pipeline.respond(strings.get("system.error"), Category.SYSTEM_MESSAGE)
        return True


def _dispatch(cmd: str, arg: str, poller: StatePoller,
              pipeline: AnnouncementPipeline) -> bool:
    strings = pipeline.strings
    state = poller.get_state()

    if cmd in ("hint", "state"):
        if poller.puzzle.is_active(state):
            monitor = poller.puzzle
        elif poller.tape.is_active(state):
            monitor = poller.tape
        elif poller.orchestra.is_active(state):
            monitor = poller.orchestra
        else:
            pipeline.respond(strings.get("system.no_hint"), Category.SYSTEM_MESSAGE)
            return True
        if cmd == "hint":
            monitor.announce_hint(state)
        else:
            monitor.announce_state(state)
        return True

    if cmd in ("next", "prev"):
        poller.tape.navigate(state, forward=(cmd == "next"))
        return True

    if cmd == "dump":
        if state is None:
            pipeline.respond(strings.get("system.no_state"), Category.SYSTEM_MESSAGE)
        else:
            out = dump_snapshot(state, arg or "dump.json")
            pipeline.respond(strings.get("system.dumped", out), Category.SYSTEM_MESSAGE)
        return True

    if cmd == "help":
        pipeline.respond(strings.get("system.help_header"), Category.SYSTEM_MESSAGE)
        for name, desc in COMMANDS.items():
            pipeline.respond(strings.get("system.help_line", name, desc),
                             Category.SYSTEM_MESSAGE)
        return True

    return False
