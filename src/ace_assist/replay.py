"""Recorded game state: JSON-lines snapshots and a simulated tape cursor.

Each non-blank line of a replay file is one JSON object.  An object with a
``"command"`` key is a scripted user command run after the snapshot before
it; anything else is a snapshot with optional ``dialogue``, ``menu``,
``choice``, ``inspect``, ``luminol``, ``puzzle``, ``tape`` and ``orchestra``
sections, the same shape :func:`ace_assist.poller.dump_snapshot` writes.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Optional

from ace_assist.constants import NO_TARGET
from ace_assist.game_state import (
    Bloodstain,
    ChoiceState,
    DialogueState,
    GameSnapshot,
    InspectState,
    LocalFrame,
    LuminolState,
    MenuState,
    OrchestraState,
    PieceState,
    PuzzleState,
    TapeState,
    Target,
)


def _build(cls, data: dict[str, Any], **overrides):
    """Construct a dataclass from the keys it knows about."""
    names = {f.name for f in dataclasses.fields(cls)}
    kwargs = {k: v for k, v in data.items() if k in names}
    kwargs.update(overrides)
    return cls(**kwargs)


def snapshot_from_dict(data: dict[str, Any]) -> GameSnapshot:
    def section(name):
        value = data.get(name)
        return value if isinstance(value, dict) else None

    snapshot = GameSnapshot(tick=int(data.get("tick", 0)))

    d = section("dialogue")
    if d is not None:
        snapshot.dialogue = _build(DialogueState, d,
                                   lines=[str(x) if x is not None else ""
                                          for x in d.get("lines", [])])
    d = section("menu")
    if d is not None:
        snapshot.menu = _build(MenuState, d, items=list(d.get("items", [])))
    d = section("choice")
    if d is not None:
        snapshot.choice = _build(ChoiceState, d, options=list(d.get("options", [])))
    d = section("inspect")
    if d is not None:
        snapshot.inspect = _build(InspectState, d)
    d = section("luminol")
    if d is not None:
        snapshot.luminol = LuminolState(
            stains=[_build(Bloodstain, s) for s in d.get("stains", [])])
    d = section("puzzle")
    if d is not None:
        snapshot.puzzle = _build(PuzzleState, d, pieces=[
            _build(PieceState, p) for p in d.get("pieces", [])])
    d = section("tape")
    if d is not None:
        over = d.get("cursor_target")
        if over is not None and not 0 <= over < NO_TARGET:
            over = None
        snapshot.tape = _build(TapeState, d, cursor_target=over, targets=[
            _build(Target, t) for t in d.get("targets", [])])
    d = section("orchestra")
    if d is not None:
        snapshot.orchestra = _build(OrchestraState, d)
    return snapshot


class ReplaySource:
    """Plays back recorded snapshots, one per :meth:`read`.

    Once the recording runs out the final snapshot keeps being returned (or
    playback restarts when ``loop`` is set).  Scripted commands become due as
    playback passes them and are collected with :meth:`take_commands`.
    """

    def __init__(self, snapshots: list[GameSnapshot],
                 commands: Optional[dict[int, list[str]]] = None,
                 loop: bool = False):
        if not snapshots:
            raise ValueError("replay contains no snapshots")
        self.snapshots = snapshots
        self.commands = commands or {}
        self.loop = loop
        self._pos = 0
        self.current: Optional[GameSnapshot] = None
        self._due: list[str] = list(self.commands_after(-1))

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self.snapshots)

    def read(self) -> GameSnapshot:
        if self.exhausted:
            if not self.loop:
                return self.snapshots[-1]
            self._pos = 0
            self._due.extend(self.commands_after(-1))
        self.current = self.snapshots[self._pos]
        self._due.extend(self.commands_after(self._pos))
        self._pos += 1
        return self.current

    def commands_after(self, index: int) -> list[str]:
        return self.commands.get(index, [])

    def take_commands(self) -> list[str]:
        """Commands reached by playback since the last call, in file order."""
        due = self._due
        self._due = []
        return due

    @classmethod
    def from_file(cls, path: str, loop: bool = False) -> ReplaySource:
        snapshots: list[GameSnapshot] = []
        commands: dict[int, list[str]] = {}
        with open(path, encoding="utf-8") as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"{path}:{lineno}: {exc.msg}") from exc
                if not isinstance(data, dict):
                    raise ValueError(f"{path}:{lineno}: expected a JSON object")
                if "command" in data:
                    commands.setdefault(len(snapshots) - 1, []).append(
                        str(data["command"]))
                    continue
                try:
                    snapshots.append(snapshot_from_dict(data))
                except (TypeError, ValueError, AttributeError) as exc:
                    raise ValueError(f"{path}:{lineno}: bad snapshot: {exc}") from exc
        return cls(snapshots, commands, loop=loop)


class SimulatedCursor:
    """Stand-in for the tape cursor when playing back a recording.

    The cursor lives in ``frame``'s local space.  Its touch point sits at
    ``touch_offset`` from the cursor origin; a hit is any active target in the
    replay's current snapshot containing the touch point.
    """

    def __init__(self, source: ReplaySource, frame: Optional[LocalFrame] = None,
                 touch_offset: tuple[float, float] = (-30.0, 30.0)):
        self.source = source
        self._frame = frame or LocalFrame()
        self.touch_offset = touch_offset
        self.x = 0.0
        self.y = 0.0

    @property
    def frame(self) -> LocalFrame:
        return self._frame

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def collided_target(self) -> Optional[int]:
        snapshot = self.source.current
        if snapshot is None or snapshot.tape is None:
            return None
        wx, wy = self._frame.to_world(self.x + self.touch_offset[0],
                                      self.y + self.touch_offset[1])
        for target in snapshot.tape.active_targets:
            if target.contains(wx, wy):
                return target.id
        return None
