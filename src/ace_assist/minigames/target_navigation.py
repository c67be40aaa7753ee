"""Video tape examination: target cycling, cursor placement, and announcements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Sequence

from ace_assist.announcements import Category
from ace_assist.constants import CURSOR_HIT_OFFSET
from ace_assist.detectors import EdgeTrigger, Transition
from ace_assist.game_state import CursorControl, GameSnapshot, TapeState, Target

if TYPE_CHECKING:
    from ace_assist.pipeline import AnnouncementPipeline

log = logging.getLogger(__name__)


class NavigationOutcome(Enum):
    NO_TARGETS = auto()
    ON_TARGET = auto()
    NEEDS_ADJUSTMENT = auto()


@dataclass(frozen=True)
class NavigationResult:
    outcome: NavigationOutcome
    position: int = 0       # 1-based position in the active ordering
    total: int = 0
    target: Optional[Target] = None
    attempts: int = 0


class TargetNavigator:
    """Cycles a cursor through the currently active targets.

    The active ordering is rebuilt from the snapshot on every call and
    ``current_index`` is applied to it positionally; targets are not tracked
    by identity when the set changes.
    """

    def __init__(self, hit_offset: tuple[float, float] = CURSOR_HIT_OFFSET):
        self.hit_offset = hit_offset
        self.current_index = -1

    def reset(self) -> None:
        self.current_index = -1

    def next(self, targets: Sequence[Target],
             cursor: CursorControl) -> NavigationResult:
        return self._step(targets, cursor, forward=True)

    def previous(self, targets: Sequence[Target],
                 cursor: CursorControl) -> NavigationResult:
        return self._step(targets, cursor, forward=False)

    def _step(self, targets: Sequence[Target], cursor: CursorControl,
              forward: bool) -> NavigationResult:
        active = [t for t in targets if t.active]
        if not active:
            return NavigationResult(NavigationOutcome.NO_TARGETS)

        count = len(active)
        if forward:
            self.current_index = (self.current_index + 1) % count
        elif self.current_index <= 0 or self.current_index > count:
            self.current_index = count - 1
        else:
            self.current_index -= 1

        target = active[self.current_index]
        outcome, attempts = self.place(target, cursor)
        return NavigationResult(outcome, self.current_index + 1, count,
                                target, attempts)

    def place(self, target: Target,
              cursor: CursorControl) -> tuple[NavigationOutcome, int]:
        """Move the cursor onto ``target`` and check that it registers a hit.

        The first placement compensates for the off-centre hit region.  If no
        collision is reported the cursor is put on the bare target centre and
        checked again.  When both fail the cursor stays at the second guess.
        """
        local_x, local_y = cursor.frame.to_local(target.x, target.y)
        off_x, off_y = self.hit_offset

        cursor.move_to(local_x + off_x, local_y + off_y)
        if cursor.collided_target() is not None:
            return NavigationOutcome.ON_TARGET, 1

        cursor.move_to(local_x, local_y)
        if cursor.collided_target() is not None:
            return NavigationOutcome.ON_TARGET, 2

        log.debug("No collision at target %d after offset and bare placement",
                  target.id)
        return NavigationOutcome.NEEDS_ADJUSTMENT, 2


class VideoTapeMonitor:
    """Play/pause and target announcements plus hint and navigation requests."""

    def __init__(self, pipeline: AnnouncementPipeline,
                 cursor: Optional[CursorControl] = None,
                 navigator: Optional[TargetNavigator] = None):
        self.pipeline = pipeline
        self.strings = pipeline.strings
        self.cursor = cursor
        self.navigator = navigator or TargetNavigator()
        self._active = EdgeTrigger()
        self._playing = EdgeTrigger()
        self._last_target_count = 0

    @staticmethod
    def _tape(snapshot: Optional[GameSnapshot]) -> Optional[TapeState]:
        if snapshot is None or snapshot.tape is None:
            return None
        return snapshot.tape if snapshot.tape.active else None

    def is_active(self, snapshot: Optional[GameSnapshot]) -> bool:
        return self._tape(snapshot) is not None

    def _say(self, text: str) -> None:
        self.pipeline.router.investigation(text)

    def update(self, snapshot: GameSnapshot) -> None:
        tape = self._tape(snapshot)
        transition = self._active.update(tape is not None)
        if transition is Transition.ENTERED:
            self._last_target_count = 0
            self.navigator.reset()
            self._say(self.strings.get("tape.start"))
        elif transition is Transition.EXITED:
            self._last_target_count = 0
            self.pipeline.router.investigation_cleared()

        if tape is None:
            self._playing.update(False)
            return

        play = self._playing.update(tape.playing)
        if play is Transition.ENTERED:
            self._say(self.strings.get("tape.playing"))
        elif play is Transition.EXITED:
            self._say(self._paused_text(tape))

        count = len(tape.active_targets)
        if count > 0 and self._last_target_count == 0:
            # Each new batch of targets is news even if it reads the same.
            self.pipeline.router.investigation_cleared()
            self._say(self.strings.get("tape.target_appeared"))
        self._last_target_count = count

    def _paused_text(self, tape: TapeState) -> str:
        count = len(tape.active_targets)
        if count > 0:
            return self.strings.get_plural("tape.paused_at_targets", count, tape.frame)
        return self.strings.get("tape.paused_at", tape.frame)

    # ── Requests ──────────────────────────────────────────────────────────

    def state_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        tape = self._tape(snapshot)
        if tape is None:
            return self.strings.get("tape.not_active"), Category.SYSTEM_MESSAGE
        playback = self.strings.get("tape.playing" if tape.playing else "tape.paused")
        count = len(tape.active_targets)
        if count > 0:
            targets = self.strings.get_plural("tape.targets_available", count)
        else:
            targets = self.strings.get("tape.no_targets")
        over = (self.cursor.collided_target() if self.cursor is not None
                else tape.cursor_target)
        if over is not None:
            targets = self.strings.get("tape.cursor_on_target", targets, over + 1)
        return (self.strings.get("tape.state", playback, tape.frame, targets),
                Category.INVESTIGATION)

    def hint_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        tape = self._tape(snapshot)
        if tape is None:
            return self.strings.get("tape.not_active"), Category.SYSTEM_MESSAGE
        key = f"tape.hint.{tape.examination}"
        if not self.strings.has(key):
            key = "tape.hint.default"
        return self.strings.get(key, tape.frame), Category.INVESTIGATION

    def navigate_text(self, snapshot: Optional[GameSnapshot],
                      forward: bool = True) -> tuple[str, Category]:
        tape = self._tape(snapshot)
        if tape is None:
            return self.strings.get("tape.not_active"), Category.SYSTEM_MESSAGE
        if tape.playing:
            return self.strings.get("tape.pause_first"), Category.INVESTIGATION
        if self.cursor is None:
            return self.strings.get("tape.cursor_unavailable"), Category.SYSTEM_MESSAGE

        if forward:
            result = self.navigator.next(tape.targets, self.cursor)
        else:
            result = self.navigator.previous(tape.targets, self.cursor)

        if result.outcome is NavigationOutcome.NO_TARGETS:
            return self.strings.get("tape.no_targets_here"), Category.INVESTIGATION
        key = ("tape.on_target" if result.outcome is NavigationOutcome.ON_TARGET
               else "tape.needs_adjustment")
        return (self.strings.get(key, result.position, result.total),
                Category.INVESTIGATION)

    def announce_state(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.state_text(snapshot)
        self.pipeline.respond(text, category)
        return text

    def announce_hint(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.hint_text(snapshot)
        self.pipeline.respond(text, category)
        return text

    def navigate(self, snapshot: Optional[GameSnapshot], forward: bool = True) -> str:
        text, category = self.navigate_text(snapshot, forward)
        self.pipeline.respond(text, category)
        return text
