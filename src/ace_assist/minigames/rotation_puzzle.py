"""Vase puzzle: hint solver and the monitor that announces it.

The puzzle shows a row of fragments.  At each step one specific fragment has
to be selected, turned back to rotation 0 and combined.  R turns a piece one
step clockwise (3 -> 2 -> 1 -> 0); Q turns it counter-clockwise
(1 -> 2 -> 3 -> 0).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Sequence

from ace_assist.announcements import Category
from ace_assist.constants import (
    DEFAULT_PUZZLE_VARIANT,
    PUZZLE_SOLUTIONS,
    ROTATION_STEPS,
)
from ace_assist.detectors import EdgeTrigger, Transition
from ace_assist.game_state import GameSnapshot, PieceState, PuzzleState
from ace_assist.localization import Localizer

if TYPE_CHECKING:
    from ace_assist.pipeline import AnnouncementPipeline

log = logging.getLogger(__name__)


class HintKind(Enum):
    COMPLETE = auto()
    COMMIT = auto()
    ROTATE = auto()
    SELECT = auto()


class Rotation(Enum):
    CLOCKWISE = auto()          # R
    COUNTER_CLOCKWISE = auto()  # Q


class Direction(Enum):
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class PuzzleSolution:
    variant: int
    order: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.order)


def solution_for(variant: int,
                 solutions: Optional[dict[int, tuple[int, ...]]] = None
                 ) -> PuzzleSolution:
    """Solution for a variant (piece count); unknown variants use the default."""
    table = PUZZLE_SOLUTIONS if solutions is None else solutions
    order = table.get(variant)
    if order is None:
        log.debug("No solution for %d-piece variant; using %d-piece order",
                  variant, DEFAULT_PUZZLE_VARIANT)
        variant = DEFAULT_PUZZLE_VARIANT
        order = table[DEFAULT_PUZZLE_VARIANT]
    return PuzzleSolution(variant, tuple(order))


@dataclass(frozen=True)
class PuzzleHint:
    kind: HintKind
    remaining: int
    piece: Optional[int] = None
    presses: int = 0
    rotation: Optional[Rotation] = None
    direction: Optional[Direction] = None

    @property
    def display_number(self) -> Optional[int]:
        """Pieces are shown to the player numbered from 1."""
        return None if self.piece is None else self.piece + 1


def rotation_presses(rotation_step: int) -> tuple[int, Rotation]:
    """Fewest presses to bring a piece back to 0; ties go clockwise."""
    clockwise = rotation_step
    counter = ROTATION_STEPS - rotation_step
    if clockwise <= counter:
        return clockwise, Rotation.CLOCKWISE
    return counter, Rotation.COUNTER_CLOCKWISE


def solve_hint(solution: PuzzleSolution, puzzle_step: int, cursor_index: int,
               pieces: Sequence[PieceState]) -> PuzzleHint:
    """Compute the next hint from one snapshot of puzzle state.

    Raises ValueError when the snapshot cannot describe the selected piece.
    """
    if puzzle_step >= len(solution):
        return PuzzleHint(HintKind.COMPLETE, remaining=0)
    if puzzle_step < 0:
        raise ValueError(f"puzzle step {puzzle_step} out of range")

    target = solution.order[puzzle_step]
    remaining = len(solution) - puzzle_step

    if cursor_index == target:
        piece = next((p for p in pieces if p.index == target), None)
        if piece is None:
            raise ValueError(f"piece {target} missing from snapshot")
        step = piece.rotation_step
        if not 0 <= step < ROTATION_STEPS:
            raise ValueError(f"piece {target} has rotation step {step}")
        if step == 0:
            return PuzzleHint(HintKind.COMMIT, remaining, piece=target)
        presses, rotation = rotation_presses(step)
        return PuzzleHint(HintKind.ROTATE, remaining, piece=target,
                          presses=presses, rotation=rotation)

    direction = Direction.RIGHT if target - cursor_index > 0 else Direction.LEFT
    return PuzzleHint(HintKind.SELECT, remaining, piece=target,
                      direction=direction)


def describe_hint(hint: PuzzleHint, strings: Localizer) -> str:
    if hint.kind is HintKind.COMPLETE:
        return strings.get("puzzle.complete")

    parts = [strings.get_plural("puzzle.pieces_remaining", hint.remaining)]
    if hint.kind is HintKind.SELECT:
        parts.append(strings.get("puzzle.select_piece", hint.display_number))
        parts.append(strings.get("puzzle.navigate_right"
                                 if hint.direction is Direction.RIGHT
                                 else "puzzle.navigate_left"))
        return " ".join(parts)

    parts.append(strings.get("puzzle.correct_piece"))
    if hint.kind is HintKind.COMMIT:
        parts.append(strings.get("puzzle.ready_to_commit"))
    else:
        key = ("puzzle.rotate_clockwise" if hint.rotation is Rotation.CLOCKWISE
               else "puzzle.rotate_counter_clockwise")
        parts.append(strings.get_plural(key, hint.presses))
    return " ".join(parts)


class RotationPuzzleMonitor:
    """Announces puzzle start and answers hint / state requests."""

    def __init__(self, pipeline: AnnouncementPipeline,
                 solutions: Optional[dict[int, tuple[int, ...]]] = None):
        self.pipeline = pipeline
        self.strings = pipeline.strings
        self.solutions = solutions
        self._active = EdgeTrigger()

    @staticmethod
    def _puzzle(snapshot: Optional[GameSnapshot]) -> Optional[PuzzleState]:
        if snapshot is None or snapshot.puzzle is None:
            return None
        return snapshot.puzzle if snapshot.puzzle.is_active else None

    def is_active(self, snapshot: Optional[GameSnapshot]) -> bool:
        return self._puzzle(snapshot) is not None

    def update(self, snapshot: GameSnapshot) -> None:
        puzzle = self._puzzle(snapshot)
        transition = self._active.update(puzzle is not None)
        if transition is Transition.ENTERED:
            key = "puzzle.start_final" if puzzle.variant == 1 else "puzzle.start"
            self.pipeline.router.investigation(self.strings.get(key))
        elif transition is Transition.EXITED:
            self.pipeline.router.investigation_cleared()

    def hint_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        puzzle = self._puzzle(snapshot)
        if puzzle is None:
            return self.strings.get("puzzle.not_active"), Category.SYSTEM_MESSAGE
        if not puzzle.pieces:
            return self.strings.get("puzzle.pieces_unreadable"), Category.SYSTEM_MESSAGE
        solution = solution_for(puzzle.variant, self.solutions)
        try:
            hint = solve_hint(solution, puzzle.puzzle_step, puzzle.cursor_index,
                              puzzle.pieces)
        except ValueError as exc:
            log.debug("Puzzle hint unavailable: %s", exc)
            return self.strings.get("puzzle.unreadable"), Category.SYSTEM_MESSAGE
        return describe_hint(hint, self.strings), Category.INVESTIGATION

    def state_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        puzzle = self._puzzle(snapshot)
        if puzzle is None:
            return self.strings.get("puzzle.not_active"), Category.SYSTEM_MESSAGE
        piece = puzzle.piece(puzzle.cursor_index)
        if piece is None:
            return self.strings.get("puzzle.pieces_unreadable"), Category.SYSTEM_MESSAGE
        solution = solution_for(puzzle.variant, self.solutions)
        remaining = max(len(solution) - puzzle.puzzle_step, 0)
        number = piece.index + 1
        if piece.placed:
            head = self.strings.get("puzzle.piece_placed", number)
        else:
            head = self.strings.get("puzzle.piece_rotated", number,
                                    piece.rotation_step * 90)
        tail = self.strings.get_plural("puzzle.pieces_remaining", remaining)
        return f"{head} {tail}", Category.INVESTIGATION

    def announce_hint(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.hint_text(snapshot)
        self.pipeline.respond(text, category)
        return text

    def announce_state(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.state_text(snapshot)
        self.pipeline.respond(text, category)
        return text
