"""Minigame solvers and their monitors."""

from ace_assist.minigames.rotation_puzzle import (
    Direction,
    HintKind,
    PuzzleHint,
    PuzzleSolution,
    Rotation,
    RotationPuzzleMonitor,
    describe_hint,
    rotation_presses,
    solution_for,
    solve_hint,
)
from ace_assist.minigames.target_navigation import (
    NavigationOutcome,
    NavigationResult,
    TargetNavigator,
    VideoTapeMonitor,
)

__all__ = [
    "Direction",
    "HintKind",
    "PuzzleHint",
    "PuzzleSolution",
    "Rotation",
    "RotationPuzzleMonitor",
    "describe_hint",
    "rotation_presses",
    "solution_for",
    "solve_hint",
    "NavigationOutcome",
    "NavigationResult",
    "TargetNavigator",
    "VideoTapeMonitor",
]
