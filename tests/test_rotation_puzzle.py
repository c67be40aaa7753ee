import pytest

from ace_assist.announcements import Category
from ace_assist.game_state import GameSnapshot, PieceState, PuzzleState
from ace_assist.localization import Localizer
from ace_assist.minigames import (
    Direction,
    HintKind,
    PuzzleSolution,
    Rotation,
    RotationPuzzleMonitor,
    describe_hint,
    rotation_presses,
    solution_for,
    solve_hint,
)

from conftest import delivered

EIGHT = PuzzleSolution(8, (4, 3, 5, 0, 7, 2, 1, 6))


def _pieces(rotations=None, placed=()):
    rotations = rotations or {}
    return [PieceState(i, rotations.get(i, 0), i in placed) for i in range(8)]


def _snapshot(step=0, cursor=0, rotations=None, placed=(), proc_id=1, pieces=None):
    if pieces is None:
        pieces = _pieces(rotations, placed)
    return GameSnapshot(puzzle=PuzzleState(proc_id=proc_id, puzzle_step=step,
                                           cursor_index=cursor, pieces=pieces))


@pytest.mark.parametrize("step,presses,rotation", [
    (0, 0, Rotation.CLOCKWISE),
    (1, 1, Rotation.CLOCKWISE),
    (2, 2, Rotation.CLOCKWISE),
    (3, 1, Rotation.COUNTER_CLOCKWISE),
])
def test_rotation_presses_are_minimal(step, presses, rotation):
    assert rotation_presses(step) == (presses, rotation)
    assert presses == min(step, 4 - step)


def test_correct_piece_needing_rotation():
    hint = solve_hint(EIGHT, 0, 4, _pieces({4: 3}))
    assert hint.kind is HintKind.ROTATE
    assert hint.presses == 1
    assert hint.rotation is Rotation.COUNTER_CLOCKWISE
    assert hint.remaining == 8


def test_wrong_piece_points_right():
    hint = solve_hint(EIGHT, 0, 0, _pieces())
    assert hint.kind is HintKind.SELECT
    assert hint.display_number == 5
    assert hint.direction is Direction.RIGHT


def test_wrong_piece_points_left():
    hint = solve_hint(EIGHT, 3, 6, _pieces())
    assert hint.piece == 0
    assert hint.direction is Direction.LEFT


def test_ready_to_commit():
    hint = solve_hint(EIGHT, 1, 3, _pieces())
    assert hint.kind is HintKind.COMMIT
    assert hint.remaining == 7


def test_complete_when_step_past_solution():
    assert solve_hint(EIGHT, 8, 0, _pieces()).kind is HintKind.COMPLETE


def test_hint_is_pure():
    pieces = _pieces({4: 2})
    assert solve_hint(EIGHT, 0, 4, pieces) == solve_hint(EIGHT, 0, 4, pieces)


def test_bad_rotation_step_raises():
    with pytest.raises(ValueError):
        solve_hint(EIGHT, 0, 4, _pieces({4: 7}))


def test_unknown_variant_falls_back_to_eight():
    assert solution_for(3) == EIGHT
    assert solution_for(1).order == (0,)


def test_describe_hint_wording():
    strings = Localizer()
    assert (describe_hint(solve_hint(EIGHT, 0, 4, _pieces({4: 3})), strings)
            == "8 pieces remaining. Correct piece selected. Press Q 1 time to rotate.")
    assert (describe_hint(solve_hint(EIGHT, 0, 4, _pieces({4: 2})), strings)
            == "8 pieces remaining. Correct piece selected. Press R 2 times to rotate.")
    assert (describe_hint(solve_hint(EIGHT, 7, 0, _pieces()), strings)
            == "1 piece remaining. Select piece 7. Press Right to navigate.")
    assert describe_hint(solve_hint(EIGHT, 8, 0, _pieces()), strings) == "Puzzle complete!"


def test_monitor_announces_start_once(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    for _ in range(3):
        monitor.update(_snapshot())
    monitor.update(_snapshot(proc_id=0))
    assert delivered(pipeline) == [pipeline.strings.get("puzzle.start")]


def test_monitor_announces_final_variant(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    monitor.update(_snapshot(pieces=[PieceState(0, 1)]))
    assert delivered(pipeline) == [pipeline.strings.get("puzzle.start_final")]


def test_hint_not_active(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    assert monitor.hint_text(_snapshot(proc_id=0)) == ("Not in vase puzzle",
                                                       Category.SYSTEM_MESSAGE)
    assert monitor.hint_text(None)[0] == "Not in vase puzzle"


def test_hint_with_unreadable_pieces(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    assert monitor.hint_text(_snapshot(pieces=[]))[0] == "Unable to read pieces"
    snapshot = _snapshot(cursor=4, pieces=[PieceState(0)] * 8)
    assert monitor.hint_text(snapshot)[0] == "Unable to read puzzle state"


def test_state_text(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    text, category = monitor.state_text(_snapshot(step=2, cursor=4, rotations={4: 3}))
    assert text == "Piece 5, rotated 270 degrees. 6 pieces remaining."
    assert category is Category.INVESTIGATION
    text, _ = monitor.state_text(_snapshot(step=2, cursor=3, placed=(3,)))
    assert text == "Piece 4 (already placed). 6 pieces remaining."


def test_repeated_hint_requests_are_spoken(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    snapshot = _snapshot(cursor=0)
    monitor.announce_hint(snapshot)
    monitor.announce_hint(snapshot)
    assert delivered(pipeline) == ["8 pieces remaining. Select piece 5. "
                                   "Press Right to navigate."] * 2


def test_reentering_puzzle_repeats_intro(pipeline):
    monitor = RotationPuzzleMonitor(pipeline)
    monitor.update(_snapshot())
    monitor.update(_snapshot(proc_id=0))
    monitor.update(_snapshot())
    assert delivered(pipeline) == [pipeline.strings.get("puzzle.start")] * 2
