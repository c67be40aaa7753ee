"""Timing, geometry, solution tables, and default strings for the bridge."""

from __future__ import annotations


# ─── Timing ──────────────────────────────────────────────────────────────────

# Delay after each delivered announcement before the next one is sent.
DRAIN_INTERVAL = 0.025

# Re-check delay when nothing is pending (one scheduling tick).
IDLE_INTERVAL = 0.005

POLL_HZ = 30.0


# ─── Video tape geometry ─────────────────────────────────────────────────────

# The cursor's touch rect sits at (-30, 30) from its origin, so the origin
# has to be pushed the other way to put the touch point on a target centre.
CURSOR_HIT_OFFSET: tuple[float, float] = (30.0, -30.0)

# Collision index reported when the cursor is over no target.
NO_TARGET = 4


# ─── Rotation puzzle ─────────────────────────────────────────────────────────

ROTATION_STEPS = 4

# Piece order per variant (keyed by piece count).  Every step needs the piece
# back at rotation 0.
PUZZLE_SOLUTIONS: dict[int, tuple[int, ...]] = {
    8: (4, 3, 5, 0, 7, 2, 1, 6),
    1: (0,),
}

DEFAULT_PUZZLE_VARIANT = 8


# ─── Investigation ───────────────────────────────────────────────────────────

# Cursor sprite ids; any other sprite is off every hotspot.
INSPECT_CURSOR_HOTSPOT = 1
INSPECT_CURSOR_EXAMINED = 3


# ─── Default English strings ─────────────────────────────────────────────────

STRINGS: dict[str, str] = {
    # Generic
    "system.unknown": "Unknown",
    "system.no_hint": "No puzzle, examination or music player is active.",
    "system.no_state": "No game state available yet.",
    "system.error": "Unable to read game state",
    "system.dumped": "State dumped to {0}.",
    "system.goodbye": "Goodbye.",
    "system.unknown_command": "Unknown command: {0}. Type help for a list.",
    "system.help_header": "Available commands:",
    "system.help_line": "  {0} - {1}",

    # Dialogue
    "dialogue.with_speaker": "{0}: {1}",

    # Menus
    "menu.detective": "Menu: {0} ({1} of {2})",
    "menu.move": "Move: {0} ({1} of {2})",
    "menu.location_fallback": "Location {0}",
    "menu.save_opened": "Save menu opened",
    "menu.load_opened": "Load menu opened",
    "menu.slot": "Slot {0}",
    "menu.slot_with_text": "Slot {0}: {1}",
    "menu.options": "Options: {0}",
    "menu.choice": "Choice menu: {0} options. {1}",
    "menu.talk": "Talk menu: {0} options. {1}",

    # Investigation
    "investigation.start": "Investigation. Move the cursor to find points of interest.",
    "investigation.hotspot": "Point of interest",
    "investigation.examined": "Already examined",
    "luminol.hit_more_needed.one": "Hit! {0} more spray needed.",
    "luminol.hit_more_needed.other": "Hit! {0} more sprays needed.",
    "luminol.blood_found": "Bloodstain found!",

    # Rotation (vase) puzzle
    "puzzle.start": "Vase puzzle. Use Left/Right to select pieces, Q/R to rotate, "
                    "E to combine. Ask for a hint at any time.",
    "puzzle.start_final": "Vase puzzle, final piece. Use Q/R to rotate, E to combine. "
                          "Ask for a hint at any time.",
    "puzzle.not_active": "Not in vase puzzle",
    "puzzle.unreadable": "Unable to read puzzle state",
    "puzzle.pieces_unreadable": "Unable to read pieces",
    "puzzle.complete": "Puzzle complete!",
    "puzzle.pieces_remaining.one": "{0} piece remaining.",
    "puzzle.pieces_remaining.other": "{0} pieces remaining.",
    "puzzle.correct_piece": "Correct piece selected.",
    "puzzle.ready_to_commit": "Rotation correct. Press E to combine.",
    "puzzle.rotate_clockwise.one": "Press R {0} time to rotate.",
    "puzzle.rotate_clockwise.other": "Press R {0} times to rotate.",
    "puzzle.rotate_counter_clockwise.one": "Press Q {0} time to rotate.",
    "puzzle.rotate_counter_clockwise.other": "Press Q {0} times to rotate.",
    "puzzle.select_piece": "Select piece {0}.",
    "puzzle.navigate_right": "Press Right to navigate.",
    "puzzle.navigate_left": "Press Left to navigate.",
    "puzzle.piece_rotated": "Piece {0}, rotated {1} degrees.",
    "puzzle.piece_placed": "Piece {0} (already placed).",

    # Video tape examination
    "tape.start": "Video tape examination. Backspace to play/pause, Enter to fast "
                  "forward, J to rewind, E to present. Ask for a hint at any time.",
    "tape.not_active": "Not in video tape mode",
    "tape.playing": "Playing",
    "tape.paused": "Paused",
    "tape.paused_at": "Paused at frame {0}",
    "tape.paused_at_targets.one": "Paused at frame {1}, {0} target",
    "tape.paused_at_targets.other": "Paused at frame {1}, {0} targets",
    "tape.target_appeared": "Target available! Pause with Backspace.",
    "tape.state": "{0}, frame {1}. {2}.",
    "tape.targets_available.one": "{0} target available",
    "tape.targets_available.other": "{0} targets available",
    "tape.no_targets": "No targets",
    "tape.cursor_on_target": "{0}, cursor on target {1}",
    "tape.pause_first": "Pause the video first with Backspace",
    "tape.no_targets_here": "No targets available at this frame",
    "tape.cursor_unavailable": "Unable to move the cursor",
    "tape.on_target": "Target {0} of {1}. Press E to present.",
    "tape.needs_adjustment": "Target {0} of {1}. Cursor positioned but may need "
                             "adjustment. Use arrow keys to fine-tune, then E to present.",
    "tape.hint.0": "First viewing: Find Goodman's locker lit up (open). Pause when you "
                   "hear target available, select the target, then E to present. "
                   "Current frame: {0}.",
    "tape.hint.1": "Second viewing: Something falls from the locker. A wrong target "
                   "appears around frame 460. The correct falling object is around "
                   "frame 490. Fast forward with Enter past 460, pause with Backspace "
                   "around 490, cycle through targets until you find the falling "
                   "object, then E to present. Current frame: {0}.",
    "tape.hint.2": "Third viewing: The correct target is around frame 1360. Fast "
                   "forward with Enter, pause with Backspace around 1360, select the "
                   "target, then E to present. Current frame: {0}.",
    "tape.hint.3": "Fourth viewing: The correct target is around frame 900. Fast "
                   "forward with Enter, pause with Backspace around 900, select the "
                   "target, then E to present. Current frame: {0}.",
    "tape.hint.default": "Pause when you hear target available, select the target, "
                         "then E to present. Current frame: {0}.",

    # Gallery music player
    "orchestra.player": "Music player",
    "orchestra.album": "Music player: {0}",
    "orchestra.track": "Track {0}: {1}",
    "orchestra.playing": "Playing",
    "orchestra.stopped": "Stopped",
    "orchestra.mode": "Mode: {0}",
    "orchestra.not_active": "Not in music player",
    "orchestra.help": "Music player controls: Up and Down select tracks. Left and "
                      "Right jump by four tracks. Z and X change albums. J and N "
                      "cycle play modes. Tab skips to next track, Q to previous. "
                      "Enter plays or stops. Type state to hear the current track. "
                      "Backspace exits.",
}
