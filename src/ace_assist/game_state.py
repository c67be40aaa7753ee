"""Read-only game state snapshots and the collaborator interfaces behind them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol


@dataclass
class DialogueState:
    """The message board: its line fragments and the current speaker."""
    open: bool = False
    lines: list[str] = field(default_factory=list)
    speaker: str = ""
    ready: bool = True      # "continue" arrow shown; text fully laid out


@dataclass
class MenuState:
    """A cursor menu: detective, move, save, load, or options."""
    kind: str
    items: list[str] = field(default_factory=list)
    cursor: int = 0

    def item(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


@dataclass
class ChoiceState:
    """The selection plate used for answers and talk topics."""
    kind: str = "choice"    # "choice" or "talk"
    options: list[str] = field(default_factory=list)
    cursor: int = 0

    @property
    def option_count(self) -> int:
        """Number of leading non-blank options (the plate keeps stale slots)."""
        count = 0
        for opt in self.options:
            if not opt or not opt.strip():
                break
            count += 1
        return count


@dataclass
class InspectState:
    active: bool = False
    cursor_sprite: int = 0


@dataclass
class Bloodstain:
    id: int
    state: str = "undiscovered"     # "undiscovered", "discovery", "discovered"
    remaining: int = 0              # sprays still needed


@dataclass
class LuminolState:
    stains: list[Bloodstain] = field(default_factory=list)


@dataclass
class PieceState:
    index: int
    rotation_step: int = 0
    placed: bool = False


@dataclass
class PuzzleState:
    """Vase puzzle internals.  ``proc_id`` 0 means the puzzle is not running."""
    proc_id: int = 0
    puzzle_step: int = 0
    cursor_index: int = 0
    pieces: list[PieceState] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.proc_id != 0

    @property
    def variant(self) -> int:
        return len(self.pieces)

    def piece(self, index: int) -> Optional[PieceState]:
        for p in self.pieces:
            if p.index == index:
                return p
        return None


@dataclass
class Target:
    """A collision rect on the video tape, centred on (x, y) in world space."""
    id: int
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    active: bool = True

    def contains(self, x: float, y: float) -> bool:
        return (abs(x - self.x) <= self.width / 2
                and abs(y - self.y) <= self.height / 2)


@dataclass
class TapeState:
    """Video tape examination: playback state and the frame's targets."""
    active: bool = False
    playing: bool = False
    frame: int = 0
    examination: int = 0
    targets: list[Target] = field(default_factory=list)
    cursor_target: Optional[int] = None

    @property
    def active_targets(self) -> list[Target]:
        return [t for t in self.targets if t.active]


@dataclass
class OrchestraState:
    """Gallery music player.  ``playing`` is None when the player can't be read."""
    active: bool = False
    album: str = ""
    track: int = -1         # 0-based; negative when nothing is selected
    title: str = ""
    playing: Optional[bool] = None
    mode: str = ""


@dataclass
class GameSnapshot:
    """Everything observed in one poll.  A ``None`` section is not constructed."""
    dialogue: Optional[DialogueState] = None
    menu: Optional[MenuState] = None
    choice: Optional[ChoiceState] = None
    inspect: Optional[InspectState] = None
    luminol: Optional[LuminolState] = None
    puzzle: Optional[PuzzleState] = None
    tape: Optional[TapeState] = None
    orchestra: Optional[OrchestraState] = None
    tick: int = 0


@dataclass(frozen=True)
class LocalFrame:
    """Axis-aligned transform from world space into a parent's local space."""
    origin_x: float = 0.0
    origin_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    def to_local(self, x: float, y: float) -> tuple[float, float]:
        return ((x - self.origin_x) / self.scale_x,
                (y - self.origin_y) / self.scale_y)

    def to_world(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.scale_x + self.origin_x,
                y * self.scale_y + self.origin_y)


class GameStateSource(Protocol):
    """Produces one snapshot per poll.  May raise while the game is loading."""

    def read(self) -> GameSnapshot: ...


class CursorControl(Protocol):
    """The single write capability: placing the video tape cursor."""

    @property
    def frame(self) -> LocalFrame: ...

    def move_to(self, x: float, y: float) -> None: ...

    def collided_target(self) -> Optional[int]: ...
