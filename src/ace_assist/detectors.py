"""Edge and change detection over repeatedly polled values."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class Transition(Enum):
    NONE = auto()
    ENTERED = auto()
    EXITED = auto()


class EdgeTrigger:
    """Tracks an active/inactive flag across polls.

    ``on_enter`` fires on the first poll where the flag goes False -> True and
    ``on_exit`` on True -> False.
    """

    def __init__(self, on_enter: Optional[Callable[[], None]] = None,
                 on_exit: Optional[Callable[[], None]] = None):
        self.on_enter = on_enter
        self.on_exit = on_exit
        self.was_active = False

    def update(self, active: bool) -> Transition:
        active = bool(active)
        prev = self.was_active
        self.was_active = active
        if active and not prev:
            if self.on_enter:
                self.on_enter()
            return Transition.ENTERED
        if prev and not active:
            if self.on_exit:
                self.on_exit()
            return Transition.EXITED
        return Transition.NONE

    def reset(self) -> None:
        self.was_active = False


class ValueChange(Generic[T]):
    """Reports when a polled value differs from the previous poll's value.

    The new value is stored straight away, so flickering back to an older
    value counts as another change.
    """

    def __init__(self, initial: Optional[T] = None):
        self.initial = initial
        self.last: Optional[T] = initial

    def changed(self, value: T) -> bool:
        if value == self.last:
            return False
        self.last = value
        return True

    def reset(self, value: Optional[T] = None) -> None:
        self.last = self.initial if value is None else value


def combine_fragments(fragments: Iterable[Optional[str]]) -> str:
    """Join the non-blank fragments with single spaces."""
    return " ".join(f for f in fragments if f and f.strip())


class TextCombiner:
    """Dialogue text detector.

    Each poll hands over the box's line fragments.  New text is reported only
    when the combined text differs from what was last *announced*, because the
    box is polled many times while its content is still being assembled.
    """

    def __init__(self) -> None:
        self.last_announced = ""

    def poll(self, fragments: Iterable[Optional[str]]) -> Optional[str]:
        text = combine_fragments(fragments)
        if not text or text == self.last_announced:
            return None
        self.last_announced = text
        return text

    def reset(self) -> None:
        self.last_announced = ""
