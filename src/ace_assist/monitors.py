"""Per-poll monitors for dialogue, menus, choices, and investigation.

Each monitor owns its own edge/value state and turns the relevant section of
a :class:`GameSnapshot` into router calls.  A missing section means that part
of the UI does not exist right now and is treated as closed.
"""

from __future__ import annotations

from typing import Optional

from ace_assist.constants import INSPECT_CURSOR_EXAMINED, INSPECT_CURSOR_HOTSPOT
from ace_assist.detectors import EdgeTrigger, TextCombiner, Transition, ValueChange
from ace_assist.game_state import GameSnapshot
from ace_assist.router import AnnouncementRouter


class DialogueMonitor:
    """Reads the message board once its text is laid out."""

    def __init__(self, router: AnnouncementRouter):
        self.router = router
        self._open = EdgeTrigger()
        self._text = TextCombiner()

    def update(self, snapshot: GameSnapshot) -> None:
        dialogue = snapshot.dialogue
        is_open = dialogue is not None and dialogue.open
        if self._open.update(is_open) is Transition.EXITED:
            self._text.reset()
            self.router.dialogue_closed()
        if not is_open or not dialogue.ready:
            return
        text = self._text.poll(dialogue.lines)
        if text:
            self.router.dialogue(text, dialogue.speaker)


# Slot menus announce the highlighted slot right after opening.
_SLOT_MENUS = ("save", "load")


class MenuMonitor:
    """Detective, move, save/load, and options menus."""

    def __init__(self, router: AnnouncementRouter):
        self.router = router
        self._open = EdgeTrigger()
        self._kind: ValueChange[str] = ValueChange()
        self._cursor: ValueChange[int] = ValueChange(-1)

    def update(self, snapshot: GameSnapshot) -> None:
        menu = snapshot.menu
        transition = self._open.update(menu is not None)
        if menu is None:
            if transition is Transition.EXITED:
                self._kind.reset()
                self._cursor.reset()
                self.router.menu_closed()
            return

        if self._kind.changed(menu.kind) and transition is not Transition.ENTERED:
            # Switched straight from one menu to another.
            self.router.menu_closed()
            transition = Transition.ENTERED

        if transition is Transition.ENTERED:
            self.router.menu_opened(menu)
            if menu.kind in _SLOT_MENUS:
                self._cursor.reset()
            else:
                self._cursor.reset(menu.cursor)

        if self._cursor.changed(menu.cursor):
            self.router.menu_cursor(menu)


class ChoiceMonitor:
    """The selection plate used for answers and talk topics."""

    def __init__(self, router: AnnouncementRouter):
        self.router = router
        self._open = EdgeTrigger()
        self._shown = False
        self._cursor: ValueChange[int] = ValueChange(-1)

    def update(self, snapshot: GameSnapshot) -> None:
        choice = snapshot.choice
        if self._open.update(choice is not None) is Transition.EXITED:
            self._shown = False
            self._cursor.reset()
            self.router.choice_closed()
        if choice is None:
            return

        if not self._shown:
            # Options may be filled in a few polls after the plate appears.
            if choice.option_count == 0:
                return
            self._shown = True
            self._cursor.reset(choice.cursor)
            self.router.choice_shown(choice)
            return

        if self._cursor.changed(choice.cursor):
            self.router.choice_cursor(choice)


class InvestigationMonitor:
    """Announces investigation mode and hotspots under the cursor."""

    def __init__(self, router: AnnouncementRouter):
        self.router = router
        self.strings = router.strings
        self._active = EdgeTrigger()
        self._sprite: ValueChange[int] = ValueChange(-1)

    def update(self, snapshot: GameSnapshot) -> None:
        inspect = snapshot.inspect
        active = inspect is not None and inspect.active
        transition = self._active.update(active)
        if transition is Transition.ENTERED:
            self._sprite.reset()
            self.router.investigation(self.strings.get("investigation.start"))
        elif transition is Transition.EXITED:
            self._sprite.reset()
        if not active:
            return

        if not self._sprite.changed(inspect.cursor_sprite):
            return
        if inspect.cursor_sprite == INSPECT_CURSOR_HOTSPOT:
            self.router.investigation(self.strings.get("investigation.hotspot"))
        elif inspect.cursor_sprite == INSPECT_CURSOR_EXAMINED:
            self.router.investigation(self.strings.get("investigation.examined"))
        else:
            # Off every hotspot: the next one is news even if it reads the same.
            self.router.investigation_cleared()


class LuminolMonitor:
    """Spray feedback: hits that still need more sprays, and discoveries."""

    def __init__(self, router: AnnouncementRouter):
        self.router = router
        self.strings = router.strings
        self._seen: dict[int, tuple[str, int]] = {}

    def update(self, snapshot: GameSnapshot) -> None:
        luminol = snapshot.luminol
        if luminol is None:
            self._seen.clear()
            return
        for stain in luminol.stains:
            prev: Optional[tuple[str, int]] = self._seen.get(stain.id)
            self._seen[stain.id] = (stain.state, stain.remaining)
            if prev is None or prev == (stain.state, stain.remaining):
                continue
            prev_state, prev_remaining = prev
            if stain.state == "discovery" and prev_state != "discovery":
                self.router.investigation(self.strings.get("luminol.blood_found"))
            elif (stain.state == "undiscovered" and 0 < stain.remaining < prev_remaining):
                self.router.investigation_cleared()
                self.router.investigation(
                    self.strings.get_plural("luminol.hit_more_needed", stain.remaining))
