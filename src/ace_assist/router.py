"""Classifies announcements by UI context and composes their text."""

from __future__ import annotations

from typing import Optional

from ace_assist.announcements import AnnouncementQueue, Category
from ace_assist.game_state import ChoiceState, MenuState
from ace_assist.localization import Localizer


# Menus announced as "<label>: item (k of n)" when they open.
_POSITIONAL_MENUS = {
    "detective": "menu.detective",
    "move": "menu.move",
}


class AnnouncementRouter:
    """Front door for every producer.

    Each method maps its calling context onto a :class:`Category`, builds the
    text for that context and hands it to :meth:`AnnouncementQueue.enqueue`.
    Returns whatever the queue returned (callers may ignore it).
    """

    def __init__(self, queue: AnnouncementQueue, strings: Localizer):
        self.queue = queue
        self.strings = strings
        self._last_speaker = ""

    def announce(self, text: str, category: Category) -> bool:
        return self.queue.enqueue(text, category)

    # ── Dialogue ──────────────────────────────────────────────────────────

    def dialogue(self, text: str, speaker: str = "") -> bool:
        """Queue a dialogue line, naming the speaker when it has changed."""
        speaker = speaker.strip() if speaker else ""
        if speaker and speaker != self._last_speaker:
            self._last_speaker = speaker
            text = self.strings.get("dialogue.with_speaker", speaker, text)
        return self.queue.enqueue(text, Category.DIALOGUE)

    def dialogue_closed(self) -> None:
        self._last_speaker = ""
        self.queue.reset(Category.DIALOGUE)

    # ── Cursor menus ──────────────────────────────────────────────────────

    def menu_opened(self, menu: MenuState) -> bool:
        kind = menu.kind
        if kind in _POSITIONAL_MENUS:
            text = self.strings.get(_POSITIONAL_MENUS[kind],
                                    self._menu_item(menu, menu.cursor),
                                    menu.cursor + 1, len(menu.items))
        elif kind in ("save", "load"):
            text = self.strings.get(f"menu.{kind}_opened")
        elif kind == "options":
            text = self.strings.get("menu.options", self._menu_item(menu, menu.cursor))
        else:
            text = self._menu_item(menu, menu.cursor)
        return self.queue.enqueue(text, Category.MENU)

    def menu_cursor(self, menu: MenuState) -> bool:
        kind = menu.kind
        if kind in ("save", "load"):
            if menu.cursor < 0:
                return False
            label = menu.item(menu.cursor)
            if label and label.strip():
                text = self.strings.get("menu.slot_with_text", menu.cursor + 1, label)
            else:
                text = self.strings.get("menu.slot", menu.cursor + 1)
        elif kind == "options":
            text = self.strings.get("menu.options", self._menu_item(menu, menu.cursor))
        else:
            text = self._menu_item(menu, menu.cursor)
        return self.queue.enqueue(text, Category.MENU)

    def menu_closed(self) -> None:
        self.queue.reset(Category.MENU)

    def _menu_item(self, menu: MenuState, index: int) -> str:
        label = menu.item(index)
        if label:
            return label
        if menu.kind == "move":
            return self.strings.get("menu.location_fallback", index + 1)
        return self.strings.get("system.unknown")

    # ── Selection plate ───────────────────────────────────────────────────

    def choice_shown(self, choice: ChoiceState) -> bool:
        count = choice.option_count
        if count == 0:
            return False
        current = self._choice_option(choice) or self.strings.get("system.unknown")
        key = "menu.talk" if choice.kind == "talk" else "menu.choice"
        return self.queue.enqueue(self.strings.get(key, count, current),
                                  Category.MENU_CHOICE)

    def choice_cursor(self, choice: ChoiceState) -> bool:
        option = self._choice_option(choice)
        if not option or not option.strip():
            return False
        return self.queue.enqueue(option, Category.MENU_CHOICE)

    def choice_closed(self) -> None:
        self.queue.reset(Category.MENU_CHOICE)

    @staticmethod
    def _choice_option(choice: ChoiceState) -> Optional[str]:
        if 0 <= choice.cursor < len(choice.options):
            return choice.options[choice.cursor]
        return None

    # ── Free text ─────────────────────────────────────────────────────────

    def investigation(self, text: str) -> bool:
        return self.queue.enqueue(text, Category.INVESTIGATION)

    def investigation_cleared(self) -> None:
        self.queue.reset(Category.INVESTIGATION)

    def system(self, text: str) -> bool:
        return self.queue.enqueue(text, Category.SYSTEM_MESSAGE)
