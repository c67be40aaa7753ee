"""Gallery music player: current track and controls on request."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ace_assist.announcements import Category
from ace_assist.game_state import GameSnapshot, OrchestraState

if TYPE_CHECKING:
    from ace_assist.pipeline import AnnouncementPipeline

log = logging.getLogger(__name__)


class OrchestraMonitor:
    """Answers state and help requests while the music player is open."""

    def __init__(self, pipeline: AnnouncementPipeline):
        self.pipeline = pipeline
        self.strings = pipeline.strings

    @staticmethod
    def _player(snapshot: Optional[GameSnapshot]) -> Optional[OrchestraState]:
        if snapshot is None or snapshot.orchestra is None:
            return None
        return snapshot.orchestra if snapshot.orchestra.active else None

    def is_active(self, snapshot: Optional[GameSnapshot]) -> bool:
        return self._player(snapshot) is not None

    def state_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        """Album, track, play state and mode, or just the name if unreadable."""
        player = self._player(snapshot)
        if player is None:
            return self.strings.get("orchestra.not_active"), Category.SYSTEM_MESSAGE
        if player.playing is None:
            log.debug("Music player state unreadable; announcing name only")
            return self.strings.get("orchestra.player"), Category.MENU

        album = (player.album or "").strip()
        if album:
            parts = [self.strings.get("orchestra.album", album)]
        else:
            parts = [self.strings.get("orchestra.player")]
        title = (player.title or "").strip()
        if title and player.track >= 0:
            parts.append(self.strings.get("orchestra.track", player.track + 1, title))
        parts.append(self.strings.get("orchestra.playing" if player.playing
                                      else "orchestra.stopped"))
        mode = (player.mode or "").strip()
        if mode:
            parts.append(self.strings.get("orchestra.mode", mode))
        return ". ".join(parts), Category.MENU

    def hint_text(self, snapshot: Optional[GameSnapshot]) -> tuple[str, Category]:
        if self._player(snapshot) is None:
            return self.strings.get("orchestra.not_active"), Category.SYSTEM_MESSAGE
        return self.strings.get("orchestra.help"), Category.MENU

    def announce_state(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.state_text(snapshot)
        self.pipeline.respond(text, category)
        return text

    def announce_hint(self, snapshot: Optional[GameSnapshot]) -> str:
        text, category = self.hint_text(snapshot)
        self.pipeline.respond(text, category)
        return text
