"""Shared fixtures for the announcement pipeline tests."""
from typing import Optional

import pytest

from ace_assist.delivery import InMemorySink
from ace_assist.game_state import LocalFrame, Target
from ace_assist.pipeline import AnnouncementPipeline


class FakeCursor:
    """Cursor whose collision answers are scripted per query."""

    def __init__(self, hits: list[Optional[int]], frame: Optional[LocalFrame] = None):
        self._hits = list(hits)
        self._frame = frame or LocalFrame()
        self.moves: list[tuple[float, float]] = []

    @property
    def frame(self) -> LocalFrame:
        return self._frame

    def move_to(self, x: float, y: float) -> None:
        self.moves.append((x, y))

    def collided_target(self) -> Optional[int]:
        return self._hits.pop(0) if self._hits else None


@pytest.fixture
def sink():
    return InMemorySink()


@pytest.fixture
def pipeline(sink):
    return AnnouncementPipeline(sink)


def delivered(pipeline) -> list[str]:
    """Flush the queue and return everything the sink has received."""
    pipeline.drain.flush()
    return list(pipeline.sink.sent)


def make_targets(n: int, active: bool = True) -> list[Target]:
    return [Target(id=i, x=100.0 * (i + 1), y=50.0, width=40.0, height=40.0,
                   active=active) for i in range(n)]
