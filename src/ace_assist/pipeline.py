"""Wires the queue, router, and drain loop into one owned object."""

from __future__ import annotations

from typing import Optional

from ace_assist.announcements import AnnouncementQueue, Category
from ace_assist.constants import DRAIN_INTERVAL, IDLE_INTERVAL
from ace_assist.delivery import DeliverySink, DrainLoop
from ace_assist.localization import Localizer
from ace_assist.router import AnnouncementRouter


class AnnouncementPipeline:
    """Producers talk to :attr:`router`; the drain loop feeds :attr:`sink`.

    Every monitor gets its dedup and edge state from its own instance, so two
    pipelines never share anything.
    """

    def __init__(self, sink: DeliverySink,
                 strings: Optional[Localizer] = None,
                 interval: float = DRAIN_INTERVAL,
                 idle_interval: float = IDLE_INTERVAL,
                 max_backlog: Optional[int] = None):
        self.strings = strings or Localizer()
        self.queue = AnnouncementQueue(max_backlog=max_backlog)
        self.router = AnnouncementRouter(self.queue, self.strings)
        self.drain = DrainLoop(self.queue, sink, interval=interval,
                               idle_interval=idle_interval)

    @property
    def sink(self) -> DeliverySink:
        return self.drain.sink

    def start(self):
        self.drain.start()

    def stop(self):
        self.drain.stop()

    def respond(self, text: str, category: Category) -> bool:
        """Answer an explicit user request.

        The category is reset first: asking the same question twice should
        repeat the answer rather than be swallowed as a duplicate.
        """
        self.queue.reset(category)
        return self.queue.enqueue(text, category)
