import sys
import threading
import time

import pytest

from ace_assist.announcements import AnnouncementQueue, Category
from ace_assist.delivery import CommandSink, ConsoleSink, DrainLoop, InMemorySink


class FlakySink:
    """Raises on the texts in ``explode`` and rejects those in ``reject``."""

    def __init__(self, explode=(), reject=()):
        self.explode = set(explode)
        self.reject = set(reject)
        self.attempts: list[str] = []

    def send(self, text: str) -> bool:
        self.attempts.append(text)
        if text in self.explode:
            raise OSError("screen reader went away")
        return text not in self.reject


def _queue(*texts):
    q = AnnouncementQueue()
    for t in texts:
        q.enqueue(t, Category.MENU_CHOICE)
    return q


def test_run_once_on_empty_queue_reports_idle():
    loop = DrainLoop(AnnouncementQueue(), InMemorySink())
    assert loop.run_once() is False


def test_failures_do_not_break_ordering():
    sink = FlakySink(explode={"two"}, reject={"three"})
    loop = DrainLoop(_queue("one", "two", "three", "four"), sink)
    assert loop.flush() == 4
    assert sink.attempts == ["one", "two", "three", "four"]
    assert loop.delivered == 2
    assert loop.failed == 2


def test_failed_item_is_not_retried():
    sink = FlakySink(explode={"boom"})
    q = _queue("boom")
    loop = DrainLoop(q, sink)
    loop.run_once()
    assert loop.run_once() is False
    assert sink.attempts == ["boom"]


def test_thread_delivers_and_stops():
    sink = InMemorySink()
    q = _queue("a", "b", "c")
    loop = DrainLoop(q, sink, interval=0.001, idle_interval=0.001)
    loop.start()
    try:
        deadline = time.monotonic() + 2.0
        while len(sink.sent) < 3 and time.monotonic() < deadline:
            time.sleep(0.005)
    finally:
        loop.stop()
    assert sink.sent == ["a", "b", "c"]
    assert not loop.running


def test_stop_cuts_a_long_wait_short():
    loop = DrainLoop(_queue("only"), InMemorySink(), interval=30.0)
    loop.start()
    time.sleep(0.05)
    started = time.monotonic()
    loop.stop()
    assert time.monotonic() - started < 1.0


def test_console_sink_prints_line(capsys):
    assert ConsoleSink().send("Menu: Examine (1 of 4)")
    assert capsys.readouterr().out == "Menu: Examine (1 of 4)\n"


def test_command_sink_exit_status():
    ok = CommandSink(f'"{sys.executable}" -c "import sys; sys.exit(0)"')
    bad = CommandSink(f'"{sys.executable}" -c "import sys; sys.exit(3)"')
    assert ok.send("hello") is True
    assert bad.send("hello") is False


def test_command_sink_rejects_empty_command():
    with pytest.raises(ValueError):
        CommandSink("   ")


class BlockingSink:
    """Hangs inside send() until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def send(self, text: str) -> bool:
        self.entered.set()
        self.release.wait(5.0)
        return True


def test_hung_consumer_is_not_replaced():
    sink = BlockingSink()
    loop = DrainLoop(_queue("stuck", "next"), sink, interval=0.001,
                     idle_interval=0.001)
    loop.start()
    try:
        assert sink.entered.wait(2.0)
        loop.stop(timeout=0.05)
        assert loop.running
        hung = loop._thread
        loop.start()
        assert loop._thread is hung
        assert [t.name for t in threading.enumerate()].count("announcement-drain") == 1
    finally:
        sink.release.set()
        loop.stop()
    assert not loop.running
