"""CLI entry point for the courtroom accessibility bridge."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from ace_assist.announcements import Category
from ace_assist.constants import DRAIN_INTERVAL, POLL_HZ
from ace_assist.delivery import CommandSink, ConsoleSink, DeliverySink
from ace_assist.localization import Localizer, load_strings
from ace_assist.pipeline import AnnouncementPipeline
from ace_assist.poller import StatePoller, handle_command
from ace_assist.replay import ReplaySource, SimulatedCursor

log = logging.getLogger(__name__)


def _text_loop(poller: StatePoller):
    """Read commands from stdin until EOF or ``quit``."""
    while True:
        try:
            user_input = input().strip()
        except EOFError:
            break
        if not user_input:
            continue
        if user_input.lower() in ("quit", "/quit"):
            break
        _run_command(user_input, poller)


def _run_command(cmd: str, poller: StatePoller):
    if handle_command(cmd, poller):
        return
    pipeline = poller.pipeline
    pipeline.respond(pipeline.strings.get("system.unknown_command", cmd),
                     Category.SYSTEM_MESSAGE)


def _run_scripted(source: ReplaySource, poller: StatePoller):
    for cmd in source.take_commands():
        log.info("Scripted command: %s", cmd)
        _run_command(cmd, poller)


def run_batch(source: ReplaySource, poller: StatePoller) -> None:
    """Play the whole recording once, as fast as possible.

    Scripted commands run right after the snapshot they follow, and the queue
    is flushed to the sink after every poll.
    """
    pipeline = poller.pipeline
    _run_scripted(source, poller)
    pipeline.drain.flush()
    for _ in range(len(source)):
        poller.poll_once()
        _run_scripted(source, poller)
        pipeline.drain.flush()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ace-assist",
        description="Courtroom accessibility bridge - screen-reader-friendly "
                    "announcements from game state",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Plays game state snapshots (JSON lines) through the announcement pipeline and
prints what a screen reader would speak.  Type hint, state, next, prev, dump,
help or quit while it runs.  Lines such as {"command": "hint"} in the file run
that command when playback reaches them.

Examples:
  ace-assist session.jsonl
  ace-assist session.jsonl --batch
  ace-assist session.jsonl --speak-cmd "espeak -s 180"
""",
    )
    parser.add_argument("replay",
                        help="JSON-lines file of game state snapshots")
    parser.add_argument("--poll-hz", type=float, default=POLL_HZ,
                        help=f"Snapshot poll rate in Hz (default: {POLL_HZ:g})")
    parser.add_argument("--drain-interval", type=float, default=DRAIN_INTERVAL,
                        help="Seconds between delivered announcements "
                             f"(default: {DRAIN_INTERVAL:g})")
    parser.add_argument("--max-backlog", type=int, default=None,
                        help="Drop the oldest pending announcement beyond this many "
                             "(default: unbounded)")
    parser.add_argument("--strings", default=None, metavar="FILE",
                        help="JSON object of string overrides (translations)")
    parser.add_argument("--speak-cmd", default=None, metavar="CMD",
                        help="Speak through an external TTS command instead of stdout")
    parser.add_argument("--batch", action="store_true",
                        help="Play the recording once without timing, running "
                             "scripted commands from the file, then exit")
    parser.add_argument("--loop", action="store_true",
                        help="Restart the recording when it runs out")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level for stderr diagnostics (default: WARNING)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.poll_hz <= 0:
        parser.error("--poll-hz must be positive")
    if args.max_backlog is not None and args.max_backlog < 1:
        parser.error("--max-backlog must be at least 1")

    table = None
    if args.strings:
        try:
            table = load_strings(args.strings)
        except (OSError, ValueError) as exc:
            parser.error(f"cannot load strings: {exc}")

    try:
        source = ReplaySource.from_file(args.replay, loop=args.loop)
    except (OSError, ValueError) as exc:
        parser.error(f"cannot load replay: {exc}")

    sink: DeliverySink
    if args.speak_cmd:
        try:
            sink = CommandSink(args.speak_cmd)
        except ValueError as exc:
            parser.error(str(exc))
    else:
        sink = ConsoleSink()

    pipeline = AnnouncementPipeline(sink, strings=Localizer(table),
                                    interval=args.drain_interval,
                                    max_backlog=args.max_backlog)
    poller = StatePoller(source, pipeline, poll_hz=args.poll_hz,
                         cursor=SimulatedCursor(source))

    if args.batch:
        run_batch(source, poller)
        return 0

    # Scripted commands run on the poll thread as playback reaches them.
    poller.after_poll = lambda snapshot: _run_scripted(source, poller)
    pipeline.start()
    poller.start()
    try:
        _text_loop(poller)
    except KeyboardInterrupt:
        log.info("Interrupted")
    finally:
        poller.stop()
        pipeline.respond(pipeline.strings.get("system.goodbye"),
                         Category.SYSTEM_MESSAGE)
        pipeline.stop()
        pipeline.drain.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
