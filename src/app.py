"""Application entry point for chatpad."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import replace
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console

import settings
from adapters.log_file_tailer import LogFileTailer
from adapters.preview_formatting import format_metadata, render_log_line, render_segment
from adapters.sqlite_storage import SQLiteStorage
from core.classifier import MalformedLogLine
from core.config import FormatterSettings
from core.formatter import format_batch
from core.log_tail import LogTailParser, is_visible
from core.preferences import Preferences

NAME = "CHATPAD"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/chatpad.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _open_preferences() -> Preferences:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    return Preferences(storage, FormatterSettings())


def _pad() -> None:
    _print_banner()
    from frontend.app import PadApp

    PadApp().run()


def _format(args: argparse.Namespace) -> None:
    logger = logging.getLogger(__name__)
    if args.file:
        with open(args.file, "r", encoding="utf-8") as handle:
            raw_text = handle.read()
    else:
        raw_text = sys.stdin.read()

    preferences = _open_preferences()
    formatter_settings = preferences.settings
    if args.ooc is not None:
        formatter_settings = replace(formatter_settings, out_of_character=args.ooc)
    if args.no_em_dash:
        formatter_settings = replace(formatter_settings, em_dash_convert=False)

    segments = format_batch(raw_text, args.prefix, formatter_settings)
    logger.info("Formatted %s segment(s)", len(segments))

    console = Console()
    for index, segment in enumerate(segments):
        if args.plain:
            console.print(segment.text, markup=False, highlight=False)
            continue
        metadata = format_metadata(segment, index, len(segments)).replace("\n", " ")
        console.print(f"[dim]{metadata}[/dim]")
        console.print(render_segment(segment))

    if any(segment.oversized for segment in segments):
        raise SystemExit(1)


def _tail(args: argparse.Namespace) -> None:
    logger = logging.getLogger(__name__)
    path = args.logfile or settings.CHATLOG_PATH
    if not path:
        raise SystemExit("No log file given and log_tail.path is not configured")

    preferences = _open_preferences()
    tailer = LogFileTailer(path)
    parser = LogTailParser(strict=settings.STRICT_LOG_PARSING)
    console = Console()

    logger.info("Tailing %s every %ss", path, settings.POLL_SECONDS)
    try:
        while True:
            chunk = tailer.poll()
            if tailer.truncated:
                parser.reset()
            for line in parser.feed(chunk):
                if is_visible(line, preferences.settings):
                    console.print(render_log_line(line))
            time.sleep(settings.POLL_SECONDS)
    except KeyboardInterrupt:
        logger.info("Stopped tailing %s", path)
    except MalformedLogLine as exc:
        logger.error("Stopped tailing %s: %s", path, exc)
        raise SystemExit(str(exc)) from exc
    finally:
        tailer.close()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="chatpad")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("pad", help="Launch the pad TUI")

    format_parser = subparsers.add_parser("format", help="Split text into chat messages")
    format_parser.add_argument("file", nargs="?", help="Text file to read (stdin when omitted)")
    format_parser.add_argument("--prefix", default=settings.DEFAULT_PREFIX, help="Ambient chat prefix")
    format_parser.add_argument("--ooc", dest="ooc", action="store_true", default=None)
    format_parser.add_argument("--no-ooc", dest="ooc", action="store_false")
    format_parser.add_argument("--no-em-dash", action="store_true", help="Keep \"--\" as typed")
    format_parser.add_argument("--plain", action="store_true", help="Print messages only")

    tail_parser = subparsers.add_parser("tail", help="Follow a chat log and print parsed lines")
    tail_parser.add_argument("logfile", nargs="?", help="Chat log file to follow")

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "format":
        _format(args)
        return
    if args.command == "tail":
        _tail(args)
        return
    _pad()


if __name__ == "__main__":
    main()
