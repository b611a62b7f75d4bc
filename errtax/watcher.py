"""File watcher: rebuild a taxonomy whenever its source file changes."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable

from .errors import ErrtaxError

logger = logging.getLogger(__name__)


class _Snapshot:
    """Last seen mtime and content of the watched file."""

    def __init__(self) -> None:
        self.mtime = 0.0
        self.content: str | None = None

    def changed(self, filepath: str) -> bool:
        mtime = os.path.getmtime(filepath)
        if mtime == self.mtime:
            return False
        self.mtime = mtime

        with open(filepath, encoding="utf-8") as f:
            content = f.read()
        # touch without edit: mtime moves, content does not
        if content == self.content:
            return False
        self.content = content
        return True


def watch_and_compile(
    filepath: str,
    build: Callable[[str], object],
    *,
    interval: float = 0.5,
) -> None:
    """Poll ``filepath`` and call ``build(filepath)`` after every change.

    Errors raised by ``build`` are printed and watching continues; a
    missing file is reported and polled again. Ctrl+C stops the loop.

    Args:
        filepath: Path to the .errtax / .yaml file.
        build: Rebuild callback, typically a parse + compile step.
        interval: Polling interval in seconds.
    """
    print(f"Watching {filepath} (Ctrl+C to stop)")
    snapshot = _Snapshot()

    while True:
        try:
            if snapshot.changed(filepath):
                logger.debug("Change detected in %s (mtime %s)", filepath, snapshot.mtime)
                print(f"[{time.strftime('%H:%M:%S')}] Rebuilding {filepath}...")
                try:
                    build(filepath)
                except ErrtaxError as e:
                    print(f"Error: {e}")
                else:
                    print("Done.")
                print("Watching for changes... (Ctrl+C to stop)")
            time.sleep(interval)
        except FileNotFoundError:
            print(f"File not found: {filepath}")
            time.sleep(interval)
        except KeyboardInterrupt:
            print("\nStopped watching.")
            return
