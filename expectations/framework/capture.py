"""
Output capture.

An OutputSink redirects one standard stream into a buffer for the
duration of a single observation. Only one capture may be active at a
time across all sinks; a second capture fails fast instead of
interleaving output.
"""

import io
import logging
import threading
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Iterator

from .errors import CaptureConflictError, ConstructionError

logger = logging.getLogger(__name__)

STREAMS = {
    "stdout": redirect_stdout,
    "stderr": redirect_stderr,
}


class OutputSink:
    """Capturing sink for sys.stdout or sys.stderr."""

    _capture_lock = threading.Lock()

    def __init__(self, stream: str):
        if stream not in STREAMS:
            raise ConstructionError(f"Unknown stream: {stream}. Valid streams: {list(STREAMS)}")
        self.stream = stream

    @contextmanager
    def capture(self) -> Iterator[io.StringIO]:
        """Redirect the stream into a fresh buffer; restored on every exit path."""
        if not OutputSink._capture_lock.acquire(blocking=False):
            raise CaptureConflictError(
                f"Cannot capture {self.stream}: another output capture is already active"
            )
        buffer = io.StringIO()
        logger.debug("Capturing %s", self.stream)
        try:
            with STREAMS[self.stream](buffer):
                yield buffer
        finally:
            OutputSink._capture_lock.release()
            logger.debug("Released %s after %d characters", self.stream, len(buffer.getvalue()))

    @classmethod
    def is_capturing(cls) -> bool:
        return cls._capture_lock.locked()

    def __repr__(self) -> str:
        return f"OutputSink({self.stream!r})"


STDOUT = OutputSink("stdout")
STDERR = OutputSink("stderr")
