"""Writes aggregate records to the shell as JSON lines."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import suppress
from typing import TextIO

from slick.shared.models import AggregateRecord

logger = logging.getLogger(__name__)


def _silence_stream(stream: TextIO) -> None:
    """Point stream's fd at /dev/null so interpreter shutdown does not flush into a closed pipe."""
    try:
        fd = stream.fileno()
        devnull = os.open(os.devnull, os.O_WRONLY)
    except (OSError, ValueError):
        return
    try:
        with suppress(OSError):
            os.dup2(devnull, fd)
    finally:
        os.close(devnull)


class Emitter:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.emitted = 0

    def emit(self, record: AggregateRecord) -> None:
        """Write one line and flush. A consumer that has gone away is not an error."""
        try:
            self.stream.write(record.to_line() + "\n")
            self.stream.flush()
        except BrokenPipeError:
            logger.debug("Consumer closed the pipe; dropping record")
            _silence_stream(self.stream)
            return
        except (OSError, ValueError) as e:
            logger.debug("Cannot emit record: %s", e)
            return
        self.emitted += 1
