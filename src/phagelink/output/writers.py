"""Line-oriented TSV emitter shared by both pipelines."""

import sys
from typing import Iterable, TextIO


class TableEmitter:
    """
    Write finished table lines to a text stream, in the order given.

    The emitter never sorts or buffers whole tables; each line is written
    as it arrives and the stream is flushed once all lines are out.

    Attributes:
        stream: Destination stream (stdout by default)
        lines_written: Number of lines written so far
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.lines_written = 0

    def emit(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.lines_written += 1

    def emit_all(self, lines: Iterable[str]) -> int:
        """
        Write every line and flush.

        Returns:
            Number of lines written by this call
        """
        count = 0
        for line in lines:
            self.emit(line)
            count += 1
        self.stream.flush()
        return count
