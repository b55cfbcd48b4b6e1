"""Buffered, minute-rotated writer for tab-separated DCS record files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

log = logging.getLogger(__name__)

WRITE_BUFFER_SIZE = 4 * 1024 * 1024


def _file_timestamp(epoch_seconds: int) -> str:
    """Format a Unix timestamp as YYYYMMDDTHHMMSS in local time."""
    return datetime.fromtimestamp(epoch_seconds).strftime("%Y%m%dT%H%M%S")


class DcsWriter:
    """Writes newline-terminated records into per-minute ``.dcs`` files.

    Lines are collected in a large in-memory buffer and written to disk in
    bulk. The writer is not thread safe; callers serialise access.
    """

    WRITE_BUFFER_SIZE = WRITE_BUFFER_SIZE

    def __init__(self, prefix: str, directory, collector_id: str) -> None:
        self.prefix = prefix
        self.directory = Path(directory)
        self.collector_id = collector_id
        self.directory.mkdir(parents=True, exist_ok=True)

        self._buffer = bytearray()
        self._file = None
        self._current_path: Path | None = None
        self._line_count = 0
        self._cur_min = 0

    @property
    def current_path(self) -> Path | None:
        """Path of the file currently open, or None before the first rotation."""
        return self._current_path

    @property
    def line_count(self) -> int:
        """Number of lines written since the last rotation."""
        return self._line_count

    def write_line(self, line) -> None:
        """Append one record line; a trailing newline is added."""
        data = line.encode("utf-8") if isinstance(line, str) else bytes(line)
        total = len(data) + 1

        if len(self._buffer) + total > self.WRITE_BUFFER_SIZE:
            self.flush()

        if total > self.WRITE_BUFFER_SIZE:
            # A single oversized line bypasses the buffer.
            if self._file is not None:
                self._file.write(data + b"\n")
        else:
            self._buffer += data
            self._buffer.append(0x0A)

        self._line_count += 1

    def flush(self) -> None:
        """Write buffered lines to the open file, if any."""
        if self._file is not None and self._buffer:
            self._file.write(self._buffer)
            self._buffer.clear()

    def close(self) -> None:
        """Close the current file."""
        if self._file is not None:
            self._file.close()
            self._file = None
            log.info("[DcsWriter] closed: %s (%d lines)",
                     self._current_path, self._line_count)

    def rotate(self, min_round_sec: int) -> None:
        """Switch to the file for the given whole-minute timestamp."""
        if self._cur_min == min_round_sec:
            return
        self.flush()
        self.close()
        self._line_count = 0
        self._open_new_file(min_round_sec)

    def _open_new_file(self, min_round_sec: int) -> None:
        self._cur_min = min_round_sec
        name = f"{self.prefix}_{_file_timestamp(min_round_sec)}{self.collector_id}.dcs"
        self._current_path = self.directory / name
        self._file = open(self._current_path, "wb", buffering=0)
        log.info("[DcsWriter] opened: %s", self._current_path)

    def __enter__(self) -> "DcsWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()
        self.close()