"""
Fixed-capacity scrolling history of processed frames.
"""

import numpy as np


class ScrollingSpectrogram:
    """
    Ring of the most recent ``buffer_count`` frames.

    Storage is preallocated once; ``append`` overwrites the oldest row in
    place and advances a write cursor. ``snapshot`` returns the rows in
    time order, oldest first. Rows that have never been written hold
    zeros and sort before every written row.
    """

    def __init__(self, buffer_count: int = 768, frame_width: int = 1024):
        if buffer_count < 1 or frame_width < 1:
            raise ValueError("buffer_count and frame_width must be positive")
        self.buffer_count = buffer_count
        self.frame_width = frame_width
        self._rows = np.zeros((buffer_count, frame_width), dtype=np.float32)
        self._cursor = 0  # Next row to write; also the oldest row
        self.frames_appended = 0

    @property
    def size(self) -> int:
        """Total element count, always ``buffer_count * frame_width``."""
        return self._rows.size

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows.shape

    @property
    def is_empty(self) -> bool:
        return self.frames_appended == 0

    def append(self, frame):
        """
        Append the newest frame, evicting the oldest once full.

        Args:
            frame: ``frame_width`` values.
        """
        frame = np.asarray(frame, dtype=np.float32)
        if frame.shape != (self.frame_width,):
            raise ValueError(
                f"Expected a frame of {self.frame_width} values, got shape {frame.shape}"
            )
        self._rows[self._cursor] = frame
        self._cursor = (self._cursor + 1) % self.buffer_count
        self.frames_appended += 1

    def snapshot(self) -> np.ndarray:
        """
        Copy of the buffer as (buffer_count, frame_width), row 0 oldest.
        """
        if self._cursor == 0:
            return self._rows.copy()
        return np.concatenate((self._rows[self._cursor:], self._rows[:self._cursor]))

    def clear(self):
        self._rows.fill(0.0)
        self._cursor = 0
        self.frames_appended = 0
