"""
Frame slicing for a continuous sample stream.

Accumulates blocks of any length and emits fixed-size frames that
overlap by ``sample_count - hop_count`` samples.
"""

import numpy as np


class FrameBuffer:
    """
    Accumulates raw samples and slices overlapping frames.

    Each emitted frame holds ``sample_count`` samples; consecutive frames
    start ``hop_count`` samples apart.
    """

    def __init__(self, sample_count: int = 1024, hop_count: int = 512):
        """
        Initialize the buffer.

        Args:
            sample_count: Samples per emitted frame.
            hop_count: Samples discarded after each frame.
        """
        if not 0 < hop_count < sample_count:
            raise ValueError(
                f"hop_count must be in (0, {sample_count}), got {hop_count}"
            )
        self.sample_count = sample_count
        self.hop_count = hop_count
        self._store = np.zeros(0, dtype=np.int16)

    @property
    def pending(self) -> int:
        """Number of samples carried over to the next push."""
        return len(self._store)

    def push(self, block) -> list[np.ndarray]:
        """
        Append a block of samples and return every complete frame.

        Args:
            block: Sequence of signed 16-bit samples, any length.

        Returns:
            List of frames, oldest first. Empty when not enough samples
            have accumulated yet.
        """
        block = np.asarray(block, dtype=np.int16).ravel()
        if block.size:
            self._store = np.concatenate((self._store, block))

        frames = []
        start = 0
        while len(self._store) - start >= self.sample_count:
            frame = self._store[start:start + self.sample_count].copy()
            frame.flags.writeable = False
            frames.append(frame)
            start += self.hop_count

        if start:
            self._store = self._store[start:].copy()

        return frames

    def clear(self):
        """Drop any carried-over samples."""
        self._store = np.zeros(0, dtype=np.int16)
