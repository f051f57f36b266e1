"""
Synthetic audio source for demos and tests.

Stands in for a capture device: produces int16 blocks containing a
repeating logarithmic sweep, a kick-like pulse train and low-level noise.
"""

from typing import Iterator

import numpy as np
from scipy import signal as scipy_signal


class DemoSource:
    """
    Endless stream of int16 sample blocks.

    The sweep runs from ``sweep_low`` to ``sweep_high`` over
    ``sweep_seconds`` and then restarts; pulses fire at ``bpm``.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        block_size: int = 1024,
        seed: int | None = None,
        sweep_low: float = 100.0,
        sweep_high: float = 8000.0,
        sweep_seconds: float = 4.0,
        bpm: float = 120.0,
        amplitude: float = 0.5,
    ):
        self.sample_rate = sample_rate
        self.block_size = block_size
        self.rng = np.random.default_rng(seed)
        self.amplitude = amplitude

        self._loop = self._build_loop(sweep_low, sweep_high, sweep_seconds, bpm)
        self._position = 0

    def _build_loop(
        self,
        sweep_low: float,
        sweep_high: float,
        sweep_seconds: float,
        bpm: float,
    ) -> np.ndarray:
        sr = self.sample_rate
        n = int(sr * sweep_seconds)
        t = np.arange(n) / sr

        sweep = scipy_signal.chirp(
            t,
            f0=sweep_low,
            t1=sweep_seconds,
            f1=sweep_high,
            method="logarithmic",
        )

        # Exponentially decaying 60 Hz thump at each beat
        pulses = np.zeros(n)
        samples_per_beat = int(sr * 60 / bpm)
        thump_len = min(int(sr * 0.15), samples_per_beat)
        tt = np.arange(thump_len) / sr
        thump = np.sin(2 * np.pi * 60.0 * tt) * np.exp(-tt * 30.0)
        for beat_start in range(0, n, samples_per_beat):
            end = min(beat_start + thump_len, n)
            pulses[beat_start:end] += thump[:end - beat_start]

        return 0.6 * sweep + 0.8 * pulses

    def read(self) -> np.ndarray:
        """Return the next ``block_size`` samples as int16."""
        idx = (self._position + np.arange(self.block_size)) % len(self._loop)
        self._position = (self._position + self.block_size) % len(self._loop)

        noise = self.rng.standard_normal(self.block_size) * 0.02
        block = np.clip((self._loop[idx] + noise) * self.amplitude, -1.0, 1.0)
        return (block * 32767).astype(np.int16)

    def blocks(self, count: int) -> Iterator[np.ndarray]:
        """Yield ``count`` consecutive blocks."""
        for _ in range(count):
            yield self.read()
