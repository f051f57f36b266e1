"""
Windowed DCT magnitude spectrum for a single frame.

A real-valued DCT-II is used instead of a complex FFT: the visualization
only needs per-bin magnitude, so sign and phase are discarded.
"""

import numpy as np
from scipy import fft as scipy_fft
from scipy.signal import windows

from spectrascope.config import ConfigurationError

# Transform lengths must be f * 2**n with these factors and n >= 4.
_SUPPORTED_FACTORS = (1, 3, 5, 15)
_MIN_POWER = 4


def is_supported_length(count: int) -> bool:
    """Return True if ``count`` is a supported transform length."""
    if count < 1:
        return False
    for factor in _SUPPORTED_FACTORS:
        if count % factor:
            continue
        rest = count // factor
        if rest >= 2 ** _MIN_POWER and rest & (rest - 1) == 0:
            return True
    return False


def hann_window(count: int) -> np.ndarray:
    """Symmetric, denormalized Hann window: 0.5 * (1 - cos(2*pi*i / (N-1)))."""
    win = windows.hann(count, sym=True).astype(np.float32)
    win.flags.writeable = False
    return win


class SpectralTransform:
    """
    Converts a frame of int16 samples into a DCT-II magnitude spectrum.

    The window is computed once at construction and reused for every frame.
    """

    def __init__(self, sample_count: int = 1024):
        """
        Initialize the transform.

        Args:
            sample_count: Frame length. Must be f * 2**n with f in
                (1, 3, 5, 15) and n >= 4.

        Raises:
            ConfigurationError: If the length is not supported.
        """
        if not is_supported_length(sample_count):
            raise ConfigurationError(
                f"Unsupported transform length {sample_count}: "
                "expected f * 2**n with f in (1, 3, 5, 15) and n >= 4"
            )
        self.sample_count = sample_count
        self.window = hann_window(sample_count)

    def transform(self, frame) -> np.ndarray:
        """
        Compute the magnitude spectrum of one frame.

        Args:
            frame: ``sample_count`` signed 16-bit samples.

        Returns:
            float32 array of ``sample_count`` non-negative magnitudes,
            index 0 is DC.
        """
        samples = np.asarray(frame, dtype=np.float32)
        if samples.shape != (self.sample_count,):
            raise ValueError(
                f"Expected a frame of {self.sample_count} samples, got shape {samples.shape}"
            )

        windowed = samples * self.window

        # scipy's unnormalized DCT-II carries a factor of 2 over the plain sum
        coefficients = scipy_fft.dct(windowed, type=2) * 0.5

        return np.abs(coefficients).astype(np.float32)

    def bin_frequency(self, index: int | np.ndarray, sample_rate: int) -> float | np.ndarray:
        """Center frequency in Hz of a transform bin."""
        nyquist = sample_rate / 2
        return np.asarray(index) * nyquist / self.sample_count

    def frequency_bin(self, frequency: float, sample_rate: int) -> int:
        """Nearest transform bin for a frequency in Hz."""
        nyquist = sample_rate / 2
        index = int(round(frequency / nyquist * self.sample_count))
        return int(np.clip(index, 0, self.sample_count - 1))
