"""
Mel-scale filter bank.

Projects a linear-frequency spectrum onto overlapping triangular bands
spaced evenly on the mel scale (HTK formula, 2595 * log10(1 + f/700)).
"""

import librosa
import numpy as np

from spectrascope.config import ConfigurationError


def mel_frequency_indices(
    sample_count: int,
    filter_bank_count: int,
    sample_rate: int,
    min_frequency: float,
    max_frequency: float,
) -> np.ndarray:
    """
    Compute the center bin of every mel filter.

    Mel values are spaced linearly between the mel equivalents of
    ``min_frequency`` and ``max_frequency``, converted back to hertz and
    scaled onto the ``sample_count`` transform bins.

    Returns:
        int array of length ``filter_bank_count``, non-decreasing, each
        value in [0, sample_count - 1].
    """
    nyquist = sample_rate / 2

    min_mel = librosa.hz_to_mel(min_frequency, htk=True)
    max_mel = librosa.hz_to_mel(max_frequency, htk=True)

    mels = np.linspace(min_mel, max_mel, filter_bank_count)
    hz = librosa.mel_to_hz(mels, htk=True)

    indices = np.round(hz / nyquist * sample_count).astype(np.int64)
    return np.clip(indices, 0, sample_count - 1)


class MelFilterBank:
    """
    Fixed triangular filter matrix of shape (filter_bank_count, sample_count).

    Row ``i`` rises from 0 at filter ``i-1``'s center to 1 at its own
    center, then falls back to 0 at filter ``i+1``'s center. The first row
    starts at bin 0 and the last row ends at bin ``sample_count - 1``.
    """

    def __init__(
        self,
        sample_count: int = 1024,
        filter_bank_count: int = 40,
        sample_rate: int = 44100,
        min_frequency: float = 20.0,
        max_frequency: float = 20000.0,
    ):
        """
        Build the filter bank.

        Args:
            sample_count: Length of the input spectrum.
            filter_bank_count: Number of mel bands.
            sample_rate: Audio sample rate, used for the Nyquist frequency.
            min_frequency: Lowest band frequency in Hz.
            max_frequency: Highest band frequency in Hz.

        Raises:
            ConfigurationError: For an empty bank or an invalid range.
        """
        nyquist = sample_rate / 2
        if filter_bank_count < 1:
            raise ConfigurationError("filter_bank_count must be at least 1")
        if not 0 <= min_frequency < max_frequency:
            raise ConfigurationError(
                f"Invalid mel range: {min_frequency} - {max_frequency} Hz"
            )
        if max_frequency > nyquist:
            raise ConfigurationError(
                f"max_frequency {max_frequency} Hz exceeds Nyquist ({nyquist} Hz)"
            )

        self.sample_count = sample_count
        self.filter_bank_count = filter_bank_count
        self.sample_rate = sample_rate
        self.min_frequency = min_frequency
        self.max_frequency = max_frequency

        self.indices = mel_frequency_indices(
            sample_count,
            filter_bank_count,
            sample_rate,
            min_frequency,
            max_frequency,
        )
        self.indices.flags.writeable = False

        self.filters = self._build_filters()
        self.filters.flags.writeable = False

    def _build_filters(self) -> np.ndarray:
        n = self.sample_count
        bank = np.zeros((self.filter_bank_count, n), dtype=np.float32)
        last = self.filter_bank_count - 1

        for i, center in enumerate(self.indices):
            start = self.indices[i - 1] if i > 0 else 0
            end = self.indices[i + 1] if i < last else n - 1

            # Attack then decay; the decay overwrites the shared center bin.
            bank[i, start:center + 1] = np.linspace(0.0, 1.0, center - start + 1)
            bank[i, center:end + 1] = np.linspace(1.0, 0.0, end - center + 1)

        return bank

    @property
    def center_frequencies(self) -> np.ndarray:
        """Center frequency of every filter in Hz."""
        nyquist = self.sample_rate / 2
        return self.indices * nyquist / self.sample_count

    def apply(self, spectrum) -> np.ndarray:
        """
        Project a linear spectrum onto the mel bands.

        Args:
            spectrum: ``sample_count`` values.

        Returns:
            float32 array of ``filter_bank_count`` weighted sums.
        """
        spectrum = np.asarray(spectrum, dtype=np.float32)
        if spectrum.shape != (self.sample_count,):
            raise ValueError(
                f"Expected a spectrum of {self.sample_count} values, got shape {spectrum.shape}"
            )
        return self.filters @ spectrum
