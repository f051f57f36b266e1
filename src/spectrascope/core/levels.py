"""
Decibel conversion with gain.
"""

import numpy as np

# Values are floored here before the logarithm so silence stays finite.
LEVEL_FLOOR = 1e-10

_DB_FACTORS = {
    "amplitude": 20.0,
    "power": 10.0,
}


def to_decibels(
    values,
    zero_reference: float,
    mode: str = "amplitude",
    floor: float = LEVEL_FLOOR,
) -> np.ndarray:
    """
    Convert magnitudes or powers to decibels relative to ``zero_reference``.

    Args:
        values: Non-negative input values.
        zero_reference: Value mapped to 0 dB.
        mode: "amplitude" (20 * log10) or "power" (10 * log10).
        floor: Minimum value substituted before the logarithm.

    Returns:
        float32 array of decibel levels.
    """
    if zero_reference <= 0:
        raise ValueError(f"zero_reference must be positive, got {zero_reference}")
    try:
        factor = _DB_FACTORS[mode]
    except KeyError:
        raise ValueError(f"Unknown level mode: {mode}") from None

    values = np.maximum(np.asarray(values, dtype=np.float64), floor)
    return (factor * np.log10(values / zero_reference)).astype(np.float32)


class LevelScaler:
    """Decibel conversion followed by a gain multiplier."""

    def __init__(self, gain: float = 0.025, zero_reference: float = 1000.0):
        self.gain = gain
        self.zero_reference = zero_reference

    @property
    def gain(self) -> float:
        return self._gain

    @gain.setter
    def gain(self, value: float):
        if value <= 0:
            raise ValueError(f"gain must be positive, got {value}")
        self._gain = float(value)

    @property
    def zero_reference(self) -> float:
        return self._zero_reference

    @zero_reference.setter
    def zero_reference(self, value: float):
        if value <= 0:
            raise ValueError(f"zero_reference must be positive, got {value}")
        self._zero_reference = float(value)

    def scale(self, values, mode: str = "amplitude") -> np.ndarray:
        """Return ``gain * to_decibels(values)``."""
        db = to_decibels(values, self._zero_reference, mode=mode)
        return db * np.float32(self._gain)
