"""
Session configuration for the spectrogram pipeline.

Holds the constants that are fixed for a session (frame size, history
length, overlap, mel resolution, color quantization) together with the
runtime controls that may change between frames (mode, gain, zero reference).
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Mapping


# Slider ranges exposed by the original controls.
GAIN_RANGE = (0.01, 0.04)
ZERO_REFERENCE_RANGE = (10.0, 2500.0)


class ConfigurationError(ValueError):
    """Raised when the pipeline cannot be built from the given settings."""


class Mode(str, Enum):
    """Frequency axis used for the scrolling image."""

    LINEAR = "linear"
    MEL = "mel"


@dataclass
class SpectrogramConfig:
    """Configuration for a spectrogram session."""

    # Session constants
    sample_count: int = 1024  # Samples per frame (image height)
    buffer_count: int = 768  # Frames kept on screen (image width)
    hop_count: int = 512  # Samples advanced between frames
    filter_bank_count: int = 40  # Mel bands
    entries_per_channel: int = 32  # Color table quantization
    sample_rate: int = 44100
    min_frequency: float = 20.0
    max_frequency: float = 20000.0
    output_dtype: str = "float32"  # "float32" or "uint8"

    # Runtime controls
    mode: Mode = Mode.LINEAR
    gain: float = 0.025
    zero_reference: float = 1000.0

    def __post_init__(self):
        try:
            self.mode = Mode(self.mode)
        except ValueError:
            raise ConfigurationError(f"Unknown mode: {self.mode}") from None

        for name in ("sample_count", "buffer_count", "hop_count", "filter_bank_count",
                     "entries_per_channel", "sample_rate"):
            setattr(self, name, _as_count(name, getattr(self, name)))

        for name in ("sample_count", "buffer_count", "hop_count", "filter_bank_count"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

        # Frames must overlap
        if self.hop_count >= self.sample_count:
            raise ConfigurationError(
                f"hop_count ({self.hop_count}) must be less than sample_count ({self.sample_count})"
            )
        if self.entries_per_channel < 2:
            raise ConfigurationError("entries_per_channel must be at least 2")
        if self.sample_rate <= 0:
            raise ConfigurationError("sample_rate must be positive")
        if self.output_dtype not in ("float32", "uint8"):
            raise ConfigurationError(f"Unsupported output_dtype: {self.output_dtype}")
        if self.gain <= 0 or self.zero_reference <= 0:
            raise ConfigurationError("gain and zero_reference must be positive")

    @property
    def nyquist_frequency(self) -> float:
        """The highest frequency the session can represent."""
        return self.sample_rate / 2

    def frame_width(self, mode: Mode | None = None) -> int:
        """Columns per frame for the given mode (defaults to current mode)."""
        mode = Mode(mode or self.mode)
        if mode is Mode.MEL:
            return self.filter_bank_count
        return self.sample_count

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpectrogramConfig":
        """
        Build a config from a mapping.

        Keys may be snake_case or camelCase; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name == "zero_ref":
                name = "zero_reference"
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


def _as_count(name: str, value: Any) -> int:
    """Coerce a whole-number setting to int (JSON may hand us 1024.0)."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
    if count != value:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return count


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")
