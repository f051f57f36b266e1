"""Scrolling linear and mel spectrograms of live audio."""

from spectrascope.config import ConfigurationError, Mode, SpectrogramConfig
from spectrascope.pipeline import SpectrogramContext, SpectrogramPipeline

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Mode",
    "SpectrogramConfig",
    "SpectrogramContext",
    "SpectrogramPipeline",
]
