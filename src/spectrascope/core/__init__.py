"""Core spectrogram computation stages."""

from spectrascope.core.framer import FrameBuffer
from spectrascope.core.levels import LevelScaler
from spectrascope.core.mel import MelFilterBank
from spectrascope.core.scroller import ScrollingSpectrogram
from spectrascope.core.transform import SpectralTransform

__all__ = [
    "FrameBuffer",
    "LevelScaler",
    "MelFilterBank",
    "ScrollingSpectrogram",
    "SpectralTransform",
]
