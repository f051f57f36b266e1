"""
Main spectrogram pipeline.

Orchestrates the complete flow from int16 sample blocks to an RGB
pixel buffer: framing, windowed DCT, optional mel projection, decibel
scaling, scrolling history and pseudocolor rendering.
"""

import threading
from dataclasses import dataclass

import numpy as np

from spectrascope.config import Mode, SpectrogramConfig
from spectrascope.core.framer import FrameBuffer
from spectrascope.core.levels import LevelScaler
from spectrascope.core.mel import MelFilterBank
from spectrascope.core.scroller import ScrollingSpectrogram
from spectrascope.core.transform import SpectralTransform
from spectrascope.render.colormap import EMPTY_IMAGE, PseudocolorMapper


@dataclass(frozen=True)
class SpectrogramContext:
    """Precomputed, immutable objects shared by every frame."""

    transform: SpectralTransform
    mel_bank: MelFilterBank
    mapper: PseudocolorMapper

    @classmethod
    def build(cls, config: SpectrogramConfig) -> "SpectrogramContext":
        """Build window, filter bank and color table from ``config``."""
        return cls(
            transform=SpectralTransform(config.sample_count),
            mel_bank=MelFilterBank(
                sample_count=config.sample_count,
                filter_bank_count=config.filter_bank_count,
                sample_rate=config.sample_rate,
                min_frequency=config.min_frequency,
                max_frequency=config.max_frequency,
            ),
            mapper=PseudocolorMapper(
                entries_per_channel=config.entries_per_channel,
                dtype=config.output_dtype,
            ),
        )


class SpectrogramPipeline:
    """
    Complete samples-to-image processing pipeline.

    One producer pushes sample blocks; any thread may render. Scroller
    updates, renders and control changes are serialized by a single lock
    so a render never observes a half-appended frame.
    """

    def __init__(
        self,
        config: SpectrogramConfig | None = None,
        context: SpectrogramContext | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Session configuration (defaults if None).
            context: Prebuilt context; built from ``config`` if None.
        """
        self.config = config or SpectrogramConfig()
        self.context = context or SpectrogramContext.build(self.config)

        self.framer = FrameBuffer(self.config.sample_count, self.config.hop_count)
        self.levels = LevelScaler(
            gain=self.config.gain,
            zero_reference=self.config.zero_reference,
        )
        # One history per mode so switching never discards frames.
        self.scrollers = {
            mode: ScrollingSpectrogram(self.config.buffer_count, self.config.frame_width(mode))
            for mode in Mode
        }

        self._mode = self.config.mode
        self._lock = threading.Lock()

    # Runtime controls

    @property
    def mode(self) -> Mode:
        return self._mode

    @mode.setter
    def mode(self, value):
        with self._lock:
            self._mode = Mode(value)

    @property
    def gain(self) -> float:
        return self.levels.gain

    @gain.setter
    def gain(self, value: float):
        with self._lock:
            self.levels.gain = value

    @property
    def zero_reference(self) -> float:
        return self.levels.zero_reference

    @zero_reference.setter
    def zero_reference(self, value: float):
        with self._lock:
            self.levels.zero_reference = value

    @property
    def frame_width(self) -> int:
        return self.config.frame_width(self._mode)

    @property
    def scroller(self) -> ScrollingSpectrogram:
        """History for the current mode."""
        return self.scrollers[self._mode]

    # Processing

    def scale_frame(self, frame, mode: Mode) -> np.ndarray:
        """
        Turn one frame of samples into scaled decibel levels.

        Linear mode converts DCT magnitudes as amplitudes; mel mode projects
        onto the filter bank and converts the result as power.
        """
        spectrum = self.context.transform.transform(frame)

        if mode is Mode.MEL:
            return self.levels.scale(self.context.mel_bank.apply(spectrum), mode="power")
        return self.levels.scale(spectrum, mode="amplitude")

    def process_frame(self, frame) -> np.ndarray:
        """
        Process one ``sample_count`` frame and append it to the history.

        Returns:
            The scaled frame that was appended.
        """
        with self._lock:
            mode = self._mode
            scaled = self.scale_frame(frame, mode)
            self.scrollers[mode].append(scaled)
        return scaled

    def push_samples(self, block) -> int:
        """
        Feed a block of captured samples.

        Args:
            block: int16 samples of any length.

        Returns:
            Number of frames processed.
        """
        frames = self.framer.push(block)
        for frame in frames:
            self.process_frame(frame)
        return len(frames)

    def render(self) -> np.ndarray:
        """
        Render the current mode's history.

        Returns:
            (buffer_count, frame_width, 3) pixel buffer, or a 1x1 black
            image if no frame has been appended in this mode yet.
        """
        with self._lock:
            scroller = self.scrollers[self._mode]
            if scroller.is_empty:
                return self._empty_image()
            values = scroller.snapshot()
        return self.context.mapper.render(values)

    def _empty_image(self) -> np.ndarray:
        if self.config.output_dtype == "uint8":
            return np.zeros((1, 1, 3), dtype=np.uint8)
        return EMPTY_IMAGE.copy()
