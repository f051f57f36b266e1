"""
Interactive scrolling spectrogram window.

A producer thread feeds audio blocks into the pipeline at real-time
cadence while the pygame main loop renders the latest image. Keyboard
controls mirror the original gain / zero-reference sliders and the
linear / mel mode picker.
"""

import threading
from dataclasses import dataclass, replace

import numpy as np
import pygame
from PIL import Image

from spectrascope.config import GAIN_RANGE, ZERO_REFERENCE_RANGE, Mode
from spectrascope.pipeline import SpectrogramPipeline
from spectrascope.render.colormap import to_image

GAIN_STEP = 0.0025
ZERO_REFERENCE_STEP = 100.0

KEY_ACTIONS = {
    pygame.K_m: "toggle_mode",
    pygame.K_UP: "gain_up",
    pygame.K_DOWN: "gain_down",
    pygame.K_RIGHT: "zero_ref_up",
    pygame.K_LEFT: "zero_ref_down",
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


@dataclass(frozen=True)
class Controls:
    """User-adjustable pipeline settings."""

    mode: Mode = Mode.LINEAR
    gain: float = 0.025
    zero_reference: float = 1000.0


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def apply_control(controls: Controls, action: str) -> Controls:
    """
    Return the controls after one user action.

    Gain and zero reference are clamped to the slider ranges.
    """
    if action == "toggle_mode":
        mode = Mode.MEL if controls.mode is Mode.LINEAR else Mode.LINEAR
        return replace(controls, mode=mode)
    if action == "gain_up":
        return replace(controls, gain=_clamp(controls.gain + GAIN_STEP, GAIN_RANGE))
    if action == "gain_down":
        return replace(controls, gain=_clamp(controls.gain - GAIN_STEP, GAIN_RANGE))
    if action == "zero_ref_up":
        return replace(
            controls,
            zero_reference=_clamp(controls.zero_reference + ZERO_REFERENCE_STEP, ZERO_REFERENCE_RANGE),
        )
    if action == "zero_ref_down":
        return replace(
            controls,
            zero_reference=_clamp(controls.zero_reference - ZERO_REFERENCE_STEP, ZERO_REFERENCE_RANGE),
        )
    raise ValueError(f"Unknown control action: {action}")


def to_display_image(pixels: np.ndarray, size: tuple[int, int]) -> Image.Image:
    """
    Orient and scale a pixel buffer for display.

    The buffer has time on rows (oldest first) and frequency on columns
    (DC first). It is rotated a quarter turn counter-clockwise so time
    scrolls left to right and low frequencies sit at the bottom.
    """
    img = to_image(pixels).transpose(Image.Transpose.ROTATE_90)
    if img.size != size:
        img = img.resize(size, Image.BILINEAR)
    return img


class SpectrogramViewer:
    """Live pygame window around a ``SpectrogramPipeline``."""

    def __init__(
        self,
        pipeline: SpectrogramPipeline,
        source,
        width: int = 1024,
        height: int = 512,
        fps: int = 30,
    ):
        """
        Initialize the viewer.

        Args:
            pipeline: Pipeline to feed and render.
            source: Object with ``read()`` returning int16 blocks and
                ``block_size`` / ``sample_rate`` attributes.
            width: Window width in pixels.
            height: Window height in pixels.
            fps: Render rate.
        """
        self.pipeline = pipeline
        self.source = source
        self.width = width
        self.height = height
        self.fps = fps

        self.controls = Controls(
            mode=pipeline.mode,
            gain=pipeline.gain,
            zero_reference=pipeline.zero_reference,
        )
        self._stop = threading.Event()
        self._producer: threading.Thread | None = None

    def set_controls(self, controls: Controls):
        self.controls = controls
        self.pipeline.mode = controls.mode
        self.pipeline.gain = controls.gain
        self.pipeline.zero_reference = controls.zero_reference

    def _produce(self):
        interval = self.source.block_size / self.source.sample_rate
        while not self._stop.is_set():
            self.pipeline.push_samples(self.source.read())
            self._stop.wait(interval)

    def start_producer(self):
        self._stop.clear()
        self._producer = threading.Thread(target=self._produce, name="spectrascope-producer", daemon=True)
        self._producer.start()

    def stop_producer(self):
        self._stop.set()
        if self._producer is not None:
            self._producer.join(timeout=1.0)
            self._producer = None

    def _caption(self) -> str:
        c = self.controls
        return f"spectrascope  mode={c.mode.value}  gain={c.gain:.4f}  zero ref={c.zero_reference:.0f}"

    def run(self):
        """Open the window and block until it is closed."""
        pygame.init()
        screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self._caption())
        clock = pygame.time.Clock()

        self.start_producer()
        try:
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key in QUIT_KEYS:
                            running = False
                        elif event.key in KEY_ACTIONS:
                            self.set_controls(apply_control(self.controls, KEY_ACTIONS[event.key]))
                            pygame.display.set_caption(self._caption())
                            print(self._caption(), flush=True)

                img = to_display_image(self.pipeline.render(), (self.width, self.height))
                surface = pygame.image.frombuffer(img.tobytes(), img.size, "RGB")
                screen.blit(surface, (0, 0))
                pygame.display.flip()
                clock.tick(self.fps)
        finally:
            self.stop_producer()
            pygame.quit()
