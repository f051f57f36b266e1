"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from spectrascope.config import SpectrogramConfig

# Default sample rate for test audio
TEST_SR = 44100


def cosine_frame(
    frequency: float,
    sample_count: int,
    sample_rate: int = TEST_SR,
    amplitude: float = 10000.0,
) -> np.ndarray:
    """One frame of a zero-phase cosine as int16."""
    t = np.arange(sample_count) / sample_rate
    y = amplitude * np.cos(2 * np.pi * frequency * t)
    return np.round(y).astype(np.int16)


@pytest.fixture
def sample_rate() -> int:
    """Default sample rate for tests."""
    return TEST_SR


@pytest.fixture
def small_config() -> SpectrogramConfig:
    """A small session that keeps tests fast."""
    return SpectrogramConfig(
        sample_count=256,
        buffer_count=16,
        hop_count=128,
        filter_bank_count=20,
        sample_rate=TEST_SR,
    )


@pytest.fixture
def pure_sine(sample_rate: int) -> np.ndarray:
    """
    Half a second of a 440Hz sine (A4 note) as int16.
    """
    duration = 0.5
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    return (y * 32767).astype(np.int16)


@pytest.fixture
def silence() -> np.ndarray:
    """A single 1024-sample frame of silence."""
    return np.zeros(1024, dtype=np.int16)


@pytest.fixture
def white_noise(sample_rate: int) -> np.ndarray:
    """
    Half a second of white noise as int16.
    """
    rng = np.random.default_rng(42)  # Reproducible
    samples = int(sample_rate * 0.5)
    y = rng.standard_normal(samples) * 0.3
    return (np.clip(y, -1.0, 1.0) * 32767).astype(np.int16)
