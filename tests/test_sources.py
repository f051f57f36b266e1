"""Tests for the synthetic demo source."""

import numpy as np

from spectrascope.pipeline import SpectrogramPipeline
from spectrascope.sources import DemoSource


class TestDemoSource:
    def test_block_shape_and_dtype(self):
        source = DemoSource(block_size=512, seed=0)
        block = source.read()

        assert block.shape == (512,)
        assert block.dtype == np.int16

    def test_not_silent(self):
        block = DemoSource(seed=0).read()
        assert np.abs(block).max() > 1000

    def test_seeded_sources_match(self):
        a = DemoSource(seed=3)
        b = DemoSource(seed=3)
        for _ in range(3):
            np.testing.assert_array_equal(a.read(), b.read())

    def test_blocks_count(self):
        blocks = list(DemoSource(block_size=256, seed=0).blocks(5))
        assert len(blocks) == 5

    def test_loop_wraps(self):
        """Reading past the end of the loop keeps producing full blocks."""
        source = DemoSource(sample_rate=8000, block_size=3000, sweep_seconds=1.0, seed=0)
        for block in source.blocks(5):
            assert block.shape == (3000,)

    def test_feeds_pipeline(self, small_config):
        pipeline = SpectrogramPipeline(small_config)
        source = DemoSource(sample_rate=small_config.sample_rate, block_size=small_config.hop_count, seed=1)

        for block in source.blocks(40):
            pipeline.push_samples(block)

        image = pipeline.render()
        assert image.shape == (small_config.buffer_count, small_config.sample_count, 3)
        assert image.max() > 0
