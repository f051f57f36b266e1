"""
CLI entry point for the scrolling spectrogram.

Usage:
    spectrascope [options]
    python -m spectrascope [options]
"""

import argparse
import json
import sys
import time
from pathlib import Path

from spectrascope.config import ConfigurationError, Mode, SpectrogramConfig
from spectrascope.pipeline import SpectrogramPipeline
from spectrascope.sources import DemoSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spectrascope",
        description="Scrolling linear / mel spectrogram of a live audio stream",
    )
    defaults = SpectrogramConfig()

    # Session constants
    parser.add_argument("--sample-count", type=int, default=defaults.sample_count,
                        help=f"Samples per frame (default: {defaults.sample_count})")
    parser.add_argument("--buffer-count", type=int, default=defaults.buffer_count,
                        help=f"Frames kept on screen (default: {defaults.buffer_count})")
    parser.add_argument("--hop-count", type=int, default=defaults.hop_count,
                        help=f"Samples between frames (default: {defaults.hop_count})")
    parser.add_argument("--filter-banks", type=int, default=defaults.filter_bank_count,
                        help=f"Mel bands (default: {defaults.filter_bank_count})")
    parser.add_argument("--sample-rate", type=int, default=defaults.sample_rate,
                        help=f"Sample rate in Hz (default: {defaults.sample_rate})")
    parser.add_argument("--min-freq", type=float, default=defaults.min_frequency,
                        help=f"Lowest mel band edge in Hz (default: {defaults.min_frequency:g})")
    parser.add_argument("--max-freq", type=float, default=defaults.max_frequency,
                        help=f"Highest mel band edge in Hz (default: {defaults.max_frequency:g})")
    parser.add_argument("--entries", type=int, default=defaults.entries_per_channel,
                        help=f"Color table entries (default: {defaults.entries_per_channel})")
    parser.add_argument("--output-dtype", type=str, default=defaults.output_dtype,
                        choices=["float32", "uint8"],
                        help=f"Rendered pixel type (default: {defaults.output_dtype})")

    # Runtime controls
    parser.add_argument("--mode", type=str, default=defaults.mode.value,
                        choices=[m.value for m in Mode],
                        help="Frequency axis (default: linear)")
    parser.add_argument("--gain", type=float, default=defaults.gain,
                        help=f"Decibel gain (default: {defaults.gain})")
    parser.add_argument("--zero-ref", type=float, default=defaults.zero_reference,
                        help=f"Decibel zero reference (default: {defaults.zero_reference:g})")

    # Config file (overrides individual params)
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON config file (overrides individual params)")

    # Display
    parser.add_argument("--width", type=int, default=1024, help="Window width (default: 1024)")
    parser.add_argument("--height", type=int, default=512, help="Window height (default: 512)")
    parser.add_argument("-f", "--fps", type=int, default=30, help="Render rate (default: 30)")

    parser.add_argument("--seed", type=int, default=None, help="Demo source noise seed")
    parser.add_argument(
        "--benchmark", type=float, default=None, metavar="SECONDS",
        help="Process SECONDS of demo audio without a window and report throughput",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SpectrogramConfig:
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            return SpectrogramConfig.from_dict(json.load(f))

    return SpectrogramConfig(
        sample_count=args.sample_count,
        buffer_count=args.buffer_count,
        hop_count=args.hop_count,
        filter_bank_count=args.filter_banks,
        sample_rate=args.sample_rate,
        min_frequency=args.min_freq,
        max_frequency=args.max_freq,
        entries_per_channel=args.entries,
        output_dtype=args.output_dtype,
        mode=args.mode,
        gain=args.gain,
        zero_reference=args.zero_ref,
    )


def run_benchmark(pipeline: SpectrogramPipeline, source: DemoSource, seconds: float) -> dict:
    """Push ``seconds`` of demo audio through the pipeline, rendering once per block."""
    n_blocks = max(1, int(seconds * source.sample_rate / source.block_size))
    t0 = time.time()
    frames = 0
    for block in source.blocks(n_blocks):
        frames += pipeline.push_samples(block)
        pipeline.render()
    elapsed = time.time() - t0
    return {
        "blocks": n_blocks,
        "frames": frames,
        "elapsed": elapsed,
        "fps": frames / max(elapsed, 1e-6),
    }


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    if args.config and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = config_from_args(args)
        pipeline = SpectrogramPipeline(config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    source = DemoSource(
        sample_rate=config.sample_rate,
        block_size=config.hop_count,
        seed=args.seed,
    )

    print(f"Spectrogram: {config.buffer_count} frames x {pipeline.frame_width} bins ({config.mode.value})")
    print(f"  Frame: {config.sample_count} samples, hop {config.hop_count} @ {config.sample_rate} Hz")

    if args.benchmark is not None:
        stats = run_benchmark(pipeline, source, args.benchmark)
        print(f"  Processed {stats['frames']} frames in {stats['elapsed']:.2f}s ({stats['fps']:.1f} frames/s)")
        return

    # Imported here so the benchmark path never needs a display
    from spectrascope.viewer import SpectrogramViewer

    print("  Keys: M mode, Up/Down gain, Left/Right zero ref, Esc quit", flush=True)
    viewer = SpectrogramViewer(pipeline, source, width=args.width, height=args.height, fps=args.fps)
    viewer.run()


if __name__ == "__main__":
    main()
