"""
Pseudocolor lookup for the scrolling spectrogram.

Maps scalar levels to a blue -> red -> green palette through a small
quantized table, interpolating between neighbouring entries to avoid
banding.
"""

import colorsys

import numpy as np
from PIL import Image

# Table entries are stored as 16-bit unsigned integers.
TABLE_SCALE = 65535

# 1x1 black image returned before anything has been drawn.
EMPTY_IMAGE = np.zeros((1, 1, 3), dtype=np.float32)
EMPTY_IMAGE.flags.writeable = False


def build_lookup_table(entries_per_channel: int = 32) -> np.ndarray:
    """
    Build the gray -> RGB table.

    Values near zero map to dark blue, 0.5 to red and 1.0 to
    full-brightness green.

    Args:
        entries_per_channel: Number of quantization levels.

    Returns:
        (entries_per_channel, 3) uint16 array of RGB triples.
    """
    table = np.zeros((entries_per_channel, 3), dtype=np.uint16)

    for gray in range(entries_per_channel):
        normalized = gray / (entries_per_channel - 1)
        hue = (2.0 / 3.0) * (1.0 - normalized)
        brightness = np.sqrt(normalized)

        r, g, b = colorsys.hsv_to_rgb(hue, 1.0, brightness)

        # Red and green swap places: the hue sweep runs blue -> green -> red,
        # the stored palette runs blue -> red -> green.
        table[gray] = (
            int(g * TABLE_SCALE),
            int(r * TABLE_SCALE),
            int(b * TABLE_SCALE),
        )

    table.flags.writeable = False
    return table


def apply_lookup_table(values: np.ndarray, table: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Map a single-channel field through the table with linear interpolation.

    Args:
        values: (H, W) levels; clamped to [0, 1].
        table: (entries, 3) table from ``build_lookup_table``.

    Returns:
        Planar (red, green, blue) float32 arrays in [0, 1], each (H, W).
    """
    entries = len(table)
    levels = np.clip(np.nan_to_num(np.asarray(values, dtype=np.float32)), 0.0, 1.0)

    position = levels * (entries - 1)
    lower = np.floor(position).astype(np.intp)
    upper = np.minimum(lower + 1, entries - 1)
    frac = (position - lower)[..., np.newaxis]

    palette = table.astype(np.float32) / TABLE_SCALE
    rgb = (palette[lower] * (1.0 - frac) + palette[upper] * frac).astype(np.float32)

    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


def interleave(red: np.ndarray, green: np.ndarray, blue: np.ndarray, dtype: str = "float32") -> np.ndarray:
    """
    Interleave planar channels into an (H, W, 3) pixel buffer.

    Args:
        red, green, blue: Planar float channels in [0, 1].
        dtype: "float32" keeps [0, 1] floats, "uint8" scales to [0, 255].
    """
    pixels = np.stack((red, green, blue), axis=-1).astype(np.float32)
    if dtype == "uint8":
        return np.round(pixels * 255).astype(np.uint8)
    return pixels


class PseudocolorMapper:
    """
    Renders a scalar field into RGB through a fixed lookup table.
    """

    def __init__(self, entries_per_channel: int = 32, dtype: str = "float32"):
        self.entries_per_channel = entries_per_channel
        self.dtype = dtype
        self.table = build_lookup_table(entries_per_channel)

    def planar(self, values: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return apply_lookup_table(values, self.table)

    def render(self, values: np.ndarray) -> np.ndarray:
        """Map ``values`` to an interleaved (H, W, 3) pixel buffer."""
        red, green, blue = self.planar(values)
        return interleave(red, green, blue, dtype=self.dtype)


def to_image(pixels: np.ndarray) -> Image.Image:
    """
    Wrap a pixel buffer in an 8-bit RGB PIL image.

    Args:
        pixels: (H, W, 3) float32 in [0, 1] or uint8.
    """
    if pixels.dtype != np.uint8:
        pixels = np.round(np.clip(pixels, 0.0, 1.0) * 255).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(pixels))
