"""Pseudocolor rendering."""

from spectrascope.render.colormap import PseudocolorMapper

__all__ = ["PseudocolorMapper"]
