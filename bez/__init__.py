"""Pixel-perfect bezier rotoscoping and node graph editor with its math and rasterizer."""

__version__ = "0.1.0"

__all__ = ["vmath", "plot", "engine", "graph", "roto", "app"]