"""Batch JavaScript/JSX to TypeScript/TSX conversion through a remote language model."""

__version__ = '0.1.0'
