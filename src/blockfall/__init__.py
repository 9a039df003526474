"""Blockfall: a falling-block puzzle engine with pygame and gymnasium frontends."""

__version__ = "0.1.0"
