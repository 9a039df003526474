"""Pygame frontend for Blockfall."""
