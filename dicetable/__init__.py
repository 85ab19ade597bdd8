"""Dice table: grid layout, snapping and pointer interaction for dice on a board."""

__version__ = "0.1.0"
