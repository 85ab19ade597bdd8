"""Dice, grid geometry, placement and snapping."""
