"""Pointer and touch interaction with dice on a board."""
