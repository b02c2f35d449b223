"""Debate Timer: speech stopwatch with milestone alerts."""

__version__ = "0.1.0"
