"""Warfront: turn-based fleet conflict simulation engine."""

__version__ = "0.1.0"
