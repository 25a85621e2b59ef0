"""Mood-correlation and financial-scoring engine for a personal-finance backend."""

__version__ = "0.1.0"
