"""Sprout: plant container records kept as KEY=VALUE text files."""

__version__ = "0.1.0"
