"""Restaurant review advisor."""

__version__ = "1.0.0"
