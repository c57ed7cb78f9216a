"""Turn a natural-language request into a shell command, then run it."""

__version__ = "0.1.0"
