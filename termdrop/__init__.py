"""termdrop — turn a shell command into a drop-target macOS app."""

__version__ = "0.1.0"
