"""Voice-command task intake service."""

__version__ = "0.1.0"
