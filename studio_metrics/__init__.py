"""Financial metrics engine for the studio operations console."""

__version__ = "1.0.0"
