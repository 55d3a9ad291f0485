"""Two-way TCP chat that runs as a client or as a broadcasting server."""

__version__ = "0.1.0"
__all__ = ["__version__"]