"""A tiny line-based in-memory key-value server, its store, and an interactive client."""

__version__ = "0.1.0"