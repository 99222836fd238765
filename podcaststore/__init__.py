"""Fetch podcast RSS feeds, store them in SQLite and serve them over HTTP."""

__version__ = "0.1.0"
__all__ = ["api", "cli", "feed", "storage"]