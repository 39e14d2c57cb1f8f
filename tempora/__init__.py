"""Tempora: an on-this-day diary with a local event store."""
__version__ = "1.0.0"
