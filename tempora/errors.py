"""Exceptions raised by the store."""


class StoreUnavailableError(RuntimeError):
    """The durable store could not be opened or prepared for this session."""
