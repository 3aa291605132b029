"""Storage error type shared by all backends."""


class StorageError(Exception):
    """Persisted settings could not be read or written."""
