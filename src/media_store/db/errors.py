"""Exceptions raised by the database layer."""


class ConfigurationError(RuntimeError):
    """The database cannot be used because configuration is missing or invalid."""


class UnsupportedOperationError(NotImplementedError):
    """The active backend does not provide the requested capability."""
