"""Custom exceptions for the RPC benchmark."""


class ConfigurationError(ValueError):
    """Raised when a run is configured with invalid values."""
    pass
