"""Provider errors for taskFit integrations."""


class ProviderError(Exception):
    """Raised when a weather or traffic provider cannot supply a reading."""

    pass


class ProviderNotConfiguredError(ProviderError):
    """Raised when a provider is called without an API key."""

    pass
