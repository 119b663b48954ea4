class ProviderError(Exception):
    """Base exception for upstream data provider errors."""
    pass

class ProviderUnavailableError(ProviderError):
    """Raised when a provider cannot be reached or returns an error payload."""
    pass

class MalformedRecordError(ProviderError):
    """Raised when a single provider record cannot be parsed."""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record
