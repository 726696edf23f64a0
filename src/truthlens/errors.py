class TruthLensError(Exception):
    """Base class for engine errors."""


class InvalidUrl(TruthLensError, ValueError):
    """Raised when a source URL cannot be resolved to a hostname."""


class ProviderUnavailable(TruthLensError, RuntimeError):
    """Raised when a live fact-check provider cannot answer."""


class MalformedInput(TruthLensError, ValueError):
    """Raised when the text handed to the engine is not analysable."""
