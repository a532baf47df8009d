class ConfigurationError(RuntimeError):
    """Required collaborator credentials are missing."""


class ModelCallError(RuntimeError):
    """
    The chat model did not return a usable completion.
    Raised after a non-success status, a timeout, exhausted retries
    or a response body without a message.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AnalysisFailedError(RuntimeError):
    """Every fallback was exhausted without a usable result."""
