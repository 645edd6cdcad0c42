"""
Exception hierarchy for the polish/translate pipeline.

Transformation-path errors derive from TransformError and are caught at the
pipeline boundary. Side-effect errors (clipboard) are logged only.
"""

from typing import Optional


class PolishError(Exception):
    """Base class for all application errors."""


class TransformError(PolishError):
    """A failure that aborts a single polish/translate run."""


class CaptureError(TransformError):
    """The currently selected text could not be read."""


class MissingCredentialError(TransformError):
    def __init__(self, provider: str):
        super().__init__(f"API key not configured for provider: {provider}")
        self.provider = provider


class ApiError(TransformError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status: int, body: str = ""):
        message = f"API request failed with status: {status}"
        if body:
            message = f"{message} - {body}"
        super().__init__(message)
        self.status = status
        self.body = body


class EmptyResponseError(TransformError):
    def __init__(self, message: str = "No response from API"):
        super().__init__(message)


class ProviderRequestError(TransformError):
    """Transport failure or a response body that is not valid JSON."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class PersistenceError(PolishError):
    """Settings could not be written to disk."""


class ClipboardError(PolishError):
    pass
