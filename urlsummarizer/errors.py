from typing import Any, Optional

GENERIC_ERROR_MESSAGE = "An error occurred during your request."
MISSING_KEY_MESSAGE = "OpenAI API key not configured, please follow instructions in README.md"
INVALID_REQUEST_MESSAGE = "Please provide a valid URL or array of URLs."


class SummarizerError(Exception):
    pass


class ConfigurationError(SummarizerError):
    """No completion-model credential is configured."""

    def __init__(self, message: str = MISSING_KEY_MESSAGE):
        super().__init__(message)


class ValidationError(SummarizerError):
    """The request's ``urls`` is missing, empty, or the wrong type."""

    def __init__(self, message: str = INVALID_REQUEST_MESSAGE):
        super().__init__(message)


class InvalidUrlError(SummarizerError):
    pass


class FetchError(SummarizerError):
    pass


class ExtractionError(SummarizerError):
    pass


class ModelError(SummarizerError):
    """Completion call failed.

    ``status_code`` and ``body`` are set when the upstream answered with an
    HTTP error; they are forwarded to the caller unchanged.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def has_upstream_response(self) -> bool:
        return self.status_code is not None and self.body is not None
