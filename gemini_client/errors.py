"""Errors raised by the Gemini client."""


class GeminiError(Exception):
    """Base class for every error raised by this package."""


class HttpError(GeminiError):
    """Transport-level failure (connection, timeout, broken stream)."""


class JsonError(GeminiError):
    """A payload could not be serialized or parsed."""


class ApiError(GeminiError):
    """The API answered with a non-success status code."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Gemini API error: {status_code} - {message}")
        self.status_code = status_code
        self.message = message


class RequestError(GeminiError):
    """A valid request could not be built."""


class MissingApiKeyError(GeminiError):
    """No API key was supplied."""

    def __init__(self, message: str = "Missing API key"):
        super().__init__(message)


class FunctionCallError(GeminiError):
    """Arguments of a model-issued function call could not be read."""


class MissingArgumentError(FunctionCallError):
    """The requested argument is absent from the call."""


class ArgumentTypeError(FunctionCallError):
    """The argument exists but does not match the requested type."""
