"""Custom exception classes for the Refloom library."""

import httpx


class RefloomError(Exception):
    """Base exception class for all Refloom errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    def __str__(self) -> str:
        if self.response:
            url_info = getattr(getattr(self.response, "request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


# --- Decoding ---


class DecodeError(RefloomError):
    """Base class for failures while converting a JSON value into a typed record."""


class MissingFieldError(DecodeError):
    """A required key is absent from a JSON object."""

    def __init__(self, name: str):
        super().__init__(f"Missing required field '{name}'")
        self.name = name


class InvalidTypeNameError(DecodeError):
    """A key is present but holds a JSON value of the wrong type."""

    def __init__(self, name: str):
        super().__init__(f"Invalid type for field '{name}'")
        self.name = name


class InvalidMessageTypeError(DecodeError):
    """The value handed to a decoder is not a JSON object where one was required."""

    def __init__(self, description: str):
        super().__init__(f"Expected a JSON object, got {description}")
        self.description = description


# --- Query compilation ---


class InvalidResultControlError(RefloomError):
    """A pagination parameter string could not be parsed into a result control."""

    def __init__(self, description: str):
        super().__init__(f"Invalid result control: {description}")
        self.description = description


class ConfigurationError(RefloomError):
    """Represents an error in the library's configuration or a query that cannot be compiled."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


# --- Transport ---


class APIError(RefloomError):
    """Represents a generic error returned by the API (non-specific 4xx/5xx)."""


class NotFoundError(APIError):
    """Represents a resource not found error (404 Not Found)."""


class TimeoutError(RefloomError):
    """Represents a request timeout error."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class NetworkError(RefloomError):
    """Represents a network connection error (DNS failure, connection refused, ...)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)
