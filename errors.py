"""
Exceptions raised by the recipe reader.

Export failures all derive from TandoorExportError so callers can catch the
whole family and show ``str(err)`` to the user.
"""


class RecipeReaderError(Exception):
    """Base class for every error with a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ExtractionError(RecipeReaderError):
    """The vision model could not produce a recipe."""


class TandoorExportError(RecipeReaderError):
    """Base class for failures while exporting a recipe to Tandoor."""


class ConfigurationError(TandoorExportError):
    """The Tandoor base URL is malformed."""


class AuthenticationError(TandoorExportError):
    """Tandoor rejected the API key (401/403)."""


class ValidationError(TandoorExportError):
    """Tandoor rejected the recipe payload (400)."""

    def __init__(self, message: str, detail: str = "", field_errors: dict | None = None):
        super().__init__(message)
        self.detail = detail
        self.field_errors = field_errors or {}


class EndpointNotFoundError(TandoorExportError):
    """The recipe endpoint does not exist at the configured URL (404)."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class RequestFailedError(TandoorExportError):
    """Any other non-success status."""

    def __init__(self, message: str, status_code: int, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class NetworkError(TandoorExportError):
    """The Tandoor instance could not be reached."""


class UnknownExportError(TandoorExportError):
    """Unexpected failure during an export attempt."""
