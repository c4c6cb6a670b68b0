"""
Error taxonomy shared by the intent resolver and the HTTP layer.

Every error carries the HTTP status it maps to, so the API can turn any
TodoAIError into a JSON error body without knowing where it was raised.
"""


class TodoAIError(Exception):
    """Base class for all errors surfaced to API callers."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoAIError):
    """A required field is missing or has an invalid value."""
    status_code = 400


class NotFoundError(TodoAIError):
    """A position or text reference did not match any todo."""
    status_code = 404


class ParseError(TodoAIError):
    """The model output could not be parsed as a JSON object."""
    status_code = 500


class UpstreamError(TodoAIError):
    """The text-generation service failed or returned nothing usable."""
    status_code = 500


class StoreError(TodoAIError):
    """A database operation failed."""
    status_code = 500
