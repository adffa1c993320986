"""Error taxonomy shared by the expert search and web search pipelines."""

from typing import Any


class ServiceError(Exception):
    """
    Base class for errors that are rendered as a structured JSON response.

    Subclasses set ``status_code``; ``payload()`` builds the response body.
    """

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidSearchRequest(ServiceError):
    """Missing or malformed client input. Nothing downstream was called."""

    status_code = 400


class ConfigurationError(ServiceError):
    """A required external credential or setting is missing."""

    status_code = 500


class UpstreamServiceError(ServiceError):
    """The search provider failed or timed out."""

    status_code = 500


class ExpertSearchError(ServiceError):
    """
    The expert search failed.

    The payload carries an empty ``experts`` list so clients render "no
    results" while still seeing the error field.
    """

    status_code = 500

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        body["experts"] = []
        return body


class DirectoryQueryError(ExpertSearchError):
    """The expert directory query failed or timed out."""


class CompletionParseError(ValueError):
    """A model completion did not contain the expected JSON object."""
