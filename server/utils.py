"""Shared utilities for FastAPI routes."""

from collections.abc import Mapping

from fastapi import Request
from fastapi.exceptions import RequestValidationError

SENSITIVE_HEADERS = {"x-api-key", "authorization", "apikey"}

# Sent on preflight answers so browser clients on any origin can call the API
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def extract_bearer_token(request: Request) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header, if present."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def summarize_validation_error(exc: RequestValidationError) -> str:
    """One line per invalid field, e.g. ``body.minRate: Input should be a valid number``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)
