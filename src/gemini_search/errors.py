"""Application-level exception types for gemini-search."""

from __future__ import annotations


class GSearchError(Exception):
    """Base exception for gemini-search."""


class ConfigurationError(GSearchError):
    """Base exception for configuration and startup validation errors."""


class MissingCredentialError(ConfigurationError):
    """Raised when no Gemini API key is configured."""


class EmptyQueryError(GSearchError):
    """Raised when the joined query is blank."""


class DispatchError(GSearchError):
    """Raised when the request fails in transport or returns a non-success status."""


class MalformedResponseError(GSearchError):
    """Raised when the response body has no generated text."""
