"""
Errors raised by the Flattr strategy and the OAuth2 engine.

ConfigurationError is raised at construction time. TransportError and
ParseError come out of the profile fetch. AuthenticationFailed covers the
handshake itself (denied consent, bad state, token exchange, verify rejection).
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Strategy constructed without a verify callback or required credentials."""


class TransportError(Exception):
    """Protected-resource request failed (network error or non-success status)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ParseError(ValueError):
    """Profile response body could not be decoded into a JSON object."""


class AuthenticationFailed(Exception):
    """The OAuth2 handshake did not produce an authenticated user."""

    def __init__(self, reason: str, description: Optional[str] = None):
        super().__init__(f"{reason}: {description}" if description else reason)
        self.reason = reason
        self.description = description
