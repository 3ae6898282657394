"""Error taxonomy shared by the prompt builder, client and routes."""
from __future__ import annotations


class StoicAPIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StoicAPIError):
    """Required input is missing or malformed."""

    status_code = 400


class AuthorizationError(StoicAPIError):
    """The caller's subscription tier does not allow the operation."""

    status_code = 403

    def __init__(self, message: str, upgrade_url: str | None = None) -> None:
        super().__init__(message)
        self.upgrade_url = upgrade_url


class GenerationError(StoicAPIError):
    """The upstream model call failed or returned no usable content."""

    status_code = 500
