"""Exceptions raised by stravakit."""

from typing import Any, Optional


class StravaError(Exception):
    """Base exception for stravakit errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class NotFoundError(StravaError):
    """The referenced resource does not exist (HTTP 404)."""


class BadRequestError(StravaError):
    """Strava rejected the request parameters (HTTP 400)."""


class UnauthorizedError(StravaError):
    """The token may not read the resource (HTTP 401/403)."""


class RateLimitExceededError(StravaError):
    """Strava rate limit exceeded (HTTP 429)."""

    def __init__(self, message: str, retry_after: Optional[float] = None, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class StravaAPIError(StravaError):
    """Any other unexpected response from Strava."""


class InvalidArgumentError(StravaError, ValueError):
    """Invalid arguments, detected locally or reported by Strava."""
