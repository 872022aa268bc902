"""Typed, credential-scoped client for the Strava v3 API."""

from stravakit.auth import Credential, CredentialRegistry, service_for
from stravakit.exceptions import (
    BadRequestError,
    InvalidArgumentError,
    NotFoundError,
    RateLimitExceededError,
    StravaAPIError,
    StravaError,
    UnauthorizedError,
)

__version__ = "0.1.0"

__all__ = [
    'Credential', 'CredentialRegistry', 'service_for',
    'BadRequestError', 'InvalidArgumentError', 'NotFoundError', 'RateLimitExceededError',
    'StravaAPIError', 'StravaError', 'UnauthorizedError',
]
