"""GitHub REST client, records and errors."""

from __future__ import annotations

from .client import GitHubEventsSource, GitHubRestClient, GitHubRestConfig
from .errors import (
    AuthenticationError,
    ConfigurationError,
    RemoteError,
    UsernameAttemptsExhaustedError,
    UserNotFoundError,
)
from .models import GitHubUser

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "GitHubEventsSource",
    "GitHubRestClient",
    "GitHubRestConfig",
    "GitHubUser",
    "RemoteError",
    "UserNotFoundError",
    "UsernameAttemptsExhaustedError",
]
