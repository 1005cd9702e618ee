"""Errors raised while configuring and talking to the GitHub REST API."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when the local configuration cannot provide credentials."""

    @classmethod
    def missing_env_file(cls, path: object) -> ConfigurationError:
        """Return an error for an env file that does not exist."""
        return cls(f"Missing .env file: {path}")

    @classmethod
    def missing_token(cls, variable: str) -> ConfigurationError:
        """Return an error when the token variable is unset or blank."""
        return cls(f"Missing valid {variable} credential")

    @classmethod
    def empty_token(cls) -> ConfigurationError:
        """Return an error when a client is built with a blank token."""
        return cls("GitHub token must be non-empty")


class RemoteError(RuntimeError):
    """Raised for any failure reported by, or on the way to, the GitHub API.

    ``name`` identifies the kind of failure (an exception class name for
    transport errors, ``HttpError`` for error responses) and ``status_code``
    is set when GitHub answered.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialise with a message, failure name and optional status code."""
        self.name = name or type(self).__name__
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, message: str) -> RemoteError:
        """Return an error for a non-2xx response."""
        return cls(message, name="HttpError", status_code=status_code)

    @classmethod
    def transport(cls, exc: BaseException) -> RemoteError:
        """Return an error wrapping an httpx transport failure."""
        return cls(str(exc) or repr(exc), name=type(exc).__name__)

    @classmethod
    def unexpected_payload(cls, path: str, expected: str) -> RemoteError:
        """Return an error for a response body of the wrong shape."""
        return cls(
            f"GitHub response for {path} was not {expected}",
            name="ResponseShapeError",
        )

    def describe(self) -> str:
        """Render the error the way the console reports remote failures."""
        return f"Error: {self.name}, Message: {self}!"


class AuthenticationError(RemoteError):
    """Raised when GitHub rejects the access token."""

    @classmethod
    def bad_credentials(cls, message: str = "Bad credentials") -> AuthenticationError:
        """Return an error for a 401 response to the credential probe."""
        return cls(message, name="HttpError", status_code=401)


class UserNotFoundError(RemoteError):
    """Raised when a username does not resolve to a GitHub account."""

    def __init__(self, username: str, *, status_code: int | None = 404) -> None:
        """Initialise with the username that failed to resolve."""
        self.username = username
        super().__init__("Not Found", name="HttpError", status_code=status_code)

    @classmethod
    def empty_record(cls, username: str) -> UserNotFoundError:
        """Return an error for a successful lookup with a ``null`` body."""
        return cls(username, status_code=None)


class UsernameAttemptsExhaustedError(RuntimeError):
    """Raised when the operator used up every permitted username attempt."""

    def __init__(self, attempts: int) -> None:
        """Initialise with the number of attempts that were made."""
        self.attempts = attempts
        super().__init__(f"No valid GitHub user after {attempts} attempt(s)")
