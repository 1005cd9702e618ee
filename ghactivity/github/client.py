"""GitHub REST client used by the interactive fetch workflow."""

from __future__ import annotations

import dataclasses
import typing as typ
from urllib.parse import quote

import httpx
import msgspec

from .errors import (
    AuthenticationError,
    ConfigurationError,
    RemoteError,
    UserNotFoundError,
)
from .models import GitHubUser, decode_user

_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_UNAUTHORIZED = 401
_HTTP_NOT_FOUND = 404
_API_VERSION = "2022-11-28"


class GitHubEventsSource(typ.Protocol):
    """Remote operations the fetch workflow needs."""

    async def get_authenticated_user(self) -> GitHubUser:
        """Return the account that owns the configured token."""
        ...

    async def get_user(self, username: str) -> GitHubUser:
        """Return the account named ``username``."""
        ...

    async def list_public_events(self, username: str) -> list[typ.Any]:
        """Return the first page of recent public events for ``username``."""
        ...

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRestConfig:
    """Configuration for :class:`GitHubRestClient`."""

    token: str
    api_url: str = "https://api.github.com"
    timeout_s: float = 20.0
    user_agent: str = "ghactivity/0.1"


def _error_message(response: httpx.Response) -> str:
    """Return GitHub's ``message`` field, falling back to the reason phrase."""
    try:
        payload = msgspec.json.decode(response.content)
    except msgspec.DecodeError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return response.reason_phrase or f"HTTP {response.status_code}"


class GitHubRestClient:
    """GitHub REST v3 implementation of :class:`GitHubEventsSource`."""

    def __init__(
        self,
        config: GitHubRestConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise ConfigurationError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": _API_VERSION,
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def get_authenticated_user(self) -> GitHubUser:
        """Probe ``GET /user`` to confirm the token is accepted.

        Raises
        ------
        AuthenticationError
            If GitHub answers 401.
        RemoteError
            For any other failure.

        """
        response = await self._get("/user")
        if response.status_code == _HTTP_UNAUTHORIZED:
            raise AuthenticationError.bad_credentials(_error_message(response))
        self._raise_for_status(response)
        user = self._decode_user(response, "/user")
        if user is None:
            raise RemoteError.unexpected_payload("/user", "a user object")
        return user

    async def get_user(self, username: str) -> GitHubUser:
        """Look up ``username`` with ``GET /users/{username}``.

        Raises
        ------
        UserNotFoundError
            If GitHub answers 404 or returns a ``null`` record.
        RemoteError
            For any other failure.

        """
        path = f"/users/{quote(username, safe='')}"
        response = await self._get(path)
        if response.status_code == _HTTP_NOT_FOUND:
            raise UserNotFoundError(username)
        self._raise_for_status(response)
        user = self._decode_user(response, path)
        if user is None:
            raise UserNotFoundError.empty_record(username)
        return user

    async def list_public_events(self, username: str) -> list[typ.Any]:
        """Return the events from ``GET /users/{username}/events/public``.

        Only the first page is requested; the events are returned exactly as
        decoded from the response body.
        """
        path = f"/users/{quote(username, safe='')}/events/public"
        response = await self._get(path)
        self._raise_for_status(response)
        try:
            events = msgspec.json.decode(response.content)
        except msgspec.DecodeError as exc:
            raise RemoteError.unexpected_payload(path, "valid JSON") from exc
        if not isinstance(events, list):
            raise RemoteError.unexpected_payload(path, "a JSON array")
        return events

    async def _get(self, path: str) -> httpx.Response:
        """Issue a GET, converting transport failures to :class:`RemoteError`."""
        url = f"{self._config.api_url.rstrip('/')}{path}"
        try:
            return await self._client.get(url)
        except httpx.HTTPError as exc:
            raise RemoteError.transport(exc) from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise RemoteError.http_error(
                response.status_code, _error_message(response)
            )

    @staticmethod
    def _decode_user(response: httpx.Response, path: str) -> GitHubUser | None:
        try:
            return decode_user(response.content)
        except msgspec.DecodeError as exc:
            # ValidationError subclasses DecodeError
            raise RemoteError.unexpected_payload(path, "a user object") from exc
