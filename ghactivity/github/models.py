"""Typed records decoded from GitHub REST responses."""

from __future__ import annotations

import msgspec


class GitHubUser(msgspec.Struct, kw_only=True, frozen=True):
    """The subset of a GitHub user record the workflow relies on."""

    login: str
    id: int | None = None
    name: str | None = None
    html_url: str | None = None


def decode_user(body: bytes) -> GitHubUser | None:
    """Decode a user response body, returning ``None`` for a JSON ``null``.

    Raises
    ------
    msgspec.ValidationError
        If the body is an object without a string ``login``.
    msgspec.DecodeError
        If the body is not valid JSON.

    """
    return msgspec.json.decode(body, type=GitHubUser | None)
