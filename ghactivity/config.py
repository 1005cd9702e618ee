"""Credential loading for the fetch workflow.

The token is read from the process environment and from an env file. The env
file must exist; values already present in the environment win over the
file, the same way ``dotenv`` loads without overriding.
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from dotenv import dotenv_values

from ghactivity.github.client import GitHubRestConfig
from ghactivity.github.errors import ConfigurationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TOKEN_VARIABLE = "PERSONAL_ACCESS_TOKEN"
DEFAULT_ENV_FILE = Path(".env")


def read_env_file(env_file: Path) -> dict[str, str]:
    """Return the key/value pairs in ``env_file``.

    Raises
    ------
    ConfigurationError
        If ``env_file`` does not exist or is not a regular file.

    """
    if not env_file.is_file():
        raise ConfigurationError.missing_env_file(env_file)
    return {
        key: value
        for key, value in dotenv_values(env_file).items()
        if value is not None
    }


def resolve_token(
    file_values: cabc.Mapping[str, str],
    environ: cabc.Mapping[str, str],
) -> str:
    """Return the stripped token, preferring the process environment.

    A variable that is set in the environment wins even when it is empty,
    so an exported blank token is rejected rather than replaced by the file.

    """
    if TOKEN_VARIABLE in environ:
        raw = environ[TOKEN_VARIABLE]
    else:
        raw = file_values.get(TOKEN_VARIABLE, "")
    token = raw.strip()
    if not token:
        raise ConfigurationError.missing_token(TOKEN_VARIABLE)
    return token


def build_config(
    file_values: cabc.Mapping[str, str],
    *,
    environ: cabc.Mapping[str, str] | None = None,
    api_url: str | None = None,
) -> GitHubRestConfig:
    """Build the client configuration from env file values and the environment.

    Parameters
    ----------
    file_values : Mapping[str, str]
        Values read from the env file by :func:`read_env_file`.
    environ : Mapping[str, str] | None, optional
        Environment to consult. ``None`` uses ``os.environ``.
    api_url : str | None, optional
        Override for the GitHub API base URL.

    Returns
    -------
    GitHubRestConfig
        Configuration carrying the resolved token.

    Raises
    ------
    ConfigurationError
        If no token is configured.

    """
    token = resolve_token(file_values, os.environ if environ is None else environ)
    if api_url:
        return GitHubRestConfig(token=token, api_url=api_url)
    return GitHubRestConfig(token=token)
