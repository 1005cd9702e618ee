"""Interactive fetch workflow.

Runs the stages in order and stops at the first fatal failure:

1. read the env file and resolve ``PERSONAL_ACCESS_TOKEN``;
2. build the GitHub client and probe ``GET /user``;
3. prompt for a username until GitHub confirms it exists;
4. fetch the user's recent public events;
5. write ``{"events": [...]}`` to the output file.

Every failure is reported to the operator where it happens and mapped to an
exit code; :meth:`FetchWorkflow.run` does not raise for expected failures.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import enum
import os
import typing as typ

from ghactivity.config import (
    DEFAULT_ENV_FILE,
    TOKEN_VARIABLE,
    build_config,
    read_env_file,
)
from ghactivity.events import DEFAULT_OUTPUT_PATH, EventsWriteError, write_events_file
from ghactivity.github.client import (
    GitHubEventsSource,
    GitHubRestClient,
    GitHubRestConfig,
)
from ghactivity.github.errors import (
    AuthenticationError,
    ConfigurationError,
    RemoteError,
    UsernameAttemptsExhaustedError,
    UserNotFoundError,
)
from ghactivity.logging import (
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ghactivity.console import Reporter

logger = get_logger(__name__)

USERNAME_PROMPT = (
    "  + Type the Github user whose recent events history"
    "\n  you would like to view then hit enter: "
)


class ExitCode(enum.IntEnum):
    """Process exit statuses."""

    OK = 0
    FAILURE = 1


ClientFactory = cabc.Callable[[GitHubRestConfig], GitHubEventsSource]


@dataclasses.dataclass(frozen=True, slots=True)
class FetchOptions:
    """Operator-controlled settings for one run."""

    env_file: Path = DEFAULT_ENV_FILE
    output_path: Path = DEFAULT_OUTPUT_PATH
    max_attempts: int | None = None
    api_url: str | None = None

    def __post_init__(self) -> None:
        """Reject a non-positive attempt bound."""
        if self.max_attempts is not None and self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)


class FetchWorkflow:
    """Drive one credential-check, lookup, fetch and write cycle."""

    def __init__(
        self,
        reporter: Reporter,
        options: FetchOptions | None = None,
        *,
        client_factory: ClientFactory = GitHubRestClient,
        environ: cabc.Mapping[str, str] | None = None,
    ) -> None:
        """Initialise the workflow.

        Parameters
        ----------
        reporter : Reporter
            Receives progress output and answers the username prompt.
        options : FetchOptions | None, optional
            Run settings; defaults apply when omitted.
        client_factory : ClientFactory, optional
            Builds the GitHub client from the resolved configuration.
        environ : Mapping[str, str] | None, optional
            Environment consulted for the token. ``None`` uses ``os.environ``.

        """
        self._reporter = reporter
        self._options = options or FetchOptions()
        self._client_factory = client_factory
        self._environ = os.environ if environ is None else environ

    async def run(self) -> ExitCode:
        """Run every stage and return the exit code for the process."""
        config = self._load_config()
        if config is None:
            return ExitCode.FAILURE

        self._reporter.blank()
        client = self._client_factory(config)
        try:
            return await self._run_with_client(client)
        finally:
            await client.aclose()

    async def _run_with_client(self, client: GitHubEventsSource) -> ExitCode:
        if not await self._authenticate(client):
            return ExitCode.FAILURE

        self._reporter.blank()
        try:
            username = await self.acquire_username(client)
        except UsernameAttemptsExhaustedError as exc:
            log_error(logger, "%s", exc)
            self._reporter.fail(f"{exc}!", indent=2)
            return ExitCode.FAILURE

        self._reporter.blank()
        events = await self._fetch_events(client, username)
        if events is None:
            return ExitCode.FAILURE

        self._reporter.blank()
        if not await self._persist(events):
            return ExitCode.FAILURE
        return ExitCode.OK

    def _load_config(self) -> GitHubRestConfig | None:
        env_file = self._options.env_file
        try:
            with self._reporter.stage("Checking for .env file"):
                file_values = read_env_file(env_file)
        except ConfigurationError:
            log_error(logger, "Env file %s not found", env_file)
            self._reporter.fail("Missing .env file!", indent=2)
            return None
        self._reporter.succeed("Found .env file!", indent=2)

        try:
            config = build_config(
                file_values, environ=self._environ, api_url=self._options.api_url
            )
        except ConfigurationError:
            log_error(logger, "%s is not set", TOKEN_VARIABLE)
            self._reporter.fail(
                f"Missing valid {TOKEN_VARIABLE} credential!", indent=4
            )
            return None
        log_info(logger, "Loaded credentials from %s", env_file)
        return config

    async def _authenticate(self, client: GitHubEventsSource) -> bool:
        try:
            with self._reporter.stage("Initializing Github Client"):
                user = await client.get_authenticated_user()
        except AuthenticationError as exc:
            log_error(logger, "GitHub rejected the access token: %s", exc)
            self._reporter.fail("Bad credentials!", indent=2)
            return False
        except RemoteError as exc:
            log_error(logger, "Credential probe failed: %s", exc.describe())
            self._reporter.fail(exc.describe(), indent=2)
            return False

        log_info(logger, "Authenticated as %s", user.login)
        self._reporter.succeed("Client initialized!", indent=2)
        return True

    async def acquire_username(self, client: GitHubEventsSource) -> str:
        """Prompt until GitHub confirms a username and return its login.

        Raises
        ------
        UsernameAttemptsExhaustedError
            If ``max_attempts`` answers were given without a confirmed user.

        """
        max_attempts = self._options.max_attempts
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            answer = self._reporter.ask(USERNAME_PROMPT).strip()
            if not answer:
                self._reporter.fail("A username is required!", indent=6)
                continue

            try:
                with self._reporter.stage(
                    f'Verifying existence of user "{answer}"', indent=4, style="cyan"
                ):
                    user = await client.get_user(answer)
            except UserNotFoundError:
                log_warning(logger, "GitHub user %s not found", answer)
                self._reporter.fail(f"{answer} does not exist!", indent=6)
                continue
            except RemoteError as exc:
                log_warning(logger, "Lookup of %s failed: %s", answer, exc.describe())
                self._reporter.fail(exc.describe(), indent=6)
                continue

            log_info(logger, "Confirmed GitHub user %s", user.login)
            self._reporter.succeed(f"{answer} exists!", indent=6)
            return user.login

        raise UsernameAttemptsExhaustedError(attempts)

    async def _fetch_events(
        self, client: GitHubEventsSource, username: str
    ) -> list[typ.Any] | None:
        try:
            with self._reporter.stage(f"Fetching recent event data for {username}"):
                events = await client.list_public_events(username)
        except RemoteError as exc:
            log_error(logger, "Event fetch for %s failed: %s", username, exc.describe())
            self._reporter.fail(exc.describe(), indent=2)
            return None

        log_info(logger, "Fetched %d events for %s", len(events), username)
        self._reporter.succeed("Event data acquired!", indent=2)
        return events

    async def _persist(self, events: list[typ.Any]) -> bool:
        path = self._options.output_path
        try:
            with self._reporter.stage(f"Pretty printing data to {path.absolute()}"):
                await write_events_file(events, path)
        except EventsWriteError as exc:
            log_exception(logger, f"Writing {path} failed", exc)
            self._reporter.fail(exc.describe(), indent=2)
            return False

        log_info(logger, "Wrote %d events to %s", len(events), path)
        self._reporter.succeed("Printed events data!", indent=2)
        return True


__all__ = [
    "USERNAME_PROMPT",
    "ClientFactory",
    "ExitCode",
    "FetchOptions",
    "FetchWorkflow",
]
