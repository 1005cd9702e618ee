"""Command-line entry point for fetching a GitHub user's public events.

Usage:
    ghactivity                          # read .env, write events.json
    ghactivity --output out/events.json --max-attempts 3

Environment variables:
    PERSONAL_ACCESS_TOKEN - GitHub token (may also be set in the env file)
    GHACTIVITY_LOG_LEVEL  - Log level for stderr diagnostics (default: WARNING)
"""

from __future__ import annotations

import asyncio
import signal
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter, validators

from ghactivity.config import DEFAULT_ENV_FILE
from ghactivity.console import ConsoleReporter
from ghactivity.events import DEFAULT_OUTPUT_PATH
from ghactivity.logging import configure_logging, get_logger, log_warning
from ghactivity.workflow import ExitCode, FetchOptions, FetchWorkflow

logger = get_logger(__name__)

LOG_LEVEL_VARIABLE = "GHACTIVITY_LOG_LEVEL"

app = App(
    name="ghactivity",
    help="Fetch a GitHub user's recent public events into a JSON file.",
    version="0.1.0",
)


def _setup_logging(level: str | None) -> None:
    normalized, invalid = configure_logging(level)
    if invalid:
        log_warning(
            logger, "Invalid log level %r, falling back to %s", level, normalized
        )


def _abort(signum: int, frame: object) -> typ.NoReturn:
    """Leave at once on SIGINT, even while blocked on the username prompt."""
    raise SystemExit(int(ExitCode.FAILURE))


@app.default
def fetch(
    *,
    env_file: typ.Annotated[
        Path, Parameter(help="Env file holding PERSONAL_ACCESS_TOKEN.")
    ] = DEFAULT_ENV_FILE,
    output: typ.Annotated[
        Path, Parameter(help="File the events envelope is written to.")
    ] = DEFAULT_OUTPUT_PATH,
    max_attempts: typ.Annotated[
        int | None,
        Parameter(
            help="Give up after this many username prompts.",
            validator=validators.Number(gte=1),
        ),
    ] = None,
    api_url: typ.Annotated[
        str | None, Parameter(help="GitHub REST API base URL.")
    ] = None,
    log_level: typ.Annotated[
        str | None,
        Parameter(
            env_var=LOG_LEVEL_VARIABLE,
            help="Diagnostic log level written to stderr.",
        ),
    ] = None,
) -> int:
    """Verify the token, ask for a user and save their recent public events.

    Returns
    -------
    int
        0 on success, 1 on any failure or when standard input closes.

    Raises
    ------
    SystemExit
        With status 1 when the operator presses Ctrl-C.

    """
    _setup_logging(log_level)
    options = FetchOptions(
        env_file=env_file,
        output_path=output,
        max_attempts=max_attempts,
        api_url=api_url,
    )
    workflow = FetchWorkflow(ConsoleReporter(), options)

    # asyncio.run only installs its own SIGINT handler over the default one
    previous = signal.signal(signal.SIGINT, _abort)
    try:
        return int(asyncio.run(workflow.run()))
    except EOFError:
        return int(ExitCode.FAILURE)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


def main(argv: list[str] | None = None) -> typ.NoReturn:
    """Run the CLI and exit with the command's status."""
    raise SystemExit(app(argv))


if __name__ == "__main__":
    main()
