"""CLI behaviour tests."""
# ruff: noqa: D103

from __future__ import annotations

import contextlib
import http.server
import json
import os
import signal
import subprocess
import sys
import threading
import time
import typing as typ
from pathlib import Path  # noqa: TC003

import pytest

from ghactivity import cli
from ghactivity.config import TOKEN_VARIABLE

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _run_cli(
    args: list[str], cwd: Path, *, stdin: str = ""
) -> subprocess.CompletedProcess[str]:
    env = {key: value for key, value in os.environ.items() if key != TOKEN_VARIABLE}
    return subprocess.run(  # noqa: S603 - fixed argv
        [sys.executable, "-m", "ghactivity", *args],
        cwd=cwd,
        env=env,
        input=stdin,
        text=True,
        capture_output=True,
        timeout=60,
    )


def test_cli_missing_env_file_exits_nonzero(tmp_path: Path) -> None:
    result = _run_cli([], cwd=tmp_path)

    assert result.returncode == 1, result.stderr
    assert "Missing .env file!" in result.stdout
    assert not (tmp_path / "events.json").exists()


def test_cli_missing_token_exits_nonzero(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("UNRELATED=1\n", encoding="utf-8")

    result = _run_cli([], cwd=tmp_path)

    assert result.returncode == 1, result.stderr
    assert "Found .env file!" in result.stdout
    assert f"Missing valid {TOKEN_VARIABLE} credential!" in result.stdout


def test_cli_unreachable_api_exits_nonzero(tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text(f"{TOKEN_VARIABLE}=tok\n", encoding="utf-8")

    result = _run_cli(
        ["--env-file", str(env_file), "--api-url", "http://127.0.0.1:9"],
        cwd=tmp_path,
    )

    assert result.returncode == 1, result.stderr
    assert "Error: ConnectError" in result.stdout


def test_cli_rejects_non_positive_max_attempts(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(f"{TOKEN_VARIABLE}=tok\n", encoding="utf-8")

    result = _run_cli(["--max-attempts", "0"], cwd=tmp_path)

    assert result.returncode != 0
    assert "Found .env file!" not in result.stdout
    assert not (tmp_path / "events.json").exists()


def test_cli_log_level_reads_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: list[str | None] = []
    monkeypatch.setattr(cli, "_setup_logging", seen.append)
    monkeypatch.setenv(cli.LOG_LEVEL_VARIABLE, "debug")

    with contextlib.suppress(SystemExit):
        cli.app(["--env-file", str(tmp_path / "missing.env")])

    assert seen == ["debug"]


class _AuthOnlyHandler(http.server.BaseHTTPRequestHandler):
    """Accept the token and record each requested path."""

    paths: typ.ClassVar[list[str]] = []

    def do_GET(self) -> None:  # noqa: N802
        type(self).paths.append(self.path)
        body = json.dumps({"login": "me", "id": 1}).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Keep request logs out of the test output."""


@pytest.fixture
def auth_only_server() -> cabc.Iterator[tuple[str, list[str]]]:
    """Serve a GitHub stand-in that only answers the credential check."""
    _AuthOnlyHandler.paths = []
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), _AuthOnlyHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}", _AuthOnlyHandler.paths
    finally:
        server.shutdown()
        server.server_close()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required")
def test_cli_sigint_at_username_prompt_exits_nonzero(
    tmp_path: Path, auth_only_server: tuple[str, list[str]]
) -> None:
    api_url, paths = auth_only_server
    (tmp_path / ".env").write_text(f"{TOKEN_VARIABLE}=tok\n", encoding="utf-8")
    env = {key: value for key, value in os.environ.items() if key != TOKEN_VARIABLE}

    proc = subprocess.Popen(  # noqa: S603 - fixed argv
        [sys.executable, "-m", "ghactivity", "--api-url", api_url],
        cwd=tmp_path,
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    try:
        deadline = time.monotonic() + 30
        while "/user" not in paths:
            assert proc.poll() is None, proc.communicate()
            assert time.monotonic() < deadline, "credential check never arrived"
            time.sleep(0.05)
        # Give the process time to reach the blocking prompt.
        time.sleep(1.0)

        proc.send_signal(signal.SIGINT)
        stdout, stderr = proc.communicate(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.communicate()

    assert proc.returncode == 1, stderr
    assert "Client initialized!" in stdout
    assert "Traceback" not in stderr
    assert not (tmp_path / "events.json").exists()


def test_main_exits_with_command_status(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--env-file", str(tmp_path / "missing.env")])

    assert excinfo.value.code == 1
