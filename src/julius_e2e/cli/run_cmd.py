"""``julius-e2e run``: run the browser suite through pytest.

pytest runs in a subprocess so overrides reach the suite as
``JULIUS_E2E_*`` environment variables, the same way CI sets them.
Failed tests are re-run with ``--last-failed`` up to ``run.retries`` times.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Optional

import typer
from pytest import ExitCode
from rich.console import Console

from julius_e2e.settings import Settings, get_settings

logger = logging.getLogger(__name__)
console = Console()


def build_pytest_command(paths: list[str], keyword: str | None = None, *, last_failed: bool = False) -> list[str]:
    command = [sys.executable, "-m", "pytest", *paths]
    if keyword:
        command += ["-k", keyword]
    if last_failed:
        command += ["--last-failed", "--last-failed-no-failures", "none"]
    return command


def build_env(*, headed: bool = False, browser: str | None = None, env_name: str | None = None) -> dict[str, str]:
    """Environment for the pytest subprocess with the suite switched on."""
    env = dict(os.environ)
    env["JULIUS_E2E_RUN__ENABLED"] = "true"
    if headed:
        env["JULIUS_E2E_BROWSER__HEADLESS"] = "false"
    if browser:
        env["JULIUS_E2E_BROWSER__NAME"] = browser
    if env_name:
        env["JULIUS_E2E_ENV"] = env_name
    return env


def run_tests(
    paths: Optional[list[str]] = typer.Argument(None, help="Test files or directories. Defaults to run.test_dir."),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window."),
    browser: Optional[str] = typer.Option(None, "--browser", "-b", help="chromium, firefox or webkit."),
    keyword: Optional[str] = typer.Option(None, "-k", help="Only run tests matching this pytest expression."),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", min=0, help="Re-runs of failed tests."),
    env_name: Optional[str] = typer.Option(None, "--env", help="Settings profile (local, ci, ...)."),
) -> None:
    """Run the e2e suite and re-run failures."""
    settings = Settings(env=env_name) if env_name else get_settings()
    max_reruns = settings.run.retries if retries is None else retries
    targets = list(paths) if paths else [settings.run.test_dir]
    env = build_env(headed=headed, browser=browser, env_name=env_name)

    logger.info("Running %s against %s (env=%s)", " ".join(targets), settings.app.base_url, settings.env)
    code = subprocess.call(build_pytest_command(targets, keyword), env=env, cwd=settings.project_root)

    rerun = 0
    while code == ExitCode.TESTS_FAILED and rerun < max_reruns:
        rerun += 1
        console.print(f"[yellow]Re-running failed tests ({rerun}/{max_reruns})[/yellow]")
        code = subprocess.call(
            build_pytest_command(targets, keyword, last_failed=True),
            env=env,
            cwd=settings.project_root,
        )

    if code != ExitCode.OK:
        console.print(f"[red]Suite failed (pytest exit code {code}).[/red]")
        raise typer.Exit(code=int(code))

    console.print("[green]Suite passed.[/green]")
