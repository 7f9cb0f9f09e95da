"""gocovtest CLI Commands"""

import functools
import logging
import os
import sys
from typing import List, Optional

import typer

from .config import get_log_level, get_runner_settings, load_config
from .constants import CONFIG_ENV_VAR, LOG_FORMAT
from .errors import CleanupError, ConfigError, ProfileError, SynthesisError, ToolchainError
from .paths import get_config_path, reset_paths_cache
from .process import SubprocessInvoker
from .profile import convert_profiles
from .runner import run_tests

app = typer.Typer(
    name="gocovtest",
    help="Run go test with coverage for every package, including ones without tests.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def get_invoker():
    """Process invoker used for toolchain calls (replaced in tests)."""
    return SubprocessInvoker()


def _emit_error(message: str, suggestion: Optional[str] = None):
    typer.echo(f"Error: {message}", err=True)
    if suggestion:
        typer.echo(f"Suggestion: {suggestion}", err=True)
    raise typer.Exit(1)


def _handle_exception(exc: Exception):
    if isinstance(exc, ConfigError):
        config_path = get_config_path()
        _emit_error(str(exc), f"Check {config_path.name if config_path else 'gocovtest.yml'}")

    if isinstance(exc, ToolchainError):
        if exc.returncode is None:
            _emit_error(str(exc), "Is the go toolchain installed and on PATH?")
        _emit_error(str(exc))

    if isinstance(exc, SynthesisError):
        _emit_error(str(exc), "Check write permissions on the package directory")

    if isinstance(exc, CleanupError):
        _emit_error(str(exc), f"Remove {exc.path} manually")

    if isinstance(exc, ProfileError):
        _emit_error(f"Coverage profile error: {exc}")

    logger.debug("Unhandled error", exc_info=exc)
    _emit_error(str(exc))


def cli_handler(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as exc:
            _handle_exception(exc)

    return wrapper


def _configure_logging(level_name: str):
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        _emit_error(f"Invalid log level: {level_name}", "Use DEBUG, INFO, WARNING or ERROR")
    # stdout is reserved for the coverage report
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("gocovtest").setLevel(level)


@app.callback()
@cli_handler
def main(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gocovtest.yml"),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to config or WARNING)"
    ),
):
    """Global options."""
    if config:
        os.environ[CONFIG_ENV_VAR] = config
        reset_paths_cache()
    _configure_logging(log_level or get_log_level(load_config()))


@app.command(
    help="Run go test with coverage and print the merged JSON report",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
@cli_handler
def test(
    args: Optional[List[str]] = typer.Argument(
        None, help="Package specifiers and go test flags (use -- before flags if needed)"
    ),
):
    """Run go test with coverage and print the merged JSON report."""
    settings = get_runner_settings(load_config())
    report = run_tests(list(args or []), settings=settings, invoker=get_invoker())
    logger.info("Total coverage: %.2f%% of %d statements", report.percent, report.statements)


@app.command(help="Merge existing cover profiles and print the JSON report")
@cli_handler
def convert(
    profiles: List[str] = typer.Argument(..., help="Cover profile files"),
):
    """Merge existing cover profiles and print the JSON report."""
    convert_profiles(profiles)


if __name__ == "__main__":
    app()
