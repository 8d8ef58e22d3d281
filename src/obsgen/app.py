"""Typer application factory and CLI entry point for obsgen.

Commands:

* ``obsgen generate [COMMIT]`` -- fetch (or read) ``protocol.json``, compile
  every entity, optionally lint, and write ``types.ts``.
* ``obsgen show KIND NAME`` -- print the declaration of a single request,
  response or event; handy when diagnosing an upstream schema change.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`obsgen.config`: Configuration precedence resolution.
    :mod:`obsgen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from obsgen import __version__
from obsgen.exceptions import InvalidUsageError, ObsgenError
from obsgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_LINT_ERROR,
    EXIT_SCHEMA_ERROR,
    EXIT_SUCCESS,
)
from obsgen.models import EntityKind
from obsgen.output import debug, error, info, print_source, success, warning


app = typer.Typer(
    name="obsgen",
    help="Compile obs-websocket's protocol.json into TypeScript declarations.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"obsgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~obsgen.output.OutputManager` and routes
    library logging to stderr.
    """
    from obsgen.output import OutputManager, configure_logging, set_output

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)


@app.command("generate")
def generate_command(
    commit: Optional[str] = typer.Argument(
        None,
        help="obs-websocket git ref (branch, tag or sha). Empty or 'latest' "
        "uses the latest release.",
    ),
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Read protocol.json from a file, URL, or '-' for stdin instead of GitHub.",
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Destination of the generated module."
    ),
    lint: Optional[bool] = typer.Option(
        None, "--lint/--no-lint", help="Run eslint --fix over the generated source."
    ),
    overrides: Optional[bool] = typer.Option(
        None, "--overrides/--no-overrides", help="Emit call()/on() overloads."
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        "-k",
        help="Skip entities that fail to compile instead of aborting.",
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the module instead of writing it."
    ),
) -> None:
    """Generate the TypeScript types module.

    Example::

        obsgen generate
        obsgen generate 5.0.1 --output src/types.ts --lint
        obsgen generate --source protocol.json --stdout
    """
    from obsgen.config import resolve_config
    from obsgen.generator import render_document
    from obsgen.lint import format_messages, lint_source
    from obsgen.source import extract_protocol, load_protocol
    from obsgen.writer import write_output

    try:
        config = resolve_config(
            cli_commit=commit,
            cli_output=output_file,
            cli_lint=lint,
            cli_strict=False if keep_going else None,
            cli_overrides=overrides,
        )
        origin = source or f"{config.repository}@{config.commit or 'latest'}"
        debug(f"Generating from {origin}")

        protocol = extract_protocol(load_protocol(source, config))
        info(
            f"Compiling {len(protocol.requests)} requests and "
            f"{len(protocol.events)} events"
        )
        document = render_document(
            protocol, strict=config.strict, overrides=config.overrides
        )
        for failure in document.failures:
            warning(f"Skipped {failure.error}")

        linted = lint_source(document.source, config.output_file, config.lint)

        if to_stdout:
            print_source(linted.output)
        else:
            path = write_output(config.output_file, linted.output)
            success(f"Wrote {path}")
    except ObsgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    exit_code = EXIT_SUCCESS
    if not linted.ok:
        error(format_messages(linted.messages, config.output_file))
        exit_code = EXIT_LINT_ERROR
    if document.failures:
        error(f"{len(document.failures)} entities could not be compiled")
        exit_code = EXIT_SCHEMA_ERROR
    if exit_code != EXIT_SUCCESS:
        raise typer.Exit(code=exit_code)


@app.command("show")
def show_command(
    kind: EntityKind = typer.Argument(..., help="Entity kind: request, response or event."),
    name: str = typer.Argument(..., help="Request or event type, e.g. GetSceneList."),
    commit: Optional[str] = typer.Option(
        None, "--commit", "-c", help="obs-websocket git ref to fetch."
    ),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Read protocol.json from a file, URL, or '-'."
    ),
) -> None:
    """Print the compiled declaration of a single entity.

    Example::

        obsgen show request SetInputSettings --source protocol.json
        obsgen show event SceneItemListReindexed
    """
    from obsgen.config import resolve_config
    from obsgen.generator import compile_entity
    from obsgen.source import extract_protocol, load_protocol

    try:
        config = resolve_config(cli_commit=commit)
        protocol = extract_protocol(load_protocol(source, config))
        fields = _entity_fields(protocol, kind, name)
        print_source(f"{name}: {compile_entity(kind, name, fields)};")
    except ObsgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _entity_fields(protocol: Any, kind: EntityKind, name: str) -> list[Any]:
    """Look up the raw field list of entity *name*.

    Raises:
        InvalidUsageError: If the protocol has no such request or event.
    """
    if kind == EntityKind.EVENT:
        event = protocol.event(name)
        if event is None:
            raise InvalidUsageError(f"Unknown event: {name}")
        return event.data_fields

    request = protocol.request(name)
    if request is None:
        raise InvalidUsageError(f"Unknown request: {name}")
    if kind == EntityKind.REQUEST:
        return request.request_fields
    return request.response_fields


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from obsgen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``obsgen`` console script.

    Unhandled :class:`~obsgen.exceptions.ObsgenError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        if isinstance(exc, ObsgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
