"""Shared test fixtures for obsgen.

Provides reusable fixtures for loading the sample protocol document,
building field descriptors, isolating configuration, managing output state,
and running CLI commands. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from obsgen.models import EntityKind, FieldDescriptor, GeneratorConfig, Protocol
from obsgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_PROTOCOL = FIXTURES_DIR / "protocol_sample.json"


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the ``obsgen`` logger after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, and :func:`~obsgen.output.configure_logging` binds a
    handler to the stream that was current when the CLI callback ran. Once
    Typer's CliRunner restores the real streams those references are stale,
    so both are reset here.
    """
    yield
    reset_output()
    logger = logging.getLogger("obsgen")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Protocol fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def protocol_raw() -> dict[str, Any]:
    """Load the raw sample protocol document."""
    with open(SAMPLE_PROTOCOL) as f:
        return json.load(f)


@pytest.fixture
def protocol(protocol_raw: dict[str, Any]) -> Protocol:
    """The validated and fixed-up sample protocol."""
    from obsgen.source.extractor import extract_protocol

    return extract_protocol(protocol_raw)


@pytest.fixture
def make_descriptor() -> Callable[..., FieldDescriptor]:
    """Factory for :class:`FieldDescriptor` records with terse defaults.

    Usage::

        make_descriptor("sceneItems.*.sourceName", "String")
        make_descriptor("overlay", "Boolean", optional=True)
    """

    def _make(
        path: str,
        declared_type: str,
        description: str = "",
        kind: EntityKind = EntityKind.RESPONSE,
        **kwargs: Any,
    ) -> FieldDescriptor:
        return FieldDescriptor(
            path=path,
            declared_type=declared_type,
            description=description,
            kind=kind,
            **kwargs,
        )

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME at a subdirectory of tmp_path, clears the
    environment variables obsgen reads, and changes the working directory
    to tmp_path so that no stray ``obsgen.json`` is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["GH_COMMIT", "GH_TOKEN", "OBSGEN_OUTPUT", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def default_config() -> GeneratorConfig:
    """A GeneratorConfig with every field at its default."""
    return GeneratorConfig()


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
