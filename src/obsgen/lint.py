"""Optional eslint pass over the generated TypeScript source.

The generator emits flat, unindented declarations and relies on the
consuming project's eslint configuration to format them. When enabled,
:func:`lint_source` pipes the source through
``eslint --stdin --fix-dry-run --format json`` and returns the fixed text
together with any problems eslint could not fix.

The linter is an external Node.js tool and is invoked as a subprocess; a
missing binary, a timeout or an unreadable report raise
:class:`~obsgen.exceptions.LintError`.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from typing import Any

from obsgen.exceptions import LintError
from obsgen.models import LintConfig

logger = logging.getLogger(__name__)

_SEVERITY = {1: "warning", 2: "error"}


@dataclass
class LintMessage:
    """A problem reported by eslint that remains after fixing."""

    line: int
    column: int
    severity: str
    message: str
    rule_id: str = ""


@dataclass
class LintResult:
    """Fixed source text and the remaining problems."""

    output: str
    messages: list[LintMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether eslint reported nothing left to fix."""
        return not self.messages


def lint_source(source: str, file_path: str, config: LintConfig) -> LintResult:
    """Run the configured linter over *source*.

    Args:
        source: Generated TypeScript text.
        file_path: Path the source will be written to; eslint uses it to
            pick its configuration and parser.
        config: Linter settings. When ``config.enabled`` is ``False`` the
            source is returned unchanged.

    Returns:
        The fixed source (the original when eslint changed nothing) and the
        remaining messages.

    Raises:
        LintError: If the linter cannot be started, times out, crashes, or
            prints an unreadable report.
    """
    if not config.enabled:
        return LintResult(output=source)

    args = [
        *config.command,
        "--stdin",
        "--stdin-filename",
        file_path,
        "--fix-dry-run",
        "--format",
        "json",
    ]
    logger.debug("Running linter: %s", " ".join(args))

    try:
        result = subprocess.run(
            args,
            input=source,
            capture_output=True,
            text=True,
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise LintError(f"Linter timed out after {config.timeout} seconds") from exc
    except FileNotFoundError as exc:
        raise LintError(f"Linter not found: {config.command[0]}") from exc

    # eslint exits 1 when problems remain and 2 on configuration or internal errors
    if result.returncode not in (0, 1):
        tail = "\n".join(result.stderr.strip().splitlines()[-10:])
        raise LintError(f"Linter failed with exit code {result.returncode}:\n{tail}")

    try:
        report = json.loads(result.stdout or "[]")
    except json.JSONDecodeError as exc:
        raise LintError(f"Unreadable linter report: {exc}") from exc

    if not report:
        return LintResult(output=source)

    entry: dict[str, Any] = report[0]
    return LintResult(
        output=entry.get("output") or source,
        messages=[_parse_message(message) for message in entry.get("messages", [])],
    )


def format_messages(messages: list[LintMessage], file_path: str) -> str:
    """Format remaining problems in eslint's ``stylish`` layout."""
    lines = [file_path]
    for message in messages:
        rule = f"  {message.rule_id}" if message.rule_id else ""
        lines.append(
            f"  {message.line}:{message.column}  {message.severity}  {message.message}{rule}"
        )
    return "\n".join(lines)


def _parse_message(raw: dict[str, Any]) -> LintMessage:
    return LintMessage(
        line=int(raw.get("line", 0)),
        column=int(raw.get("column", 0)),
        severity=_SEVERITY.get(raw.get("severity", 2), "error"),
        message=str(raw.get("message", "")),
        rule_id=raw.get("ruleId") or "",
    )
