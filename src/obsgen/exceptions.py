"""Exception hierarchy for obsgen.

All exceptions inherit from :class:`ObsgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`obsgen.exit_codes`.
The top-level error handler in :func:`obsgen.app.main` catches
``ObsgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ObsgenError (exit 1)
    +-- InvalidUsageError            (exit 2)
    +-- ProtocolLoadError            (exit 7)
    +-- SchemaError                  (exit 8)
    |   +-- UnknownTypeError
    |   +-- StructuralConflictError
    |       +-- WildcardPlacementError
    +-- LintError                    (exit 9)
    +-- ConfigError                  (exit 1)
"""

from __future__ import annotations

from typing import Optional

from obsgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LINT_ERROR,
    EXIT_PROTOCOL_LOAD_ERROR,
    EXIT_SCHEMA_ERROR,
)


class ObsgenError(Exception):
    """Base exception for all obsgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`obsgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ObsgenError):
    """Raised for invalid CLI arguments (unknown entity kind or name)."""

    exit_code = EXIT_INVALID_USAGE


class ProtocolLoadError(ObsgenError):
    """Raised when ``protocol.json`` cannot be fetched, read, or validated."""

    exit_code = EXIT_PROTOCOL_LOAD_ERROR


class SchemaError(ObsgenError):
    """Raised when a protocol entity cannot be compiled into a type tree.

    Carries the offending field ``path`` and, once the error has bubbled up
    through :func:`~obsgen.generator.entities.compile_entity`, the ``entity``
    label (e.g. ``"request GetSceneList"``) so a human can cross-reference
    the upstream document.

    Args:
        message: Description of the violated rule.
        path: Dotted field path that triggered the error, if any.
        entity: Entity label, usually attached later via :meth:`with_entity`.
    """

    exit_code = EXIT_SCHEMA_ERROR

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        entity: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.entity = entity

    def with_entity(self, entity: str) -> "SchemaError":
        """Attach the entity label and return ``self`` for re-raising."""
        self.entity = entity
        return self

    def __str__(self) -> str:
        prefix = f"{self.entity}: " if self.entity else ""
        return f"{prefix}{self.message}"


class UnknownTypeError(SchemaError):
    """Raised when a field declares a type outside the supported vocabulary."""

    def __init__(self, declared_type: str, path: Optional[str] = None):
        where = f" (field '{path}')" if path else ""
        super().__init__(f"Unknown type: {declared_type}{where}", path=path)
        self.declared_type = declared_type


class StructuralConflictError(SchemaError):
    """Raised when field paths imply conflicting shapes for one tree position.

    Example: ``foo`` declared as a ``String`` leaf while ``foo.bar`` requires
    ``foo`` to be an object.
    """


class WildcardPlacementError(StructuralConflictError):
    """Raised for a trailing ``*`` leaf, or ``*`` under a non array-of-object node."""


class LintError(ObsgenError):
    """Raised when the configured linter cannot run or returns unusable output."""

    exit_code = EXIT_LINT_ERROR


class ConfigError(ObsgenError):
    """Raised for configuration problems (invalid ``obsgen.json``, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
