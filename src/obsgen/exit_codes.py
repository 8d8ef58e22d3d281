"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~obsgen.exceptions.ObsgenError` subclass.
CI jobs that regenerate ``types.ts`` can inspect the exit code to tell an
upstream schema problem apart from a network or lint failure.

Example::

    $ obsgen generate 5.0.1
    $ echo $?
    8   # EXIT_SCHEMA_ERROR -- protocol.json has an unsupported field shape
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_PROTOCOL_LOAD_ERROR = 7
"""The protocol document could not be fetched or parsed."""

EXIT_SCHEMA_ERROR = 8
"""A protocol entity could not be compiled (unknown type or structural conflict)."""

EXIT_LINT_ERROR = 9
"""The linter could not be run or reported remaining problems."""
