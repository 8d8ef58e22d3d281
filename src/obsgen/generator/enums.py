"""Render protocol enum sections as TypeScript ``enum`` declarations."""

from __future__ import annotations

from typing import Iterable

from obsgen.compiler.emitter import format_jsdoc
from obsgen.exceptions import SchemaError
from obsgen.models import EnumIdentifier, Protocol

GENERATED_ENUMS: tuple[str, ...] = (
    "WebSocketOpCode",
    "EventSubscription",
    "RequestBatchExecutionType",
)
"""Enum sections of the protocol emitted into ``types.ts``, in output order."""


def generate_enum(name: str, identifiers: Iterable[EnumIdentifier]) -> str:
    """Render one ``export enum`` block.

    Each member gets a JSDoc block with its description, its initial OBS
    version and, when applicable, ``@deprecated``. Values are emitted
    verbatim, so bit-flag expressions such as ``(1 << 3)`` stay expressions.
    """
    lines = [f"export enum {name} {{"]
    for identifier in identifiers:
        jsdoc = [
            *identifier.description.split("\n"),
            "",
            f"Initial OBS Version: {identifier.initial_version}",
        ]
        if identifier.deprecated:
            jsdoc.extend(["", "@deprecated"])
        lines.append(format_jsdoc(jsdoc))
        lines.append(f"{identifier.enum_identifier} = {identifier.enum_value},")
    lines.append("}")
    return "\n".join(lines)


def generate_protocol_enum(protocol: Protocol, name: str) -> str:
    """Render the enum section *name* of *protocol*.

    Raises:
        SchemaError: If the protocol has no such enum section.
    """
    enum_type = protocol.enum(name)
    if enum_type is None:
        raise SchemaError(f"Protocol has no enum named {name}")
    return generate_enum(name, enum_type.enum_identifiers)
