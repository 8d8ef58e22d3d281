"""Assemble the complete ``types.ts`` module from a validated protocol.

The static parts of the module (the type-fest import, the websocket message
wrapper types) live in the Jinja2 template ``templates/types.ts.j2``. This
module renders the dynamic parts -- enums and the three entity interfaces --
and feeds them to the template.

The single public entry point is :func:`render_document`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from obsgen.generator.entities import (
    EntityFailure,
    generate_event_types,
    generate_method_overrides,
    generate_request_types,
    generate_response_types,
)
from obsgen.generator.enums import GENERATED_ENUMS, generate_protocol_enum
from obsgen.models import Protocol

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
"""Path to the Jinja2 template directory (``obsgen/templates/``)."""

DOCUMENT_TEMPLATE = "types.ts.j2"


@dataclass
class GeneratedDocument:
    """Rendered module source plus any entities skipped in keep-going mode."""

    source: str
    failures: list[EntityFailure] = field(default_factory=list)


def render_document(
    protocol: Protocol,
    strict: bool = True,
    overrides: bool = False,
) -> GeneratedDocument:
    """Render the full TypeScript module for *protocol*.

    Args:
        protocol: The validated, fixed-up protocol document.
        strict: When ``True`` the first schema error propagates. When
            ``False`` failing entities are omitted and reported in
            :attr:`GeneratedDocument.failures`.
        overrides: Also emit the ``call()``/``on()`` overload block.

    Returns:
        The generated document.

    Raises:
        SchemaError: In strict mode, for the first entity that fails to
            compile, or when a required enum section is missing.
    """
    failures: list[EntityFailure] = []
    collect = None if strict else failures

    context = {
        "enums": {name: generate_protocol_enum(protocol, name) for name in GENERATED_ENUMS},
        "event_types": generate_event_types(protocol.events, collect),
        "request_types": generate_request_types(protocol.requests, collect),
        "response_types": generate_response_types(protocol.requests, collect),
        "method_overrides": (
            generate_method_overrides(protocol.requests, protocol.events) if overrides else ""
        ),
    }

    template = _create_jinja_env().get_template(DOCUMENT_TEMPLATE)
    return GeneratedDocument(source=template.render(**context), failures=failures)


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the TypeScript templates.

    Autoescape is disabled for ``.ts.j2`` files (which produce TypeScript,
    not HTML); block trimming keeps control tags from leaving blank lines.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
