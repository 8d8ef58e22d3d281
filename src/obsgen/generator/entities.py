"""Compile protocol entities into interface members.

Each request contributes two entities (its parameters and its response) and
each event one (its payload). :func:`compile_entity` runs one entity through
the type compiler; the ``generate_*`` helpers assemble the member lists of the
``OBSEventTypes``, ``OBSRequestTypes`` and ``OBSResponseTypes`` interfaces.

An entity with no fields never reaches the compiler. It is emitted as a fixed
marker instead (``never`` for request parameters, ``undefined`` for responses
and events) so that "no data" stays distinguishable from an opaque
``JsonObject``.

By default the first :class:`~obsgen.exceptions.SchemaError` propagates and
aborts generation. Passing a ``failures`` list switches to keep-going mode:
the failing entity is left out of the interface and recorded as an
:class:`EntityFailure`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from obsgen.compiler import build_tree, format_jsdoc, render
from obsgen.exceptions import SchemaError
from obsgen.models import EntityKind, ProtocolEvent, ProtocolField, ProtocolRequest
from obsgen.source.extractor import field_descriptors

logger = logging.getLogger(__name__)

NO_DATA_MARKERS: dict[EntityKind, str] = {
    EntityKind.EVENT: "undefined",
    EntityKind.REQUEST: "never",
    EntityKind.RESPONSE: "undefined",
}


@dataclass
class EntityFailure:
    """An entity skipped in keep-going mode, with the error that caused it."""

    kind: EntityKind
    name: str
    error: SchemaError


def compile_entity(kind: EntityKind, name: str, fields: Sequence[ProtocolField]) -> str:
    """Compile one entity's raw fields into its TypeScript declaration.

    Args:
        kind: Entity kind; decides the no-data marker and whether optionality
            metadata is honoured.
        name: Request or event type, used to label errors.
        fields: Raw field records in document order.

    Returns:
        The rendered declaration, or the kind's no-data marker when *fields*
        is empty.

    Raises:
        SchemaError: If the fields cannot be compiled. The error carries the
            entity label and the offending field path.
    """
    descriptors = field_descriptors(fields, kind)
    if not descriptors:
        return NO_DATA_MARKERS[kind]

    logger.debug("Compiling %s %s (%d fields)", kind.value, name, len(descriptors))
    try:
        tree = build_tree(descriptors)
    except SchemaError as exc:
        raise exc.with_entity(f"{kind.value} {name}")
    return render(tree)


def generate_event_types(
    events: Iterable[ProtocolEvent],
    failures: Optional[list[EntityFailure]] = None,
) -> str:
    """Render the members of the ``OBSEventTypes`` interface."""
    return _generate_members(
        EntityKind.EVENT,
        ((event.event_type, event.data_fields) for event in events),
        failures,
    )


def generate_request_types(
    requests: Iterable[ProtocolRequest],
    failures: Optional[list[EntityFailure]] = None,
) -> str:
    """Render the members of the ``OBSRequestTypes`` interface."""
    return _generate_members(
        EntityKind.REQUEST,
        ((request.request_type, request.request_fields) for request in requests),
        failures,
    )


def generate_response_types(
    requests: Iterable[ProtocolRequest],
    failures: Optional[list[EntityFailure]] = None,
) -> str:
    """Render the members of the ``OBSResponseTypes`` interface."""
    return _generate_members(
        EntityKind.RESPONSE,
        ((request.request_type, request.response_fields) for request in requests),
        failures,
    )


def generate_method_overrides(
    requests: Iterable[ProtocolRequest],
    events: Iterable[ProtocolEvent],
) -> str:
    """Render documented ``call()`` and ``on()`` overloads for every entity.

    Each overload carries the entity description plus ``@category``,
    ``@initialVersion``, ``@rpcVersion``, ``@complexity`` and, when set,
    ``@deprecated`` tags. Requests without parameters take an optional
    ``requestData?: never``.
    """
    blocks: list[str] = []

    for request in requests:
        jsdoc = _entity_jsdoc(
            request.description,
            request.category,
            request.initial_version,
            request.rpc_version,
            request.complexity,
            request.deprecated,
        )
        if request.request_fields:
            request_data = f"requestData: OBSRequestTypes['{request.request_type}']"
        else:
            request_data = "requestData?: never"
        blocks.append(format_jsdoc(jsdoc))
        blocks.append(
            f"call(requestType: '{request.request_type}', {request_data}): "
            f"Promise<OBSResponseTypes['{request.request_type}']>;"
        )

    for event in events:
        jsdoc = _entity_jsdoc(
            event.description,
            event.category,
            event.initial_version,
            event.rpc_version,
            event.complexity,
            event.deprecated,
        )
        blocks.append(format_jsdoc(jsdoc))
        blocks.append(
            f"on(event: '{event.event_type}', "
            f"listener: (data: OBSEventTypes['{event.event_type}']) => void): this;"
        )

    return "\n".join(blocks)


def _entity_jsdoc(
    description: str,
    category: str,
    initial_version: str,
    rpc_version: str,
    complexity: int,
    deprecated: bool,
) -> list[str]:
    jsdoc = [
        *description.split("\n"),
        "",
        f"@category {category}",
        f"@initialVersion {initial_version}",
        f"@rpcVersion {rpc_version}",
        f"@complexity {complexity}",
    ]
    if deprecated:
        jsdoc.append("@deprecated")
    return jsdoc


def _generate_members(
    kind: EntityKind,
    entities: Iterable[tuple[str, Sequence[ProtocolField]]],
    failures: Optional[list[EntityFailure]],
) -> str:
    members: list[str] = []
    for name, fields in entities:
        try:
            declaration = compile_entity(kind, name, fields)
        except SchemaError as exc:
            if failures is None:
                raise
            logger.debug("Skipping %s", exc)
            failures.append(EntityFailure(kind=kind, name=name, error=exc))
            continue
        members.append(f"{name}: {declaration};")
    return "\n".join(members)
