"""Validate the raw protocol document and derive compiler input.

:func:`extract_protocol` turns the dict returned by
:func:`~obsgen.source.loader.load_protocol` into a
:class:`~obsgen.models.Protocol`, applying a small table of known upstream
fixups on the way. :func:`field_descriptors` converts one entity's raw field
list into the immutable :class:`~obsgen.models.FieldDescriptor` records that
the type compiler consumes.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from obsgen.exceptions import ProtocolLoadError
from obsgen.models import EntityKind, FieldDescriptor, Protocol, ProtocolField

logger = logging.getLogger(__name__)

# protocol.json 5.0.1 published GetGroupSceneItemList under the wrong name.
_REQUEST_RENAMES: dict[str, str] = {
    "GetGroupItemList": "GetGroupSceneItemList",
}


def extract_protocol(raw: dict[str, Any]) -> Protocol:
    """Validate *raw* and return the fixed-up :class:`~obsgen.models.Protocol`.

    Args:
        raw: The parsed ``protocol.json`` document.

    Returns:
        A validated protocol model. *raw* is not modified.

    Raises:
        ProtocolLoadError: If the document does not match the expected shape.
    """
    try:
        protocol = Protocol.model_validate(raw)
    except ValidationError as exc:
        raise ProtocolLoadError(f"Invalid protocol document: {exc}") from exc

    for request in protocol.requests:
        renamed = _REQUEST_RENAMES.get(request.request_type)
        if renamed is not None:
            logger.debug("Renaming request %s to %s", request.request_type, renamed)
            request.request_type = renamed

    return protocol


def field_descriptors(
    fields: Iterable[ProtocolField],
    kind: EntityKind,
) -> list[FieldDescriptor]:
    """Convert raw protocol fields into descriptors for one entity.

    Optionality, restriction and default-behaviour metadata is carried over
    only for :attr:`EntityKind.REQUEST`; for responses and events it is
    dropped even if the raw record happens to contain it.

    Args:
        fields: The entity's raw field records, in document order.
        kind: Which kind of entity the fields describe.

    Returns:
        Descriptors in the same order as *fields*.
    """
    descriptors: list[FieldDescriptor] = []
    for field in fields:
        if kind == EntityKind.REQUEST:
            descriptors.append(
                FieldDescriptor(
                    path=field.value_name,
                    declared_type=field.value_type,
                    description=field.value_description,
                    kind=kind,
                    optional=field.value_optional,
                    restrictions=field.value_restrictions,
                    default_behavior=field.value_optional_behavior,
                )
            )
        else:
            descriptors.append(
                FieldDescriptor(
                    path=field.value_name,
                    declared_type=field.value_type,
                    description=field.value_description,
                    kind=kind,
                )
            )
    return descriptors
