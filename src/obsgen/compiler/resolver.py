"""Resolve declared protocol type names into annotated type tree nodes.

The protocol document spells each leaf's type as one of a small vocabulary:

==================  ===========================================
Declared type       Node
==================  ===========================================
``Boolean``         :class:`~obsgen.compiler.nodes.ScalarNode` (boolean)
``String``          :class:`~obsgen.compiler.nodes.ScalarNode` (string)
``Number``          :class:`~obsgen.compiler.nodes.ScalarNode` (number)
``Object``          empty :class:`~obsgen.compiler.nodes.ObjectNode`
``Any``             :class:`~obsgen.compiler.nodes.OpaqueJsonNode`
``Array<T>``        :class:`~obsgen.compiler.nodes.ArrayNode` of ``T``
==================  ===========================================

Anything else raises :class:`~obsgen.exceptions.UnknownTypeError`.

The two public functions are :func:`resolve_declared_type` (shape only) and
:func:`resolve_field` (shape plus documentation and optionality).
"""

from __future__ import annotations

from typing import Callable, Optional

from obsgen.compiler.nodes import (
    ArrayNode,
    ObjectNode,
    OpaqueJsonNode,
    ScalarKind,
    ScalarNode,
    TypeNode,
)
from obsgen.exceptions import UnknownTypeError
from obsgen.models import EntityKind, FieldDescriptor

_ARRAY_PREFIX = "Array<"
_ARRAY_SUFFIX = ">"

_BASE_TYPES: dict[str, Callable[[], TypeNode]] = {
    "Boolean": lambda: ScalarNode(ScalarKind.BOOLEAN),
    "String": lambda: ScalarNode(ScalarKind.STRING),
    "Number": lambda: ScalarNode(ScalarKind.NUMBER),
    "Object": lambda: ObjectNode(),
    "Any": lambda: OpaqueJsonNode(),
}


def resolve_declared_type(declared_type: str, path: Optional[str] = None) -> TypeNode:
    """Map a declared type name to a fresh, unannotated node.

    ``Array<...>`` wrappers are unwrapped recursively, so
    ``Array<Array<Number>>`` yields an array of arrays of numbers.

    Args:
        declared_type: The ``valueType`` string from the protocol document.
        path: Field path, only used to enrich the error message.

    Returns:
        A new node; callers own it exclusively.

    Raises:
        UnknownTypeError: If the name (or an array's element name) is not in
            the supported vocabulary.
    """
    if declared_type.startswith(_ARRAY_PREFIX) and declared_type.endswith(_ARRAY_SUFFIX):
        inner = declared_type[len(_ARRAY_PREFIX):-len(_ARRAY_SUFFIX)]
        try:
            element = resolve_declared_type(inner, path)
        except UnknownTypeError as exc:
            raise UnknownTypeError(declared_type, path) from exc
        return ArrayNode(element=element)

    factory = _BASE_TYPES.get(declared_type)
    if factory is None:
        raise UnknownTypeError(declared_type, path)
    return factory()


def resolve_field(descriptor: FieldDescriptor) -> TypeNode:
    """Resolve a descriptor into a fully annotated node.

    Documentation comes from the description, one entry per line. Only
    request-parameter descriptors get ``optional`` set and
    ``@restrictions`` / ``@defaultValue`` lines appended; response and event
    descriptors are never marked optional.

    Args:
        descriptor: The flat field record.

    Returns:
        The annotated node, ready to be attached under its leaf name.
    """
    node = resolve_declared_type(descriptor.declared_type, descriptor.path)

    documentation = descriptor.description.split("\n") if descriptor.description else []

    if descriptor.kind == EntityKind.REQUEST:
        node.optional = bool(descriptor.optional)
        if descriptor.restrictions:
            documentation.append(f"@restrictions {descriptor.restrictions}")
        if descriptor.default_behavior:
            documentation.append(f"@defaultValue {descriptor.default_behavior}")

    node.documentation = documentation
    return node
