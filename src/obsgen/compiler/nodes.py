"""Type tree node variants.

A type tree is the nested form of one entity's flat field list. It is built
by :func:`~obsgen.compiler.builder.build_tree`, annotated leaf by leaf by
:func:`~obsgen.compiler.resolver.resolve_field`, and stringified by
:func:`~obsgen.compiler.emitter.render`.

Variants:

* :class:`ScalarNode` -- ``string``, ``number`` or ``boolean``.
* :class:`OpaqueJsonNode` -- any JSON value.
* :class:`ObjectNode` -- insertion-ordered named properties.
* :class:`ArrayNode` -- a single element node.

Nodes are mutable dataclasses because the builder grows
:attr:`ObjectNode.properties` in place while walking paths. A tree owns all of
its nodes; nothing is shared between trees.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class ScalarKind(str, enum.Enum):
    """Primitive kinds, valued by their TypeScript spelling."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass
class ScalarNode:
    """A primitive leaf."""

    kind: ScalarKind
    optional: bool = False
    documentation: list[str] = field(default_factory=list)


@dataclass
class OpaqueJsonNode:
    """An unconstrained JSON value (declared type ``Any``)."""

    optional: bool = False
    documentation: list[str] = field(default_factory=list)


@dataclass
class ObjectNode:
    """An object whose properties keep their insertion order."""

    properties: dict[str, "TypeNode"] = field(default_factory=dict)
    optional: bool = False
    documentation: list[str] = field(default_factory=list)


@dataclass
class ArrayNode:
    """An array of ``element``.

    ``optional`` on the element itself carries no meaning.
    """

    element: "TypeNode"
    optional: bool = False
    documentation: list[str] = field(default_factory=list)


TypeNode = Union[ScalarNode, OpaqueJsonNode, ObjectNode, ArrayNode]


def describe_node(node: TypeNode) -> str:
    """Return a short, human-readable label for *node* used in error messages."""
    if isinstance(node, ScalarNode):
        return f"scalar {node.kind.value}"
    if isinstance(node, OpaqueJsonNode):
        return "opaque JSON value"
    if isinstance(node, ObjectNode):
        names = ", ".join(node.properties) or "no properties"
        return f"object ({names})"
    return f"array of {describe_node(node.element)}"
