"""Stringify type trees into TypeScript declaration syntax.

Rendering rules, applied recursively:

* scalars render as ``string``, ``number`` and ``boolean``;
* opaque values render as type-fest's ``JsonValue``;
* an object without properties is widened to ``JsonObject``, since the
  protocol did not describe its shape;
* an object with properties renders as a braced member list, each member
  preceded by its JSDoc block and suffixed ``?`` when optional;
* arrays render as ``Array<T>``, except arrays of ``JsonObject`` which use the
  shorter ``JsonObject[]``.

Output is a pure function of the tree, so equal trees always render to
byte-identical text.
"""

from __future__ import annotations

from typing import Iterable

from obsgen.compiler.nodes import (
    ArrayNode,
    ObjectNode,
    OpaqueJsonNode,
    ScalarNode,
    TypeNode,
)

JSON_VALUE = "JsonValue"
JSON_OBJECT = "JsonObject"


def render(node: TypeNode) -> str:
    """Render *node* (usually an entity's root object) as a TypeScript type."""
    if isinstance(node, ObjectNode):
        return _render_object(node)
    if isinstance(node, ArrayNode):
        element = render(node.element)
        if element == JSON_OBJECT:
            return f"{JSON_OBJECT}[]"
        return f"Array<{element}>"
    if isinstance(node, OpaqueJsonNode):
        return JSON_VALUE
    if isinstance(node, ScalarNode):
        return node.kind.value
    raise TypeError(f"Not a type node: {node!r}")


def format_jsdoc(lines: Iterable[str]) -> str:
    """Wrap *lines* in a ``/** ... */`` block, one `` * `` prefix per line."""
    body = [f" * {line}".rstrip() for line in lines]
    return "\n".join(["/**", *body, " */"])


def _render_object(node: ObjectNode) -> str:
    if not node.properties:
        return JSON_OBJECT

    members: list[str] = []
    for name, child in node.properties.items():
        if child.documentation:
            members.append(format_jsdoc(child.documentation))
        separator = "?:" if child.optional else ":"
        members.append(f"{name}{separator} {render(child)};")

    return "\n".join(["{", *members, "}"])
