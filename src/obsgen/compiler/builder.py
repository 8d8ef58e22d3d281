"""Unflatten an entity's dotted field paths into a nested type tree.

The protocol document lists every leaf of a request, response or event as a
flat record whose ``valueName`` is a dotted path, for example::

    sceneItems             Array<Object>
    sceneItems.*.sourceName String
    sceneItems.*.sceneItemId Number

:func:`build_tree` turns such a list into one rooted
:class:`~obsgen.compiler.nodes.ObjectNode`. Descriptors are processed in
ascending path depth (stable, so equal-depth records keep their input order),
which guarantees that every ancestor is declared or synthesized before it is
descended into. Missing containers are synthesized on the way down: an
``ArrayNode`` of an empty object when the next segment is ``*``, an empty
``ObjectNode`` otherwise.
A synthesized container takes its place among its siblings when its first
descendant is inserted, so its position follows the input order of that
descendant rather than of a declaration.

Any path that would reuse a tree position with a different shape raises
:class:`~obsgen.exceptions.StructuralConflictError`; misplaced wildcards raise
its :class:`~obsgen.exceptions.WildcardPlacementError` subclass. The whole
entity is abandoned in both cases.
"""

from __future__ import annotations

import logging
from typing import Iterable

from obsgen.compiler.nodes import ArrayNode, ObjectNode, TypeNode, describe_node
from obsgen.compiler.resolver import resolve_field
from obsgen.exceptions import StructuralConflictError, WildcardPlacementError
from obsgen.models import FieldDescriptor

logger = logging.getLogger(__name__)

WILDCARD = "*"
"""Path segment meaning "element of the enclosing array"."""


def build_tree(descriptors: Iterable[FieldDescriptor]) -> ObjectNode:
    """Build the type tree for one entity.

    Args:
        descriptors: Every field descriptor of the entity. Paths are expected
            to be unique; a repeated path silently replaces the earlier leaf.

    Returns:
        The synthesized root object.

    Raises:
        StructuralConflictError: If two paths disagree about the shape of a
            position, or a wildcard is used where no array of objects exists.
        UnknownTypeError: If a leaf declares an unsupported type.
    """
    root = ObjectNode()
    for descriptor in sorted(descriptors, key=path_depth):
        _insert(root, descriptor)
    return root


def path_depth(descriptor: FieldDescriptor) -> int:
    """Return the number of ``.`` separators in the descriptor's path."""
    return descriptor.path.count(".")


def _insert(root: ObjectNode, descriptor: FieldDescriptor) -> None:
    """Walk (and grow) the tree along *descriptor*'s path and attach its leaf."""
    *parents, leaf = descriptor.path.split(".")
    current: TypeNode = root

    for index, segment in enumerate(parents):
        if segment == WILDCARD:
            if not (
                isinstance(current, ArrayNode) and isinstance(current.element, ObjectNode)
            ):
                raise WildcardPlacementError(
                    f"Wildcard in '{descriptor.path}' requires an array of objects, "
                    f"found {describe_node(current)}",
                    path=descriptor.path,
                )
            current = current.element
            continue

        if not isinstance(current, ObjectNode):
            raise StructuralConflictError(
                f"Cannot descend into '{segment}' of '{descriptor.path}': "
                f"parent is {describe_node(current)}, not an object",
                path=descriptor.path,
            )

        child = current.properties.get(segment)
        if child is None:
            if index + 1 < len(parents) and parents[index + 1] == WILDCARD:
                child = ArrayNode(element=ObjectNode())
            else:
                child = ObjectNode()
            logger.debug("Synthesized %s for '%s'", describe_node(child), segment)
            current.properties[segment] = child
        current = child

    if leaf == WILDCARD:
        raise WildcardPlacementError(
            f"Trailing wildcard in '{descriptor.path}' is not supported; "
            "declare the parent with an Array<...> type instead",
            path=descriptor.path,
        )

    if not isinstance(current, ObjectNode):
        raise StructuralConflictError(
            f"Cannot attach '{leaf}' of '{descriptor.path}': "
            f"parent is {describe_node(current)}, not an object",
            path=descriptor.path,
        )

    if leaf in current.properties:
        logger.debug("Field '%s' declared more than once; keeping the last", descriptor.path)
    current.properties[leaf] = resolve_field(descriptor)
