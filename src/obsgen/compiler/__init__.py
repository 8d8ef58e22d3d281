"""Type compiler -- unflatten field paths, resolve types, emit declarations.

This sub-package is the algorithmic core of obsgen. For each protocol entity
(an event payload, a request's parameters or a request's response) it turns
the flat list of :class:`~obsgen.models.FieldDescriptor` records into a nested
type tree and renders that tree as TypeScript.

Typical usage::

    from obsgen.compiler import build_tree, render

    tree = build_tree(descriptors)
    print(render(tree))

Sub-modules:

* :mod:`~obsgen.compiler.nodes` -- the tagged tree node variants.
* :mod:`~obsgen.compiler.resolver` -- declared type name to node mapping.
* :mod:`~obsgen.compiler.builder` -- depth-ordered path unflattening.
* :mod:`~obsgen.compiler.emitter` -- deterministic TypeScript rendering.
"""

from obsgen.compiler.builder import build_tree
from obsgen.compiler.emitter import format_jsdoc, render
from obsgen.compiler.resolver import resolve_declared_type, resolve_field

__all__ = [
    "build_tree",
    "format_jsdoc",
    "render",
    "resolve_declared_type",
    "resolve_field",
]
