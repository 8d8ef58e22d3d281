"""TypeScript module generator -- enums, entity interfaces, and the full document.

Takes a :class:`~obsgen.models.Protocol` and produces the source of
``types.ts``.

Sub-modules:

* :mod:`~obsgen.generator.enums` -- ``export enum`` blocks for protocol enums.
* :mod:`~obsgen.generator.entities` -- per-entity compilation and the members
  of the event, request and response interfaces.
* :mod:`~obsgen.generator.document` -- template-based assembly of the module.
"""

from obsgen.generator.document import GeneratedDocument, render_document
from obsgen.generator.entities import EntityFailure, compile_entity

__all__ = ["render_document", "GeneratedDocument", "compile_entity", "EntityFailure"]
