"""Protocol source -- load ``protocol.json`` and extract compiler input.

Typical usage::

    from obsgen.source import load_protocol, extract_protocol

    raw = load_protocol(None, config)        # fetch from GitHub
    protocol = extract_protocol(raw)

Sub-modules:

* :mod:`~obsgen.source.loader` -- I/O layer (GitHub, URL, file, stdin) plus
  JSON/YAML format detection.
* :mod:`~obsgen.source.extractor` -- Validation into
  :class:`~obsgen.models.Protocol` and conversion of field lists into
  :class:`~obsgen.models.FieldDescriptor` records.
"""

from obsgen.source.extractor import extract_protocol, field_descriptors
from obsgen.source.loader import fetch_protocol, load_protocol

__all__ = ["load_protocol", "fetch_protocol", "extract_protocol", "field_descriptors"]
