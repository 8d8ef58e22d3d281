"""obsgen -- Compile the obs-websocket protocol description into TypeScript types.

This package reads the machine-generated ``protocol.json`` published by
obs-websocket, in which every request, response and event field is listed
flat as a dotted path (``sceneItem.source.name``) with a declared type, and
turns it into a ``types.ts`` module of nested TypeScript declarations for a
typed websocket client.

Typical workflow::

    obsgen generate                  # fetch master, write src/types.ts
    obsgen generate 5.0.1 --lint     # pin a tag and run eslint --fix
    obsgen show request GetSceneList # print one entity's declaration

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for configuration and the protocol document.
    config: Project config and environment precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting with Rich support.
    compiler: Path tree builder, type resolver and declaration emitter.
    source: Protocol loading (GitHub, URL, file, stdin) and validation.
    generator: Enum, entity interface and full document rendering.
    lint: Optional eslint pass over the generated source.
    writer: Atomic output file writes.
"""

__version__ = "0.3.0"
