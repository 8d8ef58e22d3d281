"""Canonical Pydantic models shared across all obsgen modules.

The models fall into three groups:

**Configuration models** -- read from ``./obsgen.json`` and overridden by
environment variables and CLI flags:
    :class:`LintConfig` and :class:`GeneratorConfig`.

**Protocol document models** -- the shape of obs-websocket's
``protocol.json`` as produced by its documentation generator:
    :class:`EnumIdentifier`, :class:`EnumType`, :class:`ProtocolField`,
    :class:`ProtocolRequest`, :class:`ProtocolEvent` and :class:`Protocol`.

**Compiler input models** -- the normalised, immutable records the type
compiler consumes:
    :class:`EntityKind` and :class:`FieldDescriptor`.

Protocol models accept the upstream camelCase keys through aliases and keep
unknown keys (``extra="allow"``) so that newer documents still validate.
"""

from __future__ import annotations

import enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class LintConfig(BaseModel):
    """Settings for the optional eslint pass over the generated source."""

    enabled: bool = Field(default=False, description="Run the linter with --fix")
    command: list[str] = Field(
        default_factory=lambda: ["npx", "eslint"],
        description="Linter executable and leading arguments",
    )
    timeout: int = Field(default=120, description="Linter timeout in seconds")


class GeneratorConfig(BaseModel):
    """Effective configuration for one ``obsgen generate`` run.

    Built by :func:`~obsgen.config.resolve_config` from defaults, the
    project file, environment variables and CLI flags, in increasing order
    of precedence.
    """

    commit: str = Field(
        default="master",
        description="Git ref of obs-websocket to fetch; empty or 'latest' "
        "resolves the latest release tag",
    )
    repository: str = Field(
        default="obsproject/obs-websocket", description="GitHub owner/name"
    )
    github_token: Optional[str] = Field(
        default=None, description="Token sent as 'Authorization: token ...'"
    )
    output_file: str = Field(
        default="src/types.ts", description="Destination of the generated module"
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    strict: bool = Field(
        default=True, description="Abort the whole run on the first schema error"
    )
    overrides: bool = Field(
        default=False, description="Emit call()/on() overloads for each entity"
    )
    lint: LintConfig = Field(default_factory=LintConfig)


# --- Protocol document ---


class EnumIdentifier(BaseModel):
    """One member of a protocol enum."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    description: str = ""
    enum_identifier: str = Field(alias="enumIdentifier")
    rpc_version: str = Field(default="1", alias="rpcVersion")
    deprecated: bool = False
    initial_version: str = Field(default="", alias="initialVersion")
    enum_value: Union[int, float, str] = Field(alias="enumValue")


class EnumType(BaseModel):
    """A named enum section of the protocol document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    enum_type: str = Field(alias="enumType")
    enum_identifiers: list[EnumIdentifier] = Field(
        default_factory=list, alias="enumIdentifiers"
    )


class ProtocolField(BaseModel):
    """A raw flat field record (request, response, or event data field).

    Request fields additionally carry ``valueRestrictions``,
    ``valueOptional`` and ``valueOptionalBehavior``; for other kinds those
    keys are absent, but are tolerated when present.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    value_name: str = Field(alias="valueName")
    value_type: str = Field(alias="valueType")
    value_description: str = Field(default="", alias="valueDescription")
    value_restrictions: Optional[str] = Field(default=None, alias="valueRestrictions")
    value_optional: Optional[bool] = Field(default=None, alias="valueOptional")
    value_optional_behavior: Optional[str] = Field(
        default=None, alias="valueOptionalBehavior"
    )


class ProtocolRequest(BaseModel):
    """A request definition with its parameter and response field lists."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    description: str = ""
    request_type: str = Field(alias="requestType")
    complexity: int = 1
    rpc_version: str = Field(default="1", alias="rpcVersion")
    deprecated: bool = False
    initial_version: str = Field(default="", alias="initialVersion")
    category: str = ""
    request_fields: list[ProtocolField] = Field(
        default_factory=list, alias="requestFields"
    )
    response_fields: list[ProtocolField] = Field(
        default_factory=list, alias="responseFields"
    )


class ProtocolEvent(BaseModel):
    """An event definition with its payload field list."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    description: str = ""
    event_type: str = Field(alias="eventType")
    event_subscription: str = Field(default="", alias="eventSubscription")
    complexity: int = 1
    rpc_version: str = Field(default="1", alias="rpcVersion")
    deprecated: bool = False
    initial_version: str = Field(default="", alias="initialVersion")
    category: str = ""
    data_fields: list[ProtocolField] = Field(default_factory=list, alias="dataFields")


class Protocol(BaseModel):
    """The complete validated protocol document.

    Produced by :func:`~obsgen.source.extractor.extract_protocol` and
    consumed by :func:`~obsgen.generator.document.render_document`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    enums: list[EnumType] = Field(default_factory=list)
    requests: list[ProtocolRequest] = Field(default_factory=list)
    events: list[ProtocolEvent] = Field(default_factory=list)

    def enum(self, name: str) -> Optional[EnumType]:
        """Return the enum section called *name*, or ``None``."""
        for enum_type in self.enums:
            if enum_type.enum_type == name:
                return enum_type
        return None

    def request(self, name: str) -> Optional[ProtocolRequest]:
        """Return the request called *name*, or ``None``."""
        for request in self.requests:
            if request.request_type == name:
                return request
        return None

    def event(self, name: str) -> Optional[ProtocolEvent]:
        """Return the event called *name*, or ``None``."""
        for event in self.events:
            if event.event_type == name:
                return event
        return None


# --- Compiler input ---


class EntityKind(str, enum.Enum):
    """The three kinds of schema unit compiled into one declaration each."""

    EVENT = "event"
    REQUEST = "request"
    RESPONSE = "response"


class FieldDescriptor(BaseModel):
    """One flat, immutable leaf field fed into the path tree builder.

    ``path`` is dot-separated; a ``*`` segment stands for "element of the
    nearest enclosing array". ``optional``, ``restrictions`` and
    ``default_behavior`` are only meaningful for :attr:`EntityKind.REQUEST`
    descriptors and are ignored by the resolver for the other kinds.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    declared_type: str
    kind: EntityKind
    description: str = ""
    optional: Optional[bool] = None
    restrictions: Optional[str] = None
    default_behavior: Optional[str] = None
