"""Tests for obsgen.generator.document."""

from __future__ import annotations

import pytest

from obsgen.exceptions import SchemaError, UnknownTypeError
from obsgen.generator.document import TEMPLATE_DIR, render_document
from obsgen.models import Protocol, ProtocolRequest


def _section(source: str, interface: str) -> str:
    """Return the body of ``export interface <interface> { ... }``."""
    start = source.index(f"export interface {interface} {{")
    end = source.index("\n}\n", start)
    return source[start:end]


def _broken(protocol: Protocol) -> Protocol:
    broken = protocol.model_copy(deep=True)
    broken.requests.append(
        ProtocolRequest.model_validate({
            "requestType": "GetBroken",
            "responseFields": [
                {"valueName": "value", "valueType": "String"},
                {"valueName": "value.inner", "valueType": "String"},
            ],
        })
    )
    return broken


class TestRenderDocument:
    """The full types.ts module."""

    def test_template_shipped(self) -> None:
        assert (TEMPLATE_DIR / "types.ts.j2").is_file()

    def test_header_and_import(self, protocol: Protocol) -> None:
        source = render_document(protocol).source
        assert source.startswith("/**\n * This file is autogenerated")
        assert "import {Merge, JsonArray, JsonObject, JsonValue} from 'type-fest';" in source
        assert source.endswith("\n")

    def test_enums_in_order(self, protocol: Protocol) -> None:
        source = render_document(protocol).source
        positions = [
            source.index("export enum WebSocketOpCode {"),
            source.index("export enum EventSubscription {"),
            source.index("export enum RequestBatchExecutionType {"),
        ]
        assert positions == sorted(positions)
        assert "/* eslint-disable no-bitwise" in source

    def test_interfaces_indented(self, protocol: Protocol) -> None:
        source = render_document(protocol).source
        events = _section(source, "OBSEventTypes")
        assert "\tExitStarted: undefined;" in events
        assert "\tCurrentProgramSceneChanged: {\n\t/**" in events

        requests = _section(source, "OBSRequestTypes")
        assert "\tGetVersion: never;" in requests
        assert "\toverlay?: boolean;" in requests
        assert "\t * @restrictions >= 0, <= 20" in requests

        responses = _section(source, "OBSResponseTypes")
        assert "\tSetInputSettings: undefined;" in responses
        assert "\tmonitors: Array<{" in responses

    def test_renamed_request_in_output(self, protocol: Protocol) -> None:
        source = render_document(protocol).source
        assert "GetGroupSceneItemList" in source
        assert "GetGroupItemList" not in source

    def test_deterministic(self, protocol: Protocol) -> None:
        assert render_document(protocol).source == render_document(protocol).source

    def test_no_overrides_by_default(self, protocol: Protocol) -> None:
        assert "declare module './base'" not in render_document(protocol).source

    def test_overrides_block(self, protocol: Protocol) -> None:
        source = render_document(protocol, overrides=True).source
        assert "declare module './base' {" in source
        assert "\t\tcall(requestType: 'GetVersion', requestData?: never)" in source
        assert "\t\ton(event: 'ExitStarted'" in source

    def test_strict_raises(self, protocol: Protocol) -> None:
        with pytest.raises(SchemaError) as exc_info:
            render_document(_broken(protocol))
        assert exc_info.value.entity == "response GetBroken"

    def test_keep_going_omits_and_reports(self, protocol: Protocol) -> None:
        document = render_document(_broken(protocol), strict=False)
        assert [f.name for f in document.failures] == ["GetBroken"]
        responses = _section(document.source, "OBSResponseTypes")
        assert "GetBroken" not in responses
        # the request side compiled fine
        assert "\tGetBroken: never;" in _section(document.source, "OBSRequestTypes")

    def test_missing_enum_is_fatal(self) -> None:
        with pytest.raises(SchemaError, match="no enum named"):
            render_document(Protocol(), strict=False)

    def test_unknown_type_in_event(self, protocol: Protocol) -> None:
        broken = protocol.model_copy(deep=True)
        broken.events[1].data_fields[0].value_type = "Scene"
        with pytest.raises(UnknownTypeError):
            render_document(broken)
