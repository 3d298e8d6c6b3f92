"""Tests for message name, header and trait assignment."""
from __future__ import annotations

from typing import Any

import pytest

from src.asyncapi_prep.messages import (
    STAGE_HEADERS,
    STAGE_NAMES,
    STAGE_TRAITS,
    add_message_trait_ref,
    add_message_trait_refs,
    assign_description,
    build_message_headers,
    get_message_name,
    set_message_headers,
    set_message_names,
)
from src.asyncapi_prep.report import PipelineReport
from src.shared.errors import (
    ComponentNotFoundError,
    MalformedComponentError,
    ReferenceNotSupportedError,
)

EVENT_TYPE = "com.osapiens.assessment.created.v1"


def _document(schemas: dict[str, Any] | None = None, messages: dict[str, Any] | None = None):
    components: dict[str, Any] = {}
    if schemas is not None:
        components["schemas"] = schemas
    if messages is not None:
        components["messages"] = messages
    return {
        "asyncapi": "2.0.0",
        "info": {"title": "Assessments", "version": "1.0.0"},
        "channels": {},
        "components": components,
    }


def _typed_schema(const: str = EVENT_TYPE) -> dict[str, Any]:
    return {"type": "object", "properties": {"type": {"type": "string", "const": const}}}


def _message(schema_name: str = "Osapiens_AssessmentCreated") -> dict[str, Any]:
    return {"payload": {"$ref": f"#/components/schemas/{schema_name}"}}


# ---------------------------------------------------------------------------
# get_message_name
# ---------------------------------------------------------------------------


class TestGetMessageName:
    def test_resolves_type_const(self):
        document = _document(schemas={"Osapiens_AssessmentCreated": _typed_schema()})
        assert get_message_name(document, _message(), "AssessmentCreated") == EVENT_TYPE

    def test_message_reference(self):
        document = _document(schemas={})
        message = {"$ref": "#/components/messages/Other"}
        with pytest.raises(ReferenceNotSupportedError) as exc_info:
            get_message_name(document, message, "AssessmentCreated")
        assert exc_info.value.path == "components.messages.AssessmentCreated"

    @pytest.mark.parametrize("payload", [None, {}, {"type": "object"}])
    def test_no_payload_reference(self, payload):
        document = _document(schemas={})
        message = {} if payload is None else {"payload": payload}
        with pytest.raises(MalformedComponentError, match="has no reference to a payload"):
            get_message_name(document, message, "M")

    def test_non_schema_reference(self):
        document = _document(schemas={})
        message = {"payload": {"$ref": "#/components/messages/M"}}
        with pytest.raises(MalformedComponentError):
            get_message_name(document, message, "M")

    def test_missing_schemas_section(self):
        with pytest.raises(ComponentNotFoundError, match='"schemas"'):
            get_message_name(_document(), _message(), "M")

    def test_schema_not_found(self):
        document = _document(schemas={"Other": _typed_schema()})
        with pytest.raises(MalformedComponentError, match="not found in components.schemas"):
            get_message_name(document, _message(), "M")

    def test_schema_is_reference(self):
        document = _document(
            schemas={"Osapiens_AssessmentCreated": {"$ref": "#/components/schemas/Other"}}
        )
        with pytest.raises(ReferenceNotSupportedError) as exc_info:
            get_message_name(document, _message(), "M")
        assert exc_info.value.path == "components.schemas.Osapiens_AssessmentCreated"

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object"},
            {"type": "object", "properties": {}},
            {"type": "object", "properties": {"type": {"type": "string"}}},
            {"type": "object", "properties": {"type": {"const": ""}}},
        ],
    )
    def test_no_type_defined(self, schema):
        document = _document(schemas={"Osapiens_AssessmentCreated": schema})
        with pytest.raises(
            MalformedComponentError,
            match="Schema Osapiens_AssessmentCreated has no type defined",
        ):
            get_message_name(document, _message(), "M")


class TestSetMessageNames:
    def test_sets_names_and_skips_failures(self):
        document = _document(
            schemas={"Osapiens_AssessmentCreated": _typed_schema(), "Untyped": {"type": "object"}},
            messages={"Good": _message(), "Bad": _message("Untyped")},
        )
        report = PipelineReport(command="for-import")
        resolved = set_message_names(document, report)
        assert resolved == {"Good": EVENT_TYPE}
        assert document["components"]["messages"]["Good"]["name"] == EVENT_TYPE
        assert "name" not in document["components"]["messages"]["Bad"]
        assert report.is_skipped(STAGE_NAMES, "Bad")

    def test_missing_schemas_is_fatal(self):
        document = _document(messages={"Good": _message()})
        with pytest.raises(ComponentNotFoundError):
            set_message_names(document, PipelineReport(command="for-import"))

    def test_missing_messages(self):
        with pytest.raises(ComponentNotFoundError, match='"messages"'):
            set_message_names(_document(schemas={}), PipelineReport(command="for-import"))


# ---------------------------------------------------------------------------
# headers and traits
# ---------------------------------------------------------------------------


class TestMessageHeaders:
    def test_build(self):
        assert build_message_headers(EVENT_TYPE) == {
            "properties": {
                "type": {"const": EVENT_TYPE},
                "datacontenttype": {"const": "application/json"},
            }
        }

    def test_only_resolved_messages_get_headers(self):
        document = _document(
            schemas={},
            messages={
                "Good": _message(),
                "Bad": _message(),
                "Ref": {"$ref": "#/components/messages/Good"},
            },
        )
        report = PipelineReport(command="for-import")
        set_message_headers(document, {"Good": EVENT_TYPE}, report)
        messages = document["components"]["messages"]
        assert messages["Good"]["headers"]["properties"]["type"]["const"] == EVENT_TYPE
        assert "headers" not in messages["Bad"]
        assert messages["Ref"] == {"$ref": "#/components/messages/Good"}
        assert report.is_skipped(STAGE_HEADERS, "Bad")
        assert report.is_skipped(STAGE_HEADERS, "Ref")

    def test_headers_replaced(self):
        message = {**_message(), "headers": {"properties": {"old": {}}}}
        document = _document(schemas={}, messages={"M": message})
        set_message_headers(document, {"M": EVENT_TYPE}, PipelineReport(command="for-import"))
        assert "old" not in message["headers"]["properties"]


class TestMessageTraits:
    def test_add_trait_ref(self):
        message = add_message_trait_ref(_message(), "M")
        assert message["traits"] == [{"$ref": "#/components/messageTraits/CloudEventContext"}]

    def test_existing_traits_replaced(self):
        message = {**_message(), "traits": [{"$ref": "#/components/messageTraits/Legacy"}]}
        add_message_trait_ref(message, "M")
        assert message["traits"] == [{"$ref": "#/components/messageTraits/CloudEventContext"}]

    def test_reference_message_rejected(self):
        with pytest.raises(ReferenceNotSupportedError):
            add_message_trait_ref({"$ref": "#/components/messages/Other"}, "M")

    def test_add_trait_refs_skips_references(self):
        document = _document(
            schemas={},
            messages={"A": _message(), "B": {"$ref": "#/components/messages/A"}},
        )
        report = PipelineReport(command="for-import")
        add_message_trait_refs(document, report)
        assert "traits" in document["components"]["messages"]["A"]
        assert report.is_skipped(STAGE_TRAITS, "B")


class TestAssignDescription:
    def test_sets_description(self):
        document = _document()
        assign_description(document, "Assessment events")
        assert document["info"] == {
            "title": "Assessments",
            "version": "1.0.0",
            "description": "Assessment events",
        }

    def test_overwrites_description(self):
        document = _document()
        document["info"]["description"] = "old"
        assign_description(document, "new")
        assert document["info"]["description"] == "new"

    def test_missing_info(self):
        with pytest.raises(ComponentNotFoundError, match='"info"'):
            assign_description({"asyncapi": "2.0.0"}, "x")
