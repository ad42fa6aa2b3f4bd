import pytest

from advisory_board.registry import default_registry, normalize_advisor_id
from advisory_board.tools import (
    ParameterSpec,
    ToolDescriptor,
    ToolValidationError,
    build_catalog,
    validate_arguments,
)

IDS = default_registry().ids()
CATALOG = {descriptor.name: descriptor for descriptor in build_catalog(IDS)}


def test_catalog_names_and_order() -> None:
    assert [d.name for d in build_catalog(IDS)] == [
        "hold_board_meeting",
        "get_advisor_advice",
        "crisis_response",
        "list_advisors",
        "get_advisor_info",
    ]


def test_board_meeting_schema() -> None:
    schema = CATALOG["hold_board_meeting"].input_schema()
    assert schema["type"] == "object"
    assert schema["required"] == ["topic", "background", "advisors"]
    advisors = schema["properties"]["advisors"]
    assert advisors["type"] == "array"
    assert advisors["items"]["enum"] == list(IDS)
    assert advisors["minItems"] == 1


def test_list_advisors_schema_is_empty_object() -> None:
    assert CATALOG["list_advisors"].input_schema() == {
        "type": "object",
        "properties": {},
        "required": [],
    }


def test_missing_fields_are_reported_together() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        validate_arguments(CATALOG["hold_board_meeting"], {"advisors": ["tim_cook"]})
    assert excinfo.value.fields == ("topic", "background")


def test_missing_topic_only() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        validate_arguments(
            CATALOG["hold_board_meeting"],
            {"background": "bg", "advisors": ["tim_cook"]},
        )
    assert excinfo.value.fields == ("topic",)
    assert excinfo.value.field == "topic"


def test_alias_fills_canonical_name() -> None:
    validated = validate_arguments(
        CATALOG["hold_board_meeting"],
        {"topic": "t", "context": "ctx", "advisors": ["tim_cook"]},
        normalize=normalize_advisor_id,
    )
    assert validated["background"] == "ctx"
    assert "context" not in validated


def test_enum_values_are_normalized_in_order_with_duplicates() -> None:
    validated = validate_arguments(
        CATALOG["hold_board_meeting"],
        {"topic": "t", "background": "b", "advisors": ["Maya Angelou", "tim-cook", "maya_angelou"]},
        normalize=normalize_advisor_id,
    )
    assert validated["advisors"] == ["maya_angelou", "tim_cook", "maya_angelou"]


def test_enum_rejects_unknown_value() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        validate_arguments(
            CATALOG["hold_board_meeting"],
            {"topic": "t", "background": "b", "advisors": ["nonexistent_person"]},
            normalize=normalize_advisor_id,
        )
    assert excinfo.value.fields == ("advisors",)


def test_empty_advisor_list_is_rejected() -> None:
    with pytest.raises(ToolValidationError):
        validate_arguments(
            CATALOG["hold_board_meeting"], {"topic": "t", "background": "b", "advisors": []}
        )


def test_wrong_types_are_rejected() -> None:
    with pytest.raises(ToolValidationError):
        validate_arguments(
            CATALOG["hold_board_meeting"], {"topic": 3, "background": "b", "advisors": ["tim_cook"]}
        )
    with pytest.raises(ToolValidationError):
        validate_arguments(
            CATALOG["hold_board_meeting"], {"topic": "t", "background": "b", "advisors": "tim_cook"}
        )


def test_empty_strings_and_extra_arguments_are_accepted() -> None:
    validated = validate_arguments(
        CATALOG["get_advisor_advice"],
        {"advisor": "tim_cook", "situation": "", "unexpected": 1},
    )
    assert validated == {"advisor": "tim_cook", "situation": ""}


def test_none_arguments_mean_empty() -> None:
    assert validate_arguments(CATALOG["list_advisors"], None) == {}


def test_parameter_kind_is_checked() -> None:
    with pytest.raises(ValueError):
        ParameterSpec("x", "bad kind", kind="number")


def test_descriptor_to_dict() -> None:
    descriptor = ToolDescriptor("ping", "Ping", (ParameterSpec("note", "Note", required=False),))
    assert descriptor.to_dict() == {
        "name": "ping",
        "description": "Ping",
        "inputSchema": {
            "type": "object",
            "properties": {"note": {"type": "string", "description": "Note"}},
            "required": [],
        },
    }
