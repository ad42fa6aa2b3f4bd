"""Tool descriptors, JSON schemas and argument validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

HOLD_BOARD_MEETING = "hold_board_meeting"
GET_ADVISOR_ADVICE = "get_advisor_advice"
CRISIS_RESPONSE = "crisis_response"
LIST_ADVISORS = "list_advisors"
GET_ADVISOR_INFO = "get_advisor_info"

_KINDS = {"string", "array"}


class ToolValidationError(ValueError):
    """Raised when tool arguments do not match the declared schema."""

    def __init__(self, fields: tuple[str, ...] | list[str], reason: str):
        self.fields = tuple(fields)
        self.reason = reason
        super().__init__(f"{reason}: {', '.join(self.fields)}")

    @property
    def field(self) -> str:
        return self.fields[0]


class UnknownToolError(LookupError):
    """Raised when a call names a tool that is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    description: str
    kind: str = "string"  # string | array (of strings)
    required: bool = True
    enum: tuple[str, ...] | None = None
    aliases: tuple[str, ...] = ()
    min_items: int = 0

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"kind must be one of {sorted(_KINDS)}")

    def json_schema(self) -> dict[str, Any]:
        if self.kind == "array":
            items: dict[str, Any] = {"type": "string"}
            if self.enum is not None:
                items["enum"] = list(self.enum)
            schema: dict[str, Any] = {
                "type": "array",
                "items": items,
                "description": self.description,
            }
            if self.min_items:
                schema["minItems"] = self.min_items
            return schema

        schema = {"type": "string", "description": self.description}
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {param.name: param.json_schema() for param in self.parameters},
            "required": [param.name for param in self.parameters if param.required],
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


def build_catalog(advisor_ids: tuple[str, ...]) -> tuple[ToolDescriptor, ...]:
    """Return the fixed tool catalog with advisor enums taken from the registry."""
    return (
        ToolDescriptor(
            name=HOLD_BOARD_MEETING,
            description="Hold a virtual meeting with your advisory board on any business topic",
            parameters=(
                ParameterSpec("topic", "The main topic or decision you want to discuss"),
                ParameterSpec(
                    "background",
                    "Background context for the advisors",
                    aliases=("context",),
                ),
                ParameterSpec(
                    "advisors",
                    "Which advisors to include, in speaking order (pick 2-4 for best results)",
                    kind="array",
                    enum=advisor_ids,
                    min_items=1,
                ),
            ),
        ),
        ToolDescriptor(
            name=GET_ADVISOR_ADVICE,
            description="Get advice from a single advisor on your situation",
            parameters=(
                ParameterSpec(
                    "advisor",
                    f"Advisor identifier, one of: {', '.join(advisor_ids)}",
                    aliases=("advisor_id",),
                ),
                ParameterSpec("situation", "Describe the situation you need advice on"),
                ParameterSpec(
                    "specific_question",
                    "Optional specific question for the advisor",
                    required=False,
                ),
            ),
        ),
        ToolDescriptor(
            name=CRISIS_RESPONSE,
            description="Get an immediate crisis response plan from the full advisory board",
            parameters=(
                ParameterSpec("crisis_description", "What is happening right now?"),
                ParameterSpec("immediate_concerns", "What worries you most in the next 48 hours?"),
            ),
        ),
        ToolDescriptor(
            name=LIST_ADVISORS,
            description="See all available advisors for your board meetings",
        ),
        ToolDescriptor(
            name=GET_ADVISOR_INFO,
            description="Get information about any advisor",
            parameters=(
                ParameterSpec(
                    "advisor",
                    f"Advisor identifier, one of: {', '.join(advisor_ids)}",
                    aliases=("advisor_id",),
                ),
            ),
        ),
    )


def _pick(arguments: Mapping[str, Any], param: ParameterSpec) -> tuple[bool, Any]:
    for key in (param.name, *param.aliases):
        if key in arguments and arguments[key] is not None:
            return True, arguments[key]
    return False, None


def _check_enum(
    param: ParameterSpec, value: str, normalize: Callable[[str], str] | None
) -> str:
    if param.enum is None:
        return value
    candidate = normalize(value) if normalize else value
    if candidate not in param.enum:
        raise ToolValidationError(
            (param.name,),
            f"'{value}' is not one of {', '.join(param.enum)}",
        )
    return candidate


def validate_arguments(
    descriptor: ToolDescriptor,
    arguments: Mapping[str, Any] | None,
    *,
    normalize: Callable[[str], str] | None = None,
) -> dict[str, Any]:
    """Check arguments against the descriptor and return them under canonical names.

    Missing required fields are collected and reported together. Enum values are
    passed through `normalize` before the membership check and come back in
    canonical form, in the order supplied. Unknown extra arguments are dropped.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ToolValidationError(("arguments",), "arguments must be an object")

    present: dict[str, Any] = {}
    missing: list[str] = []
    for param in descriptor.parameters:
        found, value = _pick(arguments, param)
        if found:
            present[param.name] = value
        elif param.required:
            missing.append(param.name)

    if missing:
        raise ToolValidationError(missing, "Missing required argument(s)")

    validated: dict[str, Any] = {}
    for param in descriptor.parameters:
        if param.name not in present:
            continue
        value = present[param.name]

        if param.kind == "array":
            if not isinstance(value, (list, tuple)):
                raise ToolValidationError((param.name,), "expected an array of strings")
            if any(not isinstance(item, str) for item in value):
                raise ToolValidationError((param.name,), "array items must be strings")
            if len(value) < param.min_items:
                raise ToolValidationError(
                    (param.name,), f"expected at least {param.min_items} item(s)"
                )
            validated[param.name] = [_check_enum(param, item, normalize) for item in value]
        else:
            if not isinstance(value, str):
                raise ToolValidationError((param.name,), "expected a string")
            validated[param.name] = _check_enum(param, value, normalize)

    return validated
