"""Transport-agnostic tool dispatcher for the advisory board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping

from advisory_board import templates
from advisory_board.registry import AdvisorNotFound, PersonaRegistry, display_advisor_id
from advisory_board.tools import (
    CRISIS_RESPONSE,
    GET_ADVISOR_ADVICE,
    GET_ADVISOR_INFO,
    HOLD_BOARD_MEETING,
    LIST_ADVISORS,
    ToolDescriptor,
    ToolValidationError,
    UnknownToolError,
    build_catalog,
    validate_arguments,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]
Clock = Callable[[], datetime]

MEETING_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class ToolError:
    kind: str  # validation | unknown_advisor
    message: str
    fields: tuple[str, ...] = ()
    supplied_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.fields:
            payload["fields"] = list(self.fields)
        if self.supplied_id is not None:
            payload["supplied_id"] = self.supplied_id
        return payload


@dataclass(frozen=True)
class ToolResponse:
    tool: str
    text: str
    error: ToolError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


def _notify(progress: ProgressCallback | None, stage: str, message: str) -> None:
    if progress:
        progress(stage, message)


class ToolDispatcher:
    def __init__(self, registry: PersonaRegistry, *, clock: Clock | None = None):
        self._registry = registry
        self._clock = clock or datetime.now
        self._catalog = build_catalog(registry.ids())
        self._descriptors = {descriptor.name: descriptor for descriptor in self._catalog}
        self._handlers: dict[str, Callable[[dict[str, Any]], str]] = {
            HOLD_BOARD_MEETING: self._hold_board_meeting,
            GET_ADVISOR_ADVICE: self._get_advisor_advice,
            CRISIS_RESPONSE: self._crisis_response,
            LIST_ADVISORS: self._list_advisors,
            GET_ADVISOR_INFO: self._get_advisor_info,
        }

    @property
    def registry(self) -> PersonaRegistry:
        return self._registry

    def catalog(self) -> tuple[ToolDescriptor, ...]:
        return self._catalog

    def describe(self, name: str) -> ToolDescriptor:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise UnknownToolError(name)
        return descriptor

    def invoke(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> ToolResponse:
        descriptor = self.describe(name)
        logger.debug("Invoking tool %s", name)

        _notify(progress, "validate", f"Validating arguments for {name}")
        try:
            validated = validate_arguments(
                descriptor, arguments, normalize=self._registry.normalize
            )
        except ToolValidationError as exc:
            logger.info("Rejected %s call: %s", name, exc)
            return ToolResponse(
                tool=name,
                text=f"Invalid arguments for {name}: {exc}",
                error=ToolError(kind="validation", message=str(exc), fields=exc.fields),
            )

        _notify(progress, "render", f"Rendering {name}")
        try:
            text = self._handlers[name](validated)
        except AdvisorNotFound as exc:
            logger.info("Unknown advisor in %s call: %s", name, exc.supplied_id)
            return ToolResponse(
                tool=name,
                text=templates.render_unknown_advisor(
                    display_advisor_id(exc.supplied_id), self._registry.ids()
                ),
                error=ToolError(
                    kind="unknown_advisor",
                    message=str(exc),
                    supplied_id=exc.supplied_id,
                ),
            )

        _notify(progress, "done", f"{name} completed")
        return ToolResponse(tool=name, text=text)

    def _hold_board_meeting(self, args: dict[str, Any]) -> str:
        # Enum validation already resolved every id; keep caller order and duplicates.
        advisors = [self._registry.lookup(advisor_id) for advisor_id in args["advisors"]]
        return templates.render_board_meeting(
            topic=args["topic"],
            background=args["background"],
            advisors=advisors,
            meeting_date=self._clock().strftime(MEETING_DATE_FORMAT),
        )

    def _get_advisor_advice(self, args: dict[str, Any]) -> str:
        persona = self._registry.lookup(args["advisor"])
        return templates.render_advisor_advice(
            persona,
            args["situation"],
            args.get("specific_question"),
        )

    def _crisis_response(self, args: dict[str, Any]) -> str:
        return templates.render_crisis_response(
            crisis_description=args["crisis_description"],
            immediate_concerns=args["immediate_concerns"],
            lookup=self._registry.get,
        )

    def _list_advisors(self, args: dict[str, Any]) -> str:
        return templates.render_advisor_listing(self._registry.list_all())

    def _get_advisor_info(self, args: dict[str, Any]) -> str:
        return templates.render_advisor_info(self._registry.lookup(args["advisor"]))
