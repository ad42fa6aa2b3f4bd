"""Markdown templates for advisory board tool output."""

from __future__ import annotations

from typing import Iterable

from advisory_board.personas import PersonaRecord, persona_response

RULE = "---"


def _persona_header(persona: PersonaRecord) -> list[str]:
    lines = [
        f"**Role:** {persona.role}",
        f"**Expertise:** {', '.join(persona.expertise)}",
    ]
    if persona.approach:
        lines.append(f"**Approach:** {persona.approach}")
    return lines


def render_advisor_advice(
    persona: PersonaRecord,
    situation: str,
    specific_question: str | None = None,
) -> str:
    lines = [f"# ADVICE FROM {persona.name.upper()}", "", *_persona_header(persona), ""]
    lines.append(f"**Situation:** {situation}")
    if specific_question:
        lines.append(f"**Your Question:** {specific_question}")
    lines.extend(["", RULE, "", persona_response(persona, situation)])
    return "\n".join(lines)


def render_board_meeting(
    *,
    topic: str,
    background: str,
    advisors: Iterable[PersonaRecord],
    meeting_date: str,
) -> str:
    sections = []
    for persona in advisors:
        sections.append(
            f"### {persona.name} - {persona.role}\n\n"
            f"{persona_response(persona, topic, background)}\n\n"
            f"{RULE}"
        )
    responses = "\n".join(sections)

    return f"""# VIRTUAL BOARD MEETING
**Topic:** {topic}
**Date:** {meeting_date}

**Background:** {background}

{RULE}

## ADVISOR RESPONSES:

{responses}

## SUMMARY
Your virtual advisory board has provided diverse perspectives on "{topic}". Each advisor has offered specific advice based on their expertise and decision-making style. Consider the common themes and conflicting viewpoints as you make your decision.
"""


# Static crisis guidance, keyed by advisor id. Advisors absent from the registry are skipped.
CRISIS_IMMEDIATE: tuple[tuple[str, str], ...] = (
    (
        "jamie_dimon",
        "Secure liquidity and stabilize operations first. Know your cash position "
        "today, protect critical systems, and assume the situation gets worse before "
        "it gets better.",
    ),
    (
        "tim_cook",
        "Take ownership publicly and communicate with customers directly. Say what you "
        "know, what you don't, and when you will update them next.",
    ),
    (
        "maya_angelou",
        "Take care of your people. Tell your team the truth, listen to their fears, "
        "and lead with visible calm and compassion.",
    ),
)

CRISIS_STRATEGIC: tuple[tuple[str, str], ...] = (
    (
        "warren_buffett",
        "Protect the long-term franchise over short-term optics. Reputation takes "
        "twenty years to build and five minutes to ruin, so make decisions you would "
        "be proud to see reported.",
    ),
    (
        "charlie_munger",
        "Invert the crisis: list everything that could make it worse and avoid those "
        "moves. Check whether incentives inside the company caused this.",
    ),
    (
        "art_gensler",
        "Treat recovery as a redesign opportunity. Rebuild the affected process around "
        "the people it failed, and prototype the fix before rolling it out.",
    ),
)


def _crisis_phase(title: str, guidance: tuple[tuple[str, str], ...], lookup) -> str:
    lines = [f"## {title}", ""]
    for advisor_id, advice in guidance:
        persona = lookup(advisor_id)
        if persona is None:
            continue
        lines.append(f"**{persona.name}** ({persona.role}): {advice}")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_crisis_response(
    *,
    crisis_description: str,
    immediate_concerns: str,
    lookup,
) -> str:
    """Render the fixed two-phase crisis plan.

    `lookup` maps an advisor id to a PersonaRecord or None.
    """
    immediate = _crisis_phase("IMMEDIATE PRIORITIES (Next 24-48 Hours)", CRISIS_IMMEDIATE, lookup)
    strategic = _crisis_phase("STRATEGIC RESPONSE (Next 30 Days)", CRISIS_STRATEGIC, lookup)
    return f"""# CRISIS RESPONSE BOARD SESSION
**Crisis:** {crisis_description}
**Immediate Concerns:** {immediate_concerns}

{RULE}

{immediate}

{RULE}

{strategic}

{RULE}

*Your advisory board has convened. Act on the immediate priorities now, then work through the strategic response with your leadership team.*
"""


def render_advisor_listing(personas: Iterable[PersonaRecord]) -> str:
    entries = []
    for persona in personas:
        entries.append(
            f"• **{persona.name}** ({persona.id}) - {persona.summary}\n"
            f"  Expertise: {', '.join(persona.expertise)}"
        )
    body = "\n\n".join(entries)
    return (
        "Your Virtual Advisory Board:\n\n"
        f"{body}\n\n"
        'Use "hold_board_meeting" to get their advice on any business challenge!'
    )


def render_advisor_info(persona: PersonaRecord) -> str:
    lines = [
        f"**{persona.name}** - {persona.role}",
        f"**Identifier:** {persona.id}",
        "",
    ]
    if persona.approach:
        lines.append(f"**Communication Style:** {persona.approach}")
    lines.append(f"**Key Expertise:** {', '.join(persona.expertise)}")
    lines.append(f"**Philosophy:** {persona.philosophy}")
    return "\n".join(lines)


def render_unknown_advisor(display_id: str, valid_ids: Iterable[str]) -> str:
    return (
        f'Advisor "{display_id}" is not on your board.\n\n'
        f"Valid advisors: {', '.join(valid_ids)}"
    )
