"""Persona definitions for the virtual advisory board."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PersonaRecord:
    id: str
    name: str
    role: str
    expertise: tuple[str, ...]
    philosophy: str
    summary: str
    approach: str | None = None
    # str.format template; receives `topic` and `background`.
    response_template: str | None = None


FALLBACK_TEMPLATE = (
    'Based on my experience, I would approach "{topic}" by considering the key '
    "stakeholders and long-term implications. My advice is to gather more data and "
    "consider multiple perspectives before deciding."
)


PERSONAS: tuple[PersonaRecord, ...] = (
    PersonaRecord(
        id="tim_cook",
        name="Tim Cook",
        role="Strategic Leadership Advisor",
        expertise=("Strategic planning", "Operational efficiency", "Brand building"),
        philosophy=(
            "Focuses on operational excellence and long-term value. Every decision is "
            "tested against the core mission and whether it will still delight "
            "customers ten years from now."
        ),
        summary="Strategic leadership & operational excellence",
        approach="Measured, thoughtful, focuses on long-term value and operational excellence",
        response_template=(
            'Looking at "{topic}", I\'d focus on three key areas: First, how does this '
            "align with our core mission and values? Second, what are the long-term "
            "operational implications? Third, will this delight our customers and create "
            "lasting value?\n\n"
            "My advice: Take a systematic approach - analyze the customer impact, build "
            "operational capabilities gradually, and measure success with clear KPIs. "
            "Don't rush; execute with excellence.\n\n"
            "Key questions: What would our customers say about this decision? Do we have "
            "the operational foundation to succeed?"
        ),
    ),
    PersonaRecord(
        id="warren_buffett",
        name="Warren Buffett",
        role="Investment & Business Philosophy Advisor",
        expertise=("Value investing", "Business analysis", "Capital allocation"),
        philosophy=(
            "Treats every choice as a capital allocation decision. Looks for durable "
            "economic moats and predictable cash flows, and refuses anything that "
            "cannot be understood simply."
        ),
        summary="Investment philosophy & business fundamentals",
        approach="Folksy wisdom, asks probing questions about business fundamentals",
        response_template=(
            "This sounds like a classic capital allocation decision. Before moving "
            "forward, I'd want to understand the economics deeply - what's the "
            "competitive advantage here, and are we buying at a reasonable price?\n\n"
            "My advice: Apply the 10-year test - would you be comfortable with this "
            "decision if you had to live with it for a decade? Focus on businesses with "
            "strong moats and predictable cash flows. If you can't understand it simply, "
            "don't do it.\n\n"
            "Key questions: What could permanently damage this business? Are we paying a "
            "fair price for future cash flows?"
        ),
    ),
    PersonaRecord(
        id="maya_angelou",
        name="Maya Angelou",
        role="Purpose & Human Leadership Advisor",
        expertise=("Leadership authenticity", "Inclusive culture", "Communication"),
        philosophy=(
            "Believes every business decision is ultimately about people. Judges a "
            "choice by the story it tells and whether it lifts others up, not only by "
            "the profit it generates."
        ),
        summary="Purpose-driven leadership & human impact",
        approach="Warm, wise, focuses on human impact and authentic leadership",
        response_template=(
            "Every business decision is ultimately about people. When I think about "
            '"{topic}", I ask: How will this help your team grow? How will it serve your '
            "community? What story does this tell about who you are?\n\n"
            "My advice: Lead with courage and authenticity. Make sure this decision lifts "
            "others up, not just generates profit. Your people will remember how this "
            "made them feel long after the numbers are forgotten.\n\n"
            "Key questions: What story are you telling with this choice? How can this "
            "decision help others flourish?"
        ),
    ),
    PersonaRecord(
        id="jamie_dimon",
        name="Jamie Dimon",
        role="Risk Management & Crisis Leadership Advisor",
        expertise=("Risk management", "Crisis navigation", "Financial strategy"),
        philosophy=(
            "Stress-tests every plan against the worst case first. A decision is only "
            "acceptable if the balance sheet can survive it going completely wrong."
        ),
        summary="Risk management & crisis leadership",
        approach="Direct, no-nonsense, stress-tests everything for worst-case scenarios",
        response_template=(
            "Let me stress-test this for you. What happens if everything goes wrong? Do "
            "you have the balance sheet strength to survive a downturn? Have you "
            "considered all the regulatory and competitive risks?\n\n"
            "My advice: Build multiple scenarios - best case, worst case, and most "
            "likely. Make sure you can survive the worst case. Have contingency plans "
            "ready. Don't bet the company on any single decision.\n\n"
            "Key questions: What keeps you up at night about this? How would you survive "
            "if your assumptions are wrong?"
        ),
    ),
    PersonaRecord(
        id="charlie_munger",
        name="Charlie Munger",
        role="Mental Models & Rational Thinking Advisor",
        expertise=("Decision-making frameworks", "Avoiding biases", "Systematic thinking"),
        philosophy=(
            "Inverts the problem and asks what would cause it to fail completely. "
            "Draws on a latticework of mental models from many disciplines to catch "
            "the ways we fool ourselves."
        ),
        summary="Mental models & rational thinking",
        approach="Intellectually rigorous, uses inversion thinking and multiple disciplines",
        response_template=(
            "Let's invert this problem - what would cause this to fail completely? I'd "
            "apply multiple mental models: economic, psychological, competitive. Most "
            "failures come from cognitive biases and poor incentive structures.\n\n"
            "My advice: Create a checklist of potential failure modes. Ask yourself how "
            "you might be fooling yourself. Look at this through the lens of history, "
            "psychology, and economics. The biggest risk is usually what you're not "
            "thinking about.\n\n"
            "Key questions: How might you be deceiving yourself? What disciplines outside "
            "business inform this decision?"
        ),
    ),
    PersonaRecord(
        id="art_gensler",
        name="Art Gensler",
        role="Innovation & Design Thinking Advisor",
        expertise=("Human-centered design", "Innovation", "Sustainable planning"),
        philosophy=(
            "Reframes problems as design challenges. Starts from the people being "
            "served and prefers prototyping and testing over committing to a single "
            "answer up front."
        ),
        summary="Innovation & design thinking",
        approach="Creative, optimistic, reframes problems as design challenges",
        response_template=(
            'I\'d reframe "{topic}" as a design challenge. Who are we really serving '
            "here? What would the most innovative, human-centered solution look like? How "
            "might we prototype and test before committing fully?\n\n"
            "My advice: Start with deep user research. Create multiple solution concepts. "
            "Test and iterate quickly. The best solutions often come from understanding "
            "people's unarticulated needs.\n\n"
            "Key questions: What would users love about this? How might we design this to "
            "create lasting positive impact?"
        ),
    ),
)


def persona_response(persona: PersonaRecord, topic: str, background: str = "") -> str:
    """Return the persona's advice for a topic, or the generic fallback."""
    template = persona.response_template or FALLBACK_TEMPLATE
    return template.format(topic=topic, background=background)


def persona_roster(personas: tuple[PersonaRecord, ...] = PERSONAS) -> str:
    """Return a compact, numbered roster."""
    lines = []
    for idx, persona in enumerate(personas, start=1):
        lines.append(f"{idx}. {persona.name} ({persona.id}) - {persona.role}: {persona.summary}")
    return "\n".join(lines)
