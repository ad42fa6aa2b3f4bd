from __future__ import annotations

import streamlit as st

from advisory_board import ToolDispatcher, default_registry


@st.cache_resource
def get_dispatcher() -> ToolDispatcher:
    return ToolDispatcher(default_registry())


st.set_page_config(page_title="Virtual Advisory Board", layout="wide")

dispatcher = get_dispatcher()
registry = dispatcher.registry
advisor_ids = list(registry.ids())
names = {persona.id: persona.name for persona in registry.list_all()}

st.title("Virtual Advisory Board")
st.caption(
    "Bring a decision to six simulated advisors and get their perspectives side by side."
)

with st.sidebar:
    st.header("Board Members")
    for persona in registry.list_all():
        st.markdown(f"**{persona.name}** - {persona.role}")
        st.caption(", ".join(persona.expertise))
    st.divider()
    st.info(
        "This is a strategy simulation tool. Responses are static templates and do not "
        "represent real individuals' current views."
    )

tool_labels = {
    "hold_board_meeting": "Board meeting",
    "get_advisor_advice": "Ask one advisor",
    "crisis_response": "Crisis response",
    "get_advisor_info": "Advisor profile",
    "list_advisors": "List advisors",
}
tool = st.radio(
    "Tool",
    options=[descriptor.name for descriptor in dispatcher.catalog()],
    format_func=lambda name: tool_labels.get(name, name),
    horizontal=True,
)
st.caption(dispatcher.describe(tool).description)

arguments: dict = {}
if tool == "hold_board_meeting":
    arguments["topic"] = st.text_input("Topic", placeholder="Should we expand internationally?")
    arguments["background"] = st.text_area(
        "Background",
        placeholder="Stage, revenue, team, constraints the board should know about.",
        height=140,
    )
    arguments["advisors"] = st.multiselect(
        "Advisors (speaking order follows your selection)",
        options=advisor_ids,
        format_func=lambda advisor_id: names[advisor_id],
        default=advisor_ids[:2],
    )
elif tool == "get_advisor_advice":
    arguments["advisor"] = st.selectbox(
        "Advisor", options=advisor_ids, format_func=lambda advisor_id: names[advisor_id]
    )
    arguments["situation"] = st.text_area("Situation", height=140)
    question = st.text_input("Specific question (optional)")
    if question.strip():
        arguments["specific_question"] = question
elif tool == "crisis_response":
    arguments["crisis_description"] = st.text_area("What is happening?", height=120)
    arguments["immediate_concerns"] = st.text_area("Immediate concerns", height=100)
elif tool == "get_advisor_info":
    arguments["advisor"] = st.selectbox(
        "Advisor", options=advisor_ids, format_func=lambda advisor_id: names[advisor_id]
    )

run_clicked = st.button("Convene", type="primary", use_container_width=True)

if run_clicked:
    status = st.status("Convening the board", expanded=False)

    def on_progress(stage: str, message: str) -> None:
        status.write(f"[{stage}] {message}")

    response = dispatcher.invoke(tool, arguments, progress=on_progress)

    if response.is_error:
        status.update(label="Request rejected", state="error", expanded=True)
        st.error(response.text)
    else:
        status.update(label="Board has spoken", state="complete", expanded=False)
        st.markdown(response.text)
        st.download_button(
            label="Download (.md)",
            data=response.text,
            file_name=f"{tool}.md",
            mime="text/markdown",
            use_container_width=True,
        )
