import asyncio
import datetime

import streamlit as st

from scholarscan.agents.personas import persona_for
from scholarscan.llm.base import LLMClient
from scholarscan.llm.config import load_model_name
from scholarscan.render import render_markdown, request_export, USAGE_TIPS_TEXT
from scholarscan.schemas import AVAILABLE_CRITERIA, CritiqueLevel, ReviewCategory
from scholarscan.session import ReviewSession, ReviewStatus
from scholarscan.parsing.validation import count_words


def _session(model_name: str) -> ReviewSession:
    session = st.session_state.get("review_session")
    if session is None:
        session = ReviewSession()
        st.session_state["review_session"] = session
    if session.llm is None or session.llm.model_name != model_name:
        session.llm = LLMClient(model_name=model_name)
    return session


def _edit_keywords(session: ReviewSession, criterion_id: str):
    key = f"custom_kw_{criterion_id}"
    if not session.edit_custom_criterion(criterion_id, "keywords", st.session_state[key]):
        # put the box back to the last accepted text
        st.session_state[key] = session.custom_criterion(criterion_id).keywords
        st.session_state["keyword_cap_hit"] = criterion_id


st.set_page_config(page_title="ScholarScan", layout="wide")
st.title("ScholarScan")
st.caption("Use structured AI feedback for learning and AI-bias awareness. "
           "Customize your criteria and critique intensity.")

model = st.sidebar.text_input("Model name", value=load_model_name(),
                              help="Gemini and OpenAI models can read uploaded files; Together models take text only.")
session = _session(model)
configuration = session.configuration

if session.status == ReviewStatus.SUCCEEDED and session.feedback is not None:
    st.markdown(render_markdown(session.feedback))

    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Download as PDF"):
            st.info(request_export("pdf"))
    with col2:
        if st.button("Download as DOCX"):
            st.info(request_export("docx"))
    with col3:
        st.download_button("Download review.json", data=session.feedback.model_dump_json(by_alias=True, exclude_none=True, indent=2),
                           file_name=f"review_{ts}.json", mime="application/json")

    if st.button("Start New Review"):
        session.reset()
        for key in [k for k in st.session_state if str(k).startswith(("custom_", "crit_"))]:
            del st.session_state[key]
        st.rerun()
    st.stop()

categories = list(ReviewCategory)
category = st.radio("Document type", categories, format_func=lambda c: c.value, horizontal=True,
                    index=categories.index(configuration.category))
session.set_category(category)

levels = list(CritiqueLevel)
level = st.radio(
    "Critique level", levels, horizontal=True,
    index=levels.index(configuration.critique_level),
    format_func=lambda lv: f"{persona_for(configuration.category, lv).title} "
                           f"({persona_for(configuration.category, lv).descriptor})",
)
session.set_critique_level(level)

st.subheader("Evaluation criteria")
if st.button("Deselect All" if session.all_selected else "Select All"):
    session.toggle_select_all()
    st.rerun()
cols = st.columns(4)
for i, criterion in enumerate(AVAILABLE_CRITERIA):
    with cols[i % 4]:
        checked = st.checkbox(criterion, value=criterion in configuration.selected_criteria, key=f"crit_{criterion}")
    if checked != (criterion in configuration.selected_criteria):
        session.toggle_criterion(criterion)

st.markdown("**Custom criteria**")
for criterion in list(configuration.custom_criteria):
    c1, c2 = st.columns([1, 2])
    with c1:
        name = st.text_input("Criterion Name", value=criterion.name, placeholder="e.g., Methodology",
                             key=f"custom_name_{criterion.id}")
        session.edit_custom_criterion(criterion.id, "name", name)
    with c2:
        kw_key = f"custom_kw_{criterion.id}"
        st.session_state.setdefault(kw_key, criterion.keywords)
        st.text_area("Focus Areas / Instructions", height=68, placeholder="Enter specific instructions...",
                     key=kw_key, on_change=_edit_keywords, args=(session, criterion.id))
        if st.session_state.get("keyword_cap_hit") == criterion.id:
            st.warning(f"Focus areas are limited to {session.config.max_keyword_words} words.")
            del st.session_state["keyword_cap_hit"]
        st.caption(f"{count_words(criterion.keywords)}/{session.config.max_keyword_words} words")
if st.button("Add custom criterion"):
    session.add_custom_criterion()
    st.rerun()

if not configuration.selected_criteria and not configuration.active_custom_criteria():
    st.caption("Select at least one criterion or add a custom one.")

st.subheader("Document")
uploaded = st.file_uploader("Document Upload", type=["pdf", "docx"])
if uploaded is not None and (session.file is None or session.file.name != uploaded.name):
    asyncio.run(session.attach_file(uploaded, uploaded.name))
elif uploaded is None and session.file is not None:
    session.clear_file()

text = st.text_area("Paste Content", value=session.text, height=240,
                    placeholder="Paste your abstract, introduction, or full text here...")
session.set_text(text)

if st.button("Analyzing Document..." if session.is_loading else "Run Review", disabled=not session.can_submit):
    with st.spinner("Analyzing Document..."):
        asyncio.run(session.submit())
    if session.status == ReviewStatus.SUCCEEDED:
        st.rerun()

if session.error:
    st.error(session.error)

st.caption(USAGE_TIPS_TEXT)
