# file: app.py
from __future__ import annotations

import logging
from io import StringIO

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import LOG_LEVEL, STORAGE_DIR, STORAGE_KEY
from survey.aggregate_store import AggregateStore, JsonFileStorage
from survey.dashboard import AggregateSummary, summarize
from survey.questions import LIKERT_OPTIONS, QUESTIONS
from survey.scoring_engine import BAR_SCALE, SurveyResult
from survey.section_writer import compile_result_report, headline
from survey.session import SurveySession, SurveyState

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884d8', '#82ca9d',
          '#ffc658', '#ff7300', '#808080', '#b768a2', '#7cba3b', '#ff5252']

# ------------------ Plotly visuals ------------------
def fig_result_scores(result: SurveyResult) -> go.Figure:
    ranked = result.ranked_scores()
    fig = go.Figure(go.Bar(x=[v for _, v in ranked], y=[k for k, _ in ranked], orientation='h',
                           text=[v for _, v in ranked], textposition="outside"))
    fig.update_layout(title="Your Detailed Scores", xaxis=dict(range=[0, BAR_SCALE]),
                      yaxis=dict(autorange="reversed"),
                      height=420, margin=dict(l=160, r=10, t=40, b=10), showlegend=False)
    return fig

def fig_distribution_bar(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure(go.Bar(x=df["Persona"], y=df["Count"],
                           marker_color=[COLORS[i % len(COLORS)] for i in range(len(df))]))
    fig.update_layout(title="Distribution Chart", xaxis=dict(tickangle=-45),
                      height=380, margin=dict(l=10, r=10, t=40, b=100), showlegend=False)
    return fig

def fig_distribution_pie(df: pd.DataFrame) -> go.Figure:
    fig = px.pie(df, values="Count", names="Persona", color_discrete_sequence=COLORS,
                 title="Percentage Distribution")
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(height=380, margin=dict(l=10, r=10, t=40, b=10), showlegend=False)
    return fig

# ------------------ Session ------------------
def get_session() -> SurveySession:
    if "survey_session" not in st.session_state:
        store = AggregateStore(JsonFileStorage(STORAGE_DIR), key=STORAGE_KEY)
        st.session_state.survey_session = SurveySession(store)
    return st.session_state.survey_session

def render_dashboard(summary: AggregateSummary) -> None:
    st.header("📊 Survey Analytics Dashboard")
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Responses", summary.total_responses)
    c2.metric("Most Common", summary.most_common)
    c3.metric("Unique Personas", summary.unique_personas)

    st.subheader("Persona Distribution")
    df = summary.to_frame()
    if df.empty:
        st.info("No data available")
        return
    table = df.assign(Percentage=df["Percentage"].map(lambda p: f"{p:.1f}%"))
    st.dataframe(table, use_container_width=True, hide_index=True)

    left, right = st.columns(2)
    with left:
        st.plotly_chart(fig_distribution_bar(df), use_container_width=True)
    with right:
        st.plotly_chart(fig_distribution_pie(df), use_container_width=True)

    buf = StringIO(); df.to_csv(buf, index=False)
    st.download_button("Download distribution.csv", buf.getvalue(), "distribution.csv", "text/csv")

# ------------------ UI ------------------
st.set_page_config(page_title="Spiritual Persona Survey", page_icon="🪔", layout="centered")
session = get_session()

if session.state is SurveyState.VIEWING_AGGREGATE:
    render_dashboard(session.view_dashboard())
    if st.button("Take New Survey", type="primary"):
        session.reset_survey()
        st.rerun()
    st.stop()

if session.state is SurveyState.COMPLETED:
    result = session.get_result()
    st.header("Your Spiritual Persona Results")
    st.info(headline(result))
    st.plotly_chart(fig_result_scores(result), use_container_width=True)
    st.download_button("Download results.txt", compile_result_report(result), "persona_results.txt", "text/plain")

    c1, c2, c3 = st.columns(3)
    if c1.button("Take Survey Again", type="primary", use_container_width=True):
        session.reset_survey()
        st.rerun()
    if c2.button("View All Results Dashboard", use_container_width=True):
        session.view_dashboard()
        st.rerun()
    with c3:
        sure = st.checkbox("I'm sure", help="Confirm clearing all aggregate data")
        if st.button("Clear All Data", use_container_width=True):
            if session.clear_aggregate(lambda: sure):
                st.rerun()
            st.warning("Tick “I'm sure” to clear all aggregate data.")
    st.stop()

# Questionnaire
st.header("Spiritual Persona Survey")
index, question = session.current_question()
st.caption(f"Question {index + 1} of {len(QUESTIONS)}")
st.markdown(f"**{question.text}**")
for value, label in LIKERT_OPTIONS:
    if st.button(label, key=f"q{index}_{value}", use_container_width=True):
        session.submit_answer(index, value)
        st.rerun()
st.progress(session.progress())
