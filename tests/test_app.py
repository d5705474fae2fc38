"""
Tests for the Streamlit page, driven with streamlit.testing.AppTest.

The LLM client factory is patched to the fake client, so the real operations
run against canned results.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

import llm_client
from errors import LLMError
from schemas import RecruiterAnalysisResult

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


@pytest.fixture
def busy_during_call():
    return []


@pytest.fixture
def app(fake_client, busy_during_call, monkeypatch):
    generate = fake_client._generate

    def recording_generate(system_prompt, parts, response_model):
        busy_during_call.append(st.session_state.busy)
        return generate(system_prompt, parts, response_model)

    monkeypatch.setattr(fake_client, "_generate", recording_generate)
    monkeypatch.setattr(llm_client, "get_llm_client", lambda config: fake_client)

    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    at.text_area(key="job_text").input("Senior Python Engineer. Requires Python and Kubernetes.")
    at.text_area(key="resume_text").input("Jane Doe. Six years of Python at Acme.")
    at.run()
    return at


def _click(at, label_prefix):
    button = next(b for b in at.button if b.label.startswith(label_prefix))
    button.click().run()


def test_analysis_runs_while_busy_and_releases_it(app, busy_during_call):
    _click(app, "🔍")

    assert not app.exception
    assert isinstance(app.session_state["analysis"], RecruiterAnalysisResult)
    assert busy_during_call == [True]
    assert app.session_state["busy"] is False
    assert app.session_state["pending_action"] is None
    assert len(app.error) == 0


def test_failed_analysis_shows_one_error(app, fake_client):
    fake_client.responses[RecruiterAnalysisResult] = LLMError("Gemini API error: 500 Internal")
    _click(app, "🔍")

    assert [e.value for e in app.error] == ["Gemini API error: 500 Internal"]
    assert app.session_state["analysis"] is None
    assert app.session_state["busy"] is False


def test_decision_after_analysis(app, busy_during_call):
    _click(app, "🔍")
    _click(app, "⚖️")

    assert app.session_state["decision"].decision == "Recommended for Interview"
    assert busy_during_call == [True, True]
    assert len(app.error) == 0
