"""
Pytest fixtures for HireSight tests.

No test talks to a real provider: HTTP calls go through FakeResponse objects
and the analysis operations run against FakeLLMClient, which returns canned
JSON for each response model.
"""

from __future__ import annotations

import copy
import json

import pytest

from llm_client import LLMClient
from schemas import (
    ConsistencyAnalysisResult,
    PreliminaryDecisionResult,
    RecruiterAnalysisResult,
    RewrittenResumeResult,
)

ANALYSIS_DATA = {
    "job_title": "Senior Python Engineer",
    "summary": "Strong backend profile with six years of Python.",
    "key_responsibilities_match": {
        "items": [
            {"item": "Design data pipelines", "status": "Match", "explanation": "Built ETL pipelines at Acme."},
        ],
        "score": 80,
    },
    "required_skills_match": {
        "items": [
            {"item": "Python", "status": "Match", "explanation": "Six years of Python."},
            {"item": "Kubernetes", "status": "No Match", "explanation": "Not mentioned."},
        ],
        "score": 65,
    },
    "nice_to_have_skills_match": {
        "items": [
            {"item": "Apache Airflow", "status": "Partial", "explanation": "Used cron-based schedulers."},
        ],
        "score": 50,
    },
    "company_culture_fit": {"analysis": "Has worked remote-first before.", "score": 70},
    "salary_and_benefits": "Not mentioned in the resume.",
    "red_flags": ["Eight month gap in 2021."],
    "interview_questions": ["Tell us about your exposure to Kubernetes."],
    "overall_fit_score": 72,
    "fit_explanation": "Strong on Python, missing container orchestration.",
    "compatibility_gaps": ["No Kubernetes experience"],
}

DECISION_DATA = {
    "decision": "Recommended for Interview",
    "pros": ["Deep Python experience"],
    "cons": ["No Kubernetes"],
    "explanation": "Core skills outweigh the orchestration gap.",
}

CONSISTENCY_DATA = {
    "consistency_score": 85,
    "summary": "Answers matched the resume closely.",
    "recommendation": "Strong Fit",
    "soft_skills_analysis": {"items": "Clear and structured communicator.", "score": 80},
    "inconsistencies": {"items": [], "score": 10},
    "missing_from_interview": {"items": ["Airflow work"], "score": 40},
    "new_in_interview": {"items": ["Ran a k3s cluster at home"], "score": 60},
    "gap_resolutions": {
        "items": [
            {
                "gap": "No Kubernetes experience",
                "resolution": "Runs a personal k3s cluster and deployed two services on it.",
                "is_resolved": True,
            }
        ],
        "score": 100,
    },
    "pros_for_hiring": ["Consistent story"],
    "cons_for_hiring": ["Limited production Kubernetes"],
    "updated_overall_fit_score": 81,
    "hiring_decision": "Recommended for Hire",
    "preliminary_hiring_decision": "Likely Hire",
}

REWRITE_DATA = {
    "rewritten_resume": "## Professional Experience\n\n**Backend Engineer**\n*Acme | 2019 - Present*\n\n- Built Python data pipelines",
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, json_data=None, text="", reason="OK"):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text or json_data is None else json.dumps(json_data)
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeLLMClient(LLMClient):
    """Records every call and answers with canned JSON per response model."""

    provider = "fake"

    def __init__(self, responses):
        super().__init__("fake-model", "fake-key")
        self.responses = responses
        self.calls = []

    def _generate(self, system_prompt, parts, response_model):
        self.calls.append(
            {"system_prompt": system_prompt, "parts": list(parts), "response_model": response_model}
        )
        answer = self.responses[response_model]
        if isinstance(answer, Exception):
            raise answer
        return json.dumps(answer)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Keep real keys, proxies and saved settings out of the tests."""
    for name in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "GROQ_API_KEY",
        "LLM_PROVIDER",
        "LLM_MODEL",
        "FETCH_PROXY_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HIRESIGHT_SETTINGS_PATH", str(tmp_path / "settings.json"))


@pytest.fixture
def analysis_data():
    return copy.deepcopy(ANALYSIS_DATA)


@pytest.fixture
def analysis(analysis_data):
    return RecruiterAnalysisResult.model_validate(analysis_data)


@pytest.fixture
def decision():
    return PreliminaryDecisionResult.model_validate(DECISION_DATA)


@pytest.fixture
def consistency():
    return ConsistencyAnalysisResult.model_validate(CONSISTENCY_DATA)


@pytest.fixture
def rewritten():
    return RewrittenResumeResult.model_validate(REWRITE_DATA)


@pytest.fixture
def fake_client():
    return FakeLLMClient(
        {
            RecruiterAnalysisResult: copy.deepcopy(ANALYSIS_DATA),
            PreliminaryDecisionResult: copy.deepcopy(DECISION_DATA),
            ConsistencyAnalysisResult: copy.deepcopy(CONSISTENCY_DATA),
            RewrittenResumeResult: copy.deepcopy(REWRITE_DATA),
        }
    )


@pytest.fixture
def api_client(fake_client, monkeypatch):
    """FastAPI TestClient whose LLM calls all go to fake_client."""
    from fastapi.testclient import TestClient

    import api

    monkeypatch.setattr(api, "get_llm_client", lambda config: fake_client)
    return TestClient(api.app)
