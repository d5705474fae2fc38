"""
Tests for the analysis operations: which prompt parts each one sends, in
which order, and how missing inputs are rejected before any model call.
"""

from __future__ import annotations

import pytest

from errors import LLMResponseError, MissingInputError
from evaluator import analyze_interview_consistency, format_gaps
from report_generator import generate_preliminary_decision
from resume_matcher import analyze_for_recruiter
from resume_rewriter import rewrite_resume_for_job
from schemas import (
    ConsistencyAnalysisResult,
    DocumentInput,
    FileContent,
    PreliminaryDecisionResult,
    RecruiterAnalysisResult,
)

JOB = DocumentInput.from_text("Senior Python Engineer. Requires Python and Kubernetes.")
RESUME = DocumentInput(
    format="file",
    content=FileContent(data="JVBERi0xLjQ=", mime_type="application/pdf", filename="cv.pdf"),
)


def test_analyze_for_recruiter_sends_job_then_resume(fake_client):
    result = analyze_for_recruiter(fake_client, JOB, RESUME, language="pt")

    assert isinstance(result, RecruiterAnalysisResult)
    assert result.compatibility_gaps == ["No Kubernetes experience"]
    (call,) = fake_client.calls
    assert call["response_model"] is RecruiterAnalysisResult
    parts = call["parts"]
    assert parts[:4] == ["Job Description:", JOB, "Candidate's Resume:", RESUME]
    assert "compatibility gaps" in parts[4]
    assert "Portuguese" in call["system_prompt"]


@pytest.mark.parametrize(
    "job, resume, message",
    [
        (DocumentInput.from_text(""), RESUME, "Job description is missing."),
        (JOB, DocumentInput.from_text("  "), "Resume is missing."),
        (JOB, None, "Resume is missing."),
    ],
)
def test_analyze_for_recruiter_requires_both_documents(fake_client, job, resume, message):
    with pytest.raises(MissingInputError, match=message):
        analyze_for_recruiter(fake_client, job, resume)
    assert fake_client.calls == []


def test_analysis_error_propagates(fake_client):
    fake_client.responses[RecruiterAnalysisResult] = LLMResponseError("Invalid JSON response from Gemini API.")
    with pytest.raises(LLMResponseError):
        analyze_for_recruiter(fake_client, JOB, RESUME)


def test_preliminary_decision_uses_serialized_analysis(fake_client, analysis):
    result = generate_preliminary_decision(fake_client, analysis, language="es")

    assert isinstance(result, PreliminaryDecisionResult)
    (call,) = fake_client.calls
    first = call["parts"][0]
    assert first.startswith("Analysis:\n")
    assert '"job_title": "Senior Python Engineer"' in first
    assert "Spanish" in call["system_prompt"]


def test_preliminary_decision_needs_analysis(fake_client):
    with pytest.raises(MissingInputError):
        generate_preliminary_decision(fake_client, None)
    assert fake_client.calls == []


def test_format_gaps():
    assert format_gaps(["No Kubernetes", " ", "No Airflow "]) == (
        "Previously identified compatibility gaps:\n- No Kubernetes\n- No Airflow"
    )
    assert format_gaps(None) == "Previously identified compatibility gaps:\n- None identified"


def test_consistency_sends_transcript_and_gaps(fake_client):
    result = analyze_interview_consistency(
        fake_client,
        JOB,
        RESUME,
        "  Q: Kubernetes?\nA: I run k3s at home.  ",
        ["No Kubernetes experience"],
    )

    assert isinstance(result, ConsistencyAnalysisResult)
    assert result.gap_resolutions.items[0].is_resolved is True
    (call,) = fake_client.calls
    parts = call["parts"]
    assert parts[:4] == ["Job Description:", JOB, "Candidate's Resume:", RESUME]
    assert parts[4] == "Interview Transcript:\nQ: Kubernetes?\nA: I run k3s at home."
    assert parts[5] == "Previously identified compatibility gaps:\n- No Kubernetes experience"
    assert "English" in call["system_prompt"]


def test_consistency_requires_transcript(fake_client):
    with pytest.raises(MissingInputError, match="Interview transcript is missing."):
        analyze_interview_consistency(fake_client, JOB, RESUME, "   ")
    assert fake_client.calls == []


def test_rewrite_puts_resume_first(fake_client):
    result = rewrite_resume_for_job(fake_client, JOB, RESUME)

    assert result.rewritten_resume.startswith("## Professional Experience")
    (call,) = fake_client.calls
    parts = call["parts"]
    assert parts[:4] == ["Original Resume:", RESUME, "Target Job Description:", JOB]
    assert "Do NOT add" in parts[4]
