"""
Tests for the downloadable Markdown report.
"""

from __future__ import annotations

from report_generator import build_markdown_report


def test_report_with_analysis_only(analysis):
    report = build_markdown_report(analysis)

    assert report.startswith("# HireSight Candidate Report\n")
    assert "**Position:** Senior Python Engineer" in report
    assert "## Overall fit: 72%" in report
    assert "### Required skills (65%)" in report
    assert "- ✅ **Python** (Match): Six years of Python." in report
    assert "- ❌ **Kubernetes** (No Match): Not mentioned." in report
    assert "- 🟡 **Apache Airflow** (Partial)" in report
    assert "1. Tell us about your exposure to Kubernetes." in report
    assert "## Preliminary decision" not in report
    assert "## Interview consistency" not in report
    assert "## Rewritten resume" not in report
    assert report.endswith("\n") and not report.endswith("\n\n")


def test_full_report_section_order(analysis, decision, consistency, rewritten):
    report = build_markdown_report(analysis, decision, consistency, rewritten)

    headings = [
        "## Overall fit: 72%",
        "## Preliminary decision: Recommended for Interview",
        "## Interview consistency",
        "## Detailed analysis",
        "## Rewritten resume",
    ]
    positions = [report.index(h) for h in headings]
    assert positions == sorted(positions)

    assert "- Updated overall fit: 81%" in report
    assert "- Gaps resolved: 100%" in report
    assert "- ✅ **No Kubernetes experience**: Runs a personal k3s cluster" in report
    assert "### Inconsistencies\n\n_None_" in report
    assert report.rstrip().endswith("- Built Python data pipelines")


def test_report_empty_lists(analysis):
    analysis = analysis.model_copy(update={"red_flags": [], "interview_questions": []})
    report = build_markdown_report(analysis)
    assert "### Red flags\n\n_None_" in report
    assert "### Suggested interview questions\n\n_None_" in report
