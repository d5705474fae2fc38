# report_generator.py

from typing import List, Optional

from config import language_name
from errors import MissingInputError
from llm_client import LLMClient
from schemas import (
    ConsistencyAnalysisResult,
    PreliminaryDecisionResult,
    RecruiterAnalysisResult,
    RewrittenResumeResult,
    SectionMatch,
)

# ---------- PRELIMINARY DECISION (Interview / No interview) ----------

SYSTEM_PROMPT_DECISION = """
You are an expert HR analyst making a preliminary decision on whether to interview a
candidate, based on a recruitment analysis report.

Write all free-text fields in {language}.
"""

DECISION_INSTRUCTIONS = """
Based on the recruitment analysis above, decide either "Recommended for Interview" or
"Not Recommended". List the strongest pros and the most significant cons, and give a
concise explanation for the decision.
"""


def generate_preliminary_decision(
    client: LLMClient,
    analysis: RecruiterAnalysisResult,
    language: str = "en",
) -> PreliminaryDecisionResult:
    if analysis is None:
        raise MissingInputError("Run the resume analysis before generating a decision.")

    parts = [
        "Analysis:\n" + analysis.model_dump_json(indent=2),
        DECISION_INSTRUCTIONS,
    ]
    system_prompt = SYSTEM_PROMPT_DECISION.format(language=language_name(language))
    return client.call_json(system_prompt, parts, PreliminaryDecisionResult)


# ---------- MARKDOWN REPORT (download) ----------

STATUS_MARKS = {
    "Match": "✅",
    "Partial": "🟡",
    "No Match": "❌",
}


def _score(value: float) -> str:
    return f"{value:.0f}%"


def _bullets(items: List[str], empty: str = "_None_") -> List[str]:
    if not items:
        return [empty]
    return [f"- {item}" for item in items]


def _section_lines(title: str, section: SectionMatch) -> List[str]:
    lines = [f"### {title} ({_score(section.score)})", ""]
    if not section.items:
        lines.append("_No items_")
    for item in section.items:
        mark = STATUS_MARKS.get(item.status, "")
        lines.append(f"- {mark} **{item.item}** ({item.status}): {item.explanation}")
    lines.append("")
    return lines


def build_markdown_report(
    analysis: RecruiterAnalysisResult,
    decision: Optional[PreliminaryDecisionResult] = None,
    consistency: Optional[ConsistencyAnalysisResult] = None,
    rewritten: Optional[RewrittenResumeResult] = None,
) -> str:
    """
    Everything produced for one candidate as a single Markdown document,
    in the order a recruiter reads it.
    """
    lines: List[str] = [
        "# HireSight Candidate Report",
        "",
        f"**Position:** {analysis.job_title}",
        "",
        f"## Overall fit: {_score(analysis.overall_fit_score)}",
        "",
        "### Summary",
        "",
        analysis.summary,
        "",
        "### Fit explanation",
        "",
        analysis.fit_explanation,
        "",
    ]

    if decision:
        lines += [f"## Preliminary decision: {decision.decision}", "", "### Pros", ""]
        lines += _bullets(decision.pros)
        lines += ["", "### Cons", ""]
        lines += _bullets(decision.cons)
        lines += ["", decision.explanation, ""]

    if consistency:
        lines += [
            "## Interview consistency",
            "",
            f"- Updated overall fit: {_score(consistency.updated_overall_fit_score)}",
            f"- Consistency score: {_score(consistency.consistency_score)}",
            f"- Gaps resolved: {_score(consistency.gap_resolutions.score)}",
            f"- Recommendation: {consistency.recommendation}",
            f"- Hiring decision: {consistency.hiring_decision} "
            f"({consistency.preliminary_hiring_decision})",
            "",
            consistency.summary,
            "",
            "### Gap resolutions",
            "",
        ]
        if not consistency.gap_resolutions.items:
            lines.append("_No gaps were assessed_")
        for res in consistency.gap_resolutions.items:
            mark = "✅" if res.is_resolved else "❌"
            lines.append(f"- {mark} **{res.gap}**: {res.resolution}")
        lines += ["", "### Inconsistencies", ""]
        lines += _bullets(consistency.inconsistencies.items)
        lines += ["", "### New in interview", ""]
        lines += _bullets(consistency.new_in_interview.items)
        lines += ["", "### Missing from interview", ""]
        lines += _bullets(consistency.missing_from_interview.items)
        lines += [
            "",
            f"### Soft skills ({_score(consistency.soft_skills_analysis.score)})",
            "",
            consistency.soft_skills_analysis.items,
            "",
            "### Pros for hiring",
            "",
        ]
        lines += _bullets(consistency.pros_for_hiring)
        lines += ["", "### Cons for hiring", ""]
        lines += _bullets(consistency.cons_for_hiring)
        lines.append("")

    lines += ["## Detailed analysis", ""]
    lines += _section_lines("Key responsibilities", analysis.key_responsibilities_match)
    lines += _section_lines("Required skills", analysis.required_skills_match)
    lines += _section_lines("Nice-to-have skills", analysis.nice_to_have_skills_match)
    lines += [
        f"### Company culture fit ({_score(analysis.company_culture_fit.score)})",
        "",
        analysis.company_culture_fit.analysis,
        "",
        "### Salary and benefits",
        "",
        analysis.salary_and_benefits or "_Not mentioned_",
        "",
        "### Compatibility gaps",
        "",
    ]
    lines += _bullets(analysis.compatibility_gaps)
    lines += ["", "### Red flags", ""]
    lines += _bullets(analysis.red_flags)
    lines += ["", "### Suggested interview questions", ""]
    lines += [f"{i}. {q}" for i, q in enumerate(analysis.interview_questions, start=1)] or ["_None_"]
    lines.append("")

    if rewritten:
        lines += ["## Rewritten resume", "", rewritten.rewritten_resume.strip(), ""]

    return "\n".join(lines).rstrip() + "\n"
