# evaluator.py
from typing import List, Optional

from config import language_name
from errors import MissingInputError
from file_utils import require_document
from llm_client import LLMClient
from schemas import ConsistencyAnalysisResult, DocumentInput

SYSTEM_PROMPT_CONSISTENCY = """
You are an expert HR analyst assessing the consistency between a candidate's resume,
their interview and the job description.

Write all free-text fields in {language}.
"""

CONSISTENCY_INSTRUCTIONS = """
Analyse the interview transcript in the context of the resume, the job description and the
previously identified compatibility gaps.

- For each compatibility gap, decide whether the interview resolved it. The resolution must
  quote or summarise the relevant part of the interview. Mark a gap as resolved only when it
  was fully and satisfactorily addressed; otherwise explain why not.
- Assess how consistent the interview answers are with the resume and list any discrepancies.
- List new skills or experiences that came up in the interview but are not on the resume.
- List important resume points that were not discussed.
- Analyse the soft skills the candidate demonstrated.
- Give balanced pros and cons for hiring, an updated overall fit score and a final
  hiring decision.
"""


def format_gaps(compatibility_gaps: Optional[List[str]]) -> str:
    gaps = [g.strip() for g in (compatibility_gaps or []) if g and g.strip()]
    if not gaps:
        return "Previously identified compatibility gaps:\n- None identified"
    return "Previously identified compatibility gaps:\n- " + "\n- ".join(gaps)


def analyze_interview_consistency(
    client: LLMClient,
    job_input: DocumentInput,
    resume_input: DocumentInput,
    interview_transcript: str,
    compatibility_gaps: Optional[List[str]] = None,
    language: str = "en",
) -> ConsistencyAnalysisResult:
    """
    Follow-up pass after the interview: compares the transcript with the
    resume and JD and checks which pre-interview gaps were resolved.
    """
    job_input = require_document(job_input, "Job description")
    resume_input = require_document(resume_input, "Resume")
    if not (interview_transcript or "").strip():
        raise MissingInputError("Interview transcript is missing.")

    parts = [
        "Job Description:",
        job_input,
        "Candidate's Resume:",
        resume_input,
        f"Interview Transcript:\n{interview_transcript.strip()}",
        format_gaps(compatibility_gaps),
        CONSISTENCY_INSTRUCTIONS,
    ]
    system_prompt = SYSTEM_PROMPT_CONSISTENCY.format(language=language_name(language))
    return client.call_json(system_prompt, parts, ConsistencyAnalysisResult)
