# resume_matcher.py
from config import language_name
from file_utils import require_document
from llm_client import LLMClient
from schemas import DocumentInput, RecruiterAnalysisResult

SYSTEM_PROMPT_RECRUITER_ANALYSIS = """
You are an expert HR recruiter analysing a candidate's resume against a job description.
Base every statement only on the two documents you receive; never assume experience
that is not written down.

Write all free-text fields in {language}.
"""

ANALYSIS_INSTRUCTIONS = """
Analyse the resume against the job description.

- For each section (key responsibilities, required skills, nice-to-have skills), list every
  item from the job description and rate how well the resume matches it
  ("Match", "Partial" or "No Match") with a short factual explanation.
- Score each section and the company culture fit from 0 to 100.
- Give an overall fit score (0-100) and explain it with concrete evidence.
- List the specific compatibility gaps between the resume and the core requirements.
- Suggest interview questions that probe those gaps and the resume details.
- List any red flags.
"""


def analyze_for_recruiter(
    client: LLMClient,
    job_input: DocumentInput,
    resume_input: DocumentInput,
    language: str = "en",
) -> RecruiterAnalysisResult:
    """
    Main recruiter pass: section-by-section match, fit score, gaps,
    red flags and interview questions.
    """
    job_input = require_document(job_input, "Job description")
    resume_input = require_document(resume_input, "Resume")

    parts = [
        "Job Description:",
        job_input,
        "Candidate's Resume:",
        resume_input,
        ANALYSIS_INSTRUCTIONS,
    ]
    system_prompt = SYSTEM_PROMPT_RECRUITER_ANALYSIS.format(language=language_name(language))
    return client.call_json(system_prompt, parts, RecruiterAnalysisResult)
