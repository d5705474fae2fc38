# resume_rewriter.py
from config import language_name
from file_utils import require_document
from llm_client import LLMClient
from schemas import DocumentInput, RewrittenResumeResult

SYSTEM_PROMPT_REWRITE = """
You are an expert resume writer. Rewrite a resume so it lines up better with a specific
job description, without fabricating anything. Keep a professional tone.

Write the resume in {language}.
"""

REWRITE_INSTRUCTIONS = """
Rewrite the original resume using Markdown formatting, emphasising the skills and
experiences that are most relevant to the job description.

Formatting rules:
- Markdown headings for sections (e.g. '## Professional Experience', '## Skills').
- Bold job titles (e.g. '**Senior Project Manager**').
- Italic company names and dates (e.g. '*Some Company | Jan 2020 - Present*').
- Bullet points ('-') for responsibilities and achievements under each role.

Content rules:
- Use keywords from the job description where they are accurate for this candidate.
- Rephrase bullet points to highlight achievements and impact.
- Do NOT add any skill, experience, certification or date that is not in the original
  resume. Only reorder, rephrase and emphasise what is already there.
- Return the complete rewritten resume as a single Markdown string.
"""


def rewrite_resume_for_job(
    client: LLMClient,
    job_input: DocumentInput,
    resume_input: DocumentInput,
    language: str = "en",
) -> RewrittenResumeResult:
    job_input = require_document(job_input, "Job description")
    resume_input = require_document(resume_input, "Resume")

    parts = [
        "Original Resume:",
        resume_input,
        "Target Job Description:",
        job_input,
        REWRITE_INSTRUCTIONS,
    ]
    system_prompt = SYSTEM_PROMPT_REWRITE.format(language=language_name(language))
    return client.call_json(system_prompt, parts, RewrittenResumeResult)
