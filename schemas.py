"""
Data models shared by the LLM clients, the API and the UI.

The result models double as the JSON schema sent to the providers, so none of
their fields carry defaults (Gemini rejects response schemas with defaults).
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, model_validator


def clamp_score(value: float) -> float:
    """Keep model-reported scores inside 0..100."""
    return max(0.0, min(100.0, float(value)))


Score = Annotated[float, AfterValidator(clamp_score)]


# ---------- Inputs ----------

class FileContent(BaseModel):
    data: str  # base64, no data-URL prefix
    mime_type: str
    filename: Optional[str] = None


class DocumentInput(BaseModel):
    """A job description or resume, either as plain text or as a binary file."""

    format: Literal["text", "file"] = "text"
    content: Union[str, FileContent]

    @model_validator(mode="after")
    def _content_matches_format(self):
        if self.format == "text" and not isinstance(self.content, str):
            raise ValueError("text input must carry string content")
        if self.format == "file" and not isinstance(self.content, FileContent):
            raise ValueError("file input must carry data and mime_type")
        return self

    @classmethod
    def from_text(cls, text: str) -> "DocumentInput":
        return cls(format="text", content=text)

    def is_empty(self) -> bool:
        if isinstance(self.content, FileContent):
            return not self.content.data
        return not self.content.strip()


# ---------- Recruiter analysis ----------

MatchStatus = Literal["Match", "Partial", "No Match"]


class MatchedItem(BaseModel):
    item: str = Field(description="The specific responsibility or skill from the job description.")
    status: MatchStatus = Field(
        description="'Match' requires direct evidence in the resume, 'Partial' means related but "
        "not direct experience, 'No Match' means the skill is absent."
    )
    explanation: str = Field(
        description="A brief, factual explanation of the status, referencing specific parts of the resume."
    )


class SectionMatch(BaseModel):
    items: List[MatchedItem]
    score: Score = Field(
        description="Score from 0 to 100 for this section, weighted mostly by 'Match' on required items."
    )


class AnalysisWithScore(BaseModel):
    analysis: str = Field(description="The detailed analysis text.")
    score: Score = Field(description="Score from 0 to 100 for this analysis.")


class RecruiterAnalysisResult(BaseModel):
    job_title: str = Field(description="The job title from the job description.")
    summary: str = Field(
        description="A concise summary of the candidate's fit for the role, based only on the provided documents."
    )
    key_responsibilities_match: SectionMatch
    required_skills_match: SectionMatch
    nice_to_have_skills_match: SectionMatch
    company_culture_fit: AnalysisWithScore
    salary_and_benefits: str = Field(
        description="Salary expectations and benefits, only if explicitly mentioned in the resume."
    )
    red_flags: List[str] = Field(
        description="Potential red flags. A job ending 'Present' or in the current month is the current "
        "job, not a typo. Only flag dates that start in the future or unexplained long gaps."
    )
    interview_questions: List[str] = Field(
        description="Suggested interview questions based on the compatibility gaps and resume details."
    )
    overall_fit_score: Score = Field(
        description="Overall fit from 0 to 100, weighting required skills and key responsibilities most."
    )
    fit_explanation: str = Field(
        description="Explanation of the overall fit score with concrete evidence from the analysis."
    )
    compatibility_gaps: List[str] = Field(
        description="Specific, crucial gaps between the resume and the job's core requirements."
    )


class PreliminaryDecisionResult(BaseModel):
    decision: Literal["Recommended for Interview", "Not Recommended"]
    pros: List[str] = Field(description="The strongest points in favour of interviewing the candidate.")
    cons: List[str] = Field(description="The most significant drawbacks against interviewing.")
    explanation: str = Field(description="A concise justification based on the pros and cons.")


# ---------- Interview consistency ----------

class TextSection(BaseModel):
    items: str
    score: Score = Field(description="Score from 0 to 100 based on the analysis.")


class ListSection(BaseModel):
    items: List[str]
    score: Score = Field(description="Score from 0 to 100. For inconsistencies, a lower score is better.")


class GapResolutionItem(BaseModel):
    gap: str = Field(description="The compatibility gap identified before the interview.")
    resolution: str = Field(
        description="What the candidate said about this gap, quoted or summarised. "
        "If the gap was not addressed, say why."
    )
    is_resolved: bool = Field(
        description="True only if the answer fully and satisfactorily resolves the gap."
    )


class GapResolutionSection(BaseModel):
    items: List[GapResolutionItem]
    score: Score = Field(description="Percentage (0-100) of gaps resolved.")


class ConsistencyAnalysisResult(BaseModel):
    consistency_score: Score = Field(
        description="How aligned the interview answers were with the resume (0-100). High = consistent."
    )
    summary: str = Field(description="A concise narrative summary of the consistency analysis.")
    recommendation: Literal["Strong Fit", "Partial Fit", "Weak Fit"]
    soft_skills_analysis: TextSection = Field(
        description="Soft skills shown in the interview (communication, problem-solving, ...)."
    )
    inconsistencies: ListSection = Field(
        description="Discrepancies between resume and interview, e.g. resume says 'led', interview says 'assisted'."
    )
    missing_from_interview: ListSection = Field(
        description="Important resume points that were not discussed in the interview."
    )
    new_in_interview: ListSection = Field(
        description="New, positive skills or experiences revealed in the interview that are not on the resume."
    )
    gap_resolutions: GapResolutionSection = Field(
        description="For each pre-identified compatibility gap, whether the interview resolved it."
    )
    pros_for_hiring: List[str]
    cons_for_hiring: List[str]
    updated_overall_fit_score: Score = Field(
        description="The initial overall fit score recalculated (0-100) to include interview performance."
    )
    hiring_decision: Literal["Recommended for Hire", "Not Recommended"]
    preliminary_hiring_decision: Literal["Likely Hire", "Unlikely Hire", "More Information Needed"]


# ---------- Resume rewrite ----------

class RewrittenResumeResult(BaseModel):
    rewritten_resume: str = Field(description="The full text of the rewritten resume in Markdown.")


# ---------- Settings ----------

class ApiKeys(BaseModel):
    gemini: Optional[str] = None
    openai: Optional[str] = None
    anthropic: Optional[str] = None
    groq: Optional[str] = None


class LlmConfig(BaseModel):
    provider: str = "gemini"
    model: str = "gemini-2.5-flash"
    api_keys: ApiKeys = Field(default_factory=ApiKeys)


class UserSettings(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    language: str = "en"
