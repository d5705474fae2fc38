# app.py
import logging

import pandas as pd
import streamlit as st

from config import SUPPORTED_LANGUAGES, load_user_settings, save_user_settings, setup_logging
from errors import HireSightError, MissingInputError
from evaluator import analyze_interview_consistency
from file_utils import parse_document_file
from highlighter import count_keyword_hits, highlight_keywords, keywords_from_analysis
from llm_client import AVAILABLE_MODELS, PROVIDER_LABELS, default_model, get_llm_client
from report_generator import build_markdown_report, generate_preliminary_decision
from resume_matcher import analyze_for_recruiter
from resume_rewriter import rewrite_resume_for_job
from schemas import ApiKeys, DocumentInput, LlmConfig, UserSettings
from url_parser import parse_url_content

setup_logging()
logger = logging.getLogger(__name__)

# ---------- Streamlit Page Config ----------
st.set_page_config(
    page_title="HireSight · AI Recruiter Assistant",
    layout="wide",
    page_icon="🧭",
)

STATUS_BADGES = {
    "Match": "🟢 Match",
    "Partial": "🟡 Partial",
    "No Match": "🔴 No Match",
}


# ---------- Session State Initialization ----------
if "settings" not in st.session_state:
    st.session_state.settings = load_user_settings()

for key in (
    "job_input", "resume_input", "analysis", "decision", "consistency", "rewritten",
    "error", "notice", "pending_action",
):
    if key not in st.session_state:
        st.session_state[key] = None

if "busy" not in st.session_state:
    # one LLM request at a time; buttons are disabled while set
    st.session_state.busy = False


def reset_results():
    for key in ("analysis", "decision", "consistency", "rewritten", "error"):
        st.session_state[key] = None


def request_action(name: str) -> None:
    """
    Button callback. Runs before the rerun, so every button on that run is
    drawn disabled; the action itself runs at the end of the script.
    """
    st.session_state.pending_action = name
    st.session_state.busy = True
    st.session_state.error = None


def run_action(spinner_text: str, state_key: str, action, success_message: str) -> None:
    """
    Run one LLM-backed action, store its result in session state and record
    success or failure for the next run to show. Nothing is retried.
    """
    try:
        with st.spinner(spinner_text):
            st.session_state[state_key] = action()
        st.session_state.notice = success_message
    except HireSightError as e:
        st.session_state.error = str(e)
        logger.warning("%s failed: %s", state_key, e)
    except Exception as e:
        st.session_state.error = f"Something went wrong: {e}"
        logger.exception("Unexpected error during %s", state_key)
    finally:
        st.session_state.busy = False


def current_client():
    return get_llm_client(st.session_state.settings.llm)


def current_language() -> str:
    return st.session_state.settings.language


# ---------- Sidebar: provider settings ----------
def render_sidebar():
    settings: UserSettings = st.session_state.settings
    st.sidebar.title("⚙️ Settings")

    providers = list(AVAILABLE_MODELS.keys())
    current_provider = settings.llm.provider if settings.llm.provider in providers else "gemini"
    provider = st.sidebar.selectbox(
        "AI provider",
        providers,
        index=providers.index(current_provider),
        format_func=lambda p: PROVIDER_LABELS[p],
    )

    model_ids = [m["id"] for m in AVAILABLE_MODELS[provider]]
    model_names = {m["id"]: m["name"] for m in AVAILABLE_MODELS[provider]}
    current_model = settings.llm.model if settings.llm.model in model_ids else default_model(provider)
    model = st.sidebar.selectbox(
        "Model",
        model_ids,
        index=model_ids.index(current_model),
        format_func=lambda m: model_names[m],
    )

    languages = list(SUPPORTED_LANGUAGES.keys())
    language = st.sidebar.selectbox(
        "Analysis language",
        languages,
        index=languages.index(settings.language) if settings.language in languages else 0,
        format_func=lambda code: SUPPORTED_LANGUAGES[code],
    )

    with st.sidebar.expander("API keys", expanded=False):
        st.caption("Keys are stored locally on this machine. Environment variables are used when empty.")
        keys = settings.llm.api_keys
        new_keys = ApiKeys(
            gemini=st.text_input("Gemini API key", value=keys.gemini or "", type="password") or None,
            openai=st.text_input("OpenAI API key", value=keys.openai or "", type="password") or None,
            anthropic=st.text_input("Anthropic API key", value=keys.anthropic or "", type="password") or None,
            groq=st.text_input("Groq API key", value=keys.groq or "", type="password") or None,
        )

    new_settings = UserSettings(
        llm=LlmConfig(provider=provider, model=model, api_keys=new_keys),
        language=language,
    )
    st.session_state.settings = new_settings

    if st.sidebar.button("💾 Save settings"):
        try:
            path = save_user_settings(new_settings)
            st.sidebar.success(f"Settings saved to {path}")
        except OSError as e:
            st.sidebar.error(f"Could not save settings: {e}")

    st.sidebar.markdown("---")
    if st.sidebar.button("🔁 Start over", disabled=st.session_state.busy):
        reset_results()
        st.session_state.job_input = None
        st.session_state.resume_input = None
        st.rerun()


# ---------- Input helpers ----------
def resolve_job_input(mode: str, text: str, url: str, upload) -> DocumentInput:
    if mode == "Text":
        return DocumentInput.from_text(text or "")
    if mode == "URL":
        if not (url or "").strip():
            raise MissingInputError("Job description is missing.")
        return DocumentInput.from_text(parse_url_content(url.strip()))
    if upload is None:
        raise MissingInputError("Job description is missing.")
    return parse_document_file(upload.name, upload.getvalue(), upload.type)


def resolve_resume_input(mode: str, text: str, upload) -> DocumentInput:
    if mode == "Text":
        return DocumentInput.from_text(text or "")
    if upload is None:
        raise MissingInputError("Resume is missing.")
    return parse_document_file(upload.name, upload.getvalue(), upload.type)


# ======================================================================
#                           INPUT SECTION
# ======================================================================
def render_inputs():
    st.markdown("## 🧭 HireSight")
    st.caption(
        "Paste or upload a job description and a resume. The selected AI model scores the fit, "
        "lists gaps and red flags, and suggests interview questions."
    )

    col_job, col_resume = st.columns(2)

    with col_job:
        st.markdown("#### Job description")
        job_mode = st.radio("Job input", ["Text", "URL", "File"], horizontal=True, key="job_mode")
        job_text, job_url, job_file = "", "", None
        if job_mode == "Text":
            job_text = st.text_area(
                "Paste the job description",
                height=260,
                placeholder="Paste the full job description...",
                key="job_text",
            )
        elif job_mode == "URL":
            job_url = st.text_input("Job posting URL", placeholder="https://...", key="job_url")
        else:
            job_file = st.file_uploader("Upload job description (PDF or DOCX)", type=["pdf", "docx"], key="job_file")

    with col_resume:
        st.markdown("#### Resume")
        resume_mode = st.radio("Resume input", ["Text", "File"], horizontal=True, key="resume_mode")
        resume_text, resume_file = "", None
        if resume_mode == "Text":
            resume_text = st.text_area(
                "Paste the resume",
                height=260,
                placeholder="Paste the candidate's resume...",
                key="resume_text",
            )
        else:
            resume_file = st.file_uploader("Upload resume (PDF or DOCX)", type=["pdf", "docx"], key="resume_file")

    job_missing = (
        (job_mode == "Text" and not job_text.strip())
        or (job_mode == "URL" and not job_url.strip())
        or (job_mode == "File" and job_file is None)
    )
    resume_missing = (
        (resume_mode == "Text" and not resume_text.strip())
        or (resume_mode == "File" and resume_file is None)
    )

    st.button(
        "🔍 Analyze candidate",
        disabled=st.session_state.busy or job_missing or resume_missing,
        on_click=request_action,
        args=("analysis",),
    )


def analyze_current_inputs():
    """Read the input widgets by key; only the selected mode's widget is used."""
    ss = st.session_state
    job_input = resolve_job_input(ss.job_mode, ss.get("job_text", ""), ss.get("job_url", ""), ss.get("job_file"))
    resume_input = resolve_resume_input(ss.resume_mode, ss.get("resume_text", ""), ss.get("resume_file"))
    ss.job_input = job_input
    ss.resume_input = resume_input
    return analyze_for_recruiter(current_client(), job_input, resume_input, current_language())


# ======================================================================
#                           RESULTS SECTION
# ======================================================================
def compatibility_label(score: float) -> str:
    if score >= 80:
        return "High compatibility"
    if score >= 60:
        return "Medium compatibility"
    return "Low compatibility"


def render_section_items(section):
    if not section.items:
        st.caption("No items were identified for this section.")
        return
    for item in section.items:
        st.markdown(f"**{STATUS_BADGES.get(item.status, item.status)}** · {item.item}")
        st.caption(item.explanation)


def render_analysis():
    analysis = st.session_state.analysis

    st.markdown("---")
    st.markdown(f"## Results · {analysis.job_title}")

    col_score, col_summary = st.columns([1, 2.3])
    with col_score:
        st.metric("Overall fit", f"{analysis.overall_fit_score:.0f} / 100")
        st.progress(int(analysis.overall_fit_score) / 100.0)
        st.caption(compatibility_label(analysis.overall_fit_score))
    with col_summary:
        st.markdown("### Summary")
        st.write(analysis.summary)
        st.markdown("### Why this score")
        st.write(analysis.fit_explanation)

    scores = {
        "Key responsibilities": analysis.key_responsibilities_match.score,
        "Required skills": analysis.required_skills_match.score,
        "Nice-to-have skills": analysis.nice_to_have_skills_match.score,
        "Culture fit": analysis.company_culture_fit.score,
    }
    df_scores = pd.DataFrame({"Section": list(scores.keys()), "Score": list(scores.values())}).set_index("Section")
    st.bar_chart(df_scores)

    tab_resp, tab_req, tab_nice, tab_culture = st.tabs(
        ["Key responsibilities", "Required skills", "Nice-to-have", "Culture & salary"]
    )
    with tab_resp:
        render_section_items(analysis.key_responsibilities_match)
    with tab_req:
        render_section_items(analysis.required_skills_match)
    with tab_nice:
        render_section_items(analysis.nice_to_have_skills_match)
    with tab_culture:
        st.write(analysis.company_culture_fit.analysis)
        st.markdown("**Salary & benefits**")
        st.write(analysis.salary_and_benefits or "Not mentioned.")

    col_gaps, col_flags = st.columns(2)
    with col_gaps:
        st.markdown("### Compatibility gaps")
        for gap in analysis.compatibility_gaps:
            st.write("- ", gap)
        if not analysis.compatibility_gaps:
            st.caption("No gaps identified.")
    with col_flags:
        st.markdown("### 🚩 Red flags")
        for flag in analysis.red_flags:
            st.write("- ", flag)
        if not analysis.red_flags:
            st.caption("No red flags identified.")

    st.markdown("### Suggested interview questions")
    for idx, question in enumerate(analysis.interview_questions, start=1):
        st.markdown(f"{idx}. {question}")


def render_decision():
    st.markdown("---")
    st.markdown("## Preliminary decision")
    st.button(
        "⚖️ Generate interview decision",
        disabled=st.session_state.busy,
        on_click=request_action,
        args=("decision",),
    )

    decision = st.session_state.decision
    if not decision:
        return
    if decision.decision == "Recommended for Interview":
        st.success(f"**{decision.decision}**")
    else:
        st.error(f"**{decision.decision}**")
    col_pros, col_cons = st.columns(2)
    with col_pros:
        st.markdown("#### Pros")
        for pro in decision.pros:
            st.write("✓ ", pro)
    with col_cons:
        st.markdown("#### Cons")
        for con in decision.cons:
            st.write("✗ ", con)
    st.write(decision.explanation)


def render_consistency():
    st.markdown("---")
    st.markdown("## Interview consistency")
    st.caption("After the interview, paste the transcript to check it against the resume and the gaps above.")
    transcript = st.text_area("Interview transcript", height=200, key="interview_transcript")

    st.button(
        "🗣️ Analyze interview",
        disabled=st.session_state.busy or not transcript.strip(),
        on_click=request_action,
        args=("consistency",),
    )

    result = st.session_state.consistency
    if not result:
        return

    col_a, col_b, col_c = st.columns(3)
    with col_a:
        st.metric("Updated overall fit", f"{result.updated_overall_fit_score:.0f} / 100")
    with col_b:
        st.metric("Consistency", f"{result.consistency_score:.0f} / 100")
    with col_c:
        st.metric("Gaps resolved", f"{result.gap_resolutions.score:.0f}%")

    st.markdown(f"**{result.hiring_decision}** · {result.recommendation} · {result.preliminary_hiring_decision}")
    st.write(result.summary)

    st.markdown("### Gap resolutions")
    for res in result.gap_resolutions.items:
        mark = "✅" if res.is_resolved else "❌"
        st.markdown(f"{mark} **{res.gap}**")
        st.caption(res.resolution)

    col_left, col_right = st.columns(2)
    with col_left:
        st.markdown(f"#### Inconsistencies ({result.inconsistencies.score:.0f})")
        for item in result.inconsistencies.items:
            st.write("- ", item)
        st.markdown(f"#### New in interview ({result.new_in_interview.score:.0f})")
        for item in result.new_in_interview.items:
            st.write("- ", item)
        st.markdown("#### Pros for hiring")
        for item in result.pros_for_hiring:
            st.write("✓ ", item)
    with col_right:
        st.markdown(f"#### Missing from interview ({result.missing_from_interview.score:.0f})")
        for item in result.missing_from_interview.items:
            st.write("- ", item)
        st.markdown(f"#### Soft skills ({result.soft_skills_analysis.score:.0f})")
        st.write(result.soft_skills_analysis.items)
        st.markdown("#### Cons for hiring")
        for item in result.cons_for_hiring:
            st.write("✗ ", item)


def render_rewrite():
    st.markdown("---")
    st.markdown("## Resume rewrite")
    st.caption("Rewrites the resume around this job description without inventing experience.")
    st.button(
        "✍️ Rewrite resume for this job",
        disabled=st.session_state.busy,
        on_click=request_action,
        args=("rewritten",),
    )

    rewritten = st.session_state.rewritten
    if not rewritten:
        return

    default_keywords = ", ".join(keywords_from_analysis(st.session_state.analysis))
    raw_keywords = st.text_input("Keywords to highlight (comma separated)", value=default_keywords)
    keywords = [k.strip() for k in raw_keywords.split(",") if k.strip()]

    hits = count_keyword_hits(rewritten.rewritten_resume, keywords)
    if hits:
        covered = sum(1 for n in hits.values() if n)
        st.caption(f"{covered} of {len(hits)} keywords appear in the rewritten resume.")

    with st.container(border=True):
        st.markdown(highlight_keywords(rewritten.rewritten_resume, keywords))

    st.download_button(
        "⬇️ Download rewritten resume",
        data=rewritten.rewritten_resume,
        file_name="Rewritten-Resume.txt",
        mime="text/plain",
    )


def render_report_download():
    st.markdown("---")
    report = build_markdown_report(
        st.session_state.analysis,
        st.session_state.decision,
        st.session_state.consistency,
        st.session_state.rewritten,
    )
    st.download_button(
        "📄 Download full report (Markdown)",
        data=report,
        file_name="HireSight-Report.md",
        mime="text/markdown",
    )


# ======================================================================
#                           MAIN
# ======================================================================
ACTIONS = {
    "analysis": (
        "Analysing resume against the job description...",
        analyze_current_inputs,
        "Analysis complete.",
    ),
    "decision": (
        "Weighing pros and cons...",
        lambda: generate_preliminary_decision(current_client(), st.session_state.analysis, current_language()),
        "Decision generated.",
    ),
    "consistency": (
        "Comparing the interview with the resume...",
        lambda: analyze_interview_consistency(
            current_client(),
            st.session_state.job_input,
            st.session_state.resume_input,
            st.session_state.get("interview_transcript", ""),
            st.session_state.analysis.compatibility_gaps,
            current_language(),
        ),
        "Interview analysis complete.",
    ),
    "rewritten": (
        "Rewriting the resume...",
        lambda: rewrite_resume_for_job(
            current_client(),
            st.session_state.job_input,
            st.session_state.resume_input,
            current_language(),
        ),
        "Resume rewritten.",
    ),
}

render_sidebar()
render_inputs()

if st.session_state.notice:
    st.toast(st.session_state.notice, icon="✅")
    st.session_state.notice = None

if st.session_state.error:
    st.error(st.session_state.error)

if st.session_state.analysis:
    render_analysis()
    render_decision()
    render_consistency()
    render_rewrite()
    render_report_download()

# widgets above were drawn disabled; run the queued action, then redraw them enabled
pending = st.session_state.pending_action
if pending:
    st.session_state.pending_action = None
    if pending == "analysis":
        reset_results()
    spinner_text, action, success_message = ACTIONS[pending]
    run_action(spinner_text, pending, action, success_message)
    st.rerun()
