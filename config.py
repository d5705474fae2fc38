# config.py
"""
Environment settings, persisted user settings and logging setup.

Environment (read from .env when present):
- GEMINI_API_KEY / OPENAI_API_KEY / ANTHROPIC_API_KEY / GROQ_API_KEY
- LLM_PROVIDER, LLM_MODEL: defaults used when no user settings exist
- LLM_TEMPERATURE (0.3), LLM_TIMEOUT seconds (60)
- FETCH_PROXY_URL: optional proxy template for job URLs, must contain "{url}"
- FETCH_TIMEOUT seconds (20)
- HIRESIGHT_SETTINGS_PATH: where the UI stores provider/model/keys/language
- LOG_LEVEL (INFO)
"""
import os
import json
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from schemas import ApiKeys, LlmConfig, UserSettings

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SUPPORTED_LANGUAGES = {
    "en": "English",
    "pt": "Portuguese",
    "es": "Spanish",
}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


LLM_TEMPERATURE = _float_env("LLM_TEMPERATURE", 0.3)
LLM_TIMEOUT = _float_env("LLM_TIMEOUT", 60.0)
FETCH_TIMEOUT = _float_env("FETCH_TIMEOUT", 20.0)


def setup_logging() -> None:
    """Configure root logging once for the API server or the Streamlit app."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def get_fetch_proxy_url() -> Optional[str]:
    proxy = (os.getenv("FETCH_PROXY_URL") or "").strip()
    if proxy and "{url}" not in proxy:
        logger.warning("FETCH_PROXY_URL has no {url} placeholder, ignoring it")
        return None
    return proxy or None


def env_api_keys() -> ApiKeys:
    return ApiKeys(
        gemini=os.getenv("GEMINI_API_KEY") or None,
        openai=os.getenv("OPENAI_API_KEY") or None,
        anthropic=os.getenv("ANTHROPIC_API_KEY") or None,
        groq=os.getenv("GROQ_API_KEY") or None,
    )


def default_llm_config() -> LlmConfig:
    """LLM config built purely from the environment (used by the API)."""
    from llm_client import default_model

    provider = (os.getenv("LLM_PROVIDER") or "gemini").strip().lower()
    model = (os.getenv("LLM_MODEL") or "").strip() or default_model(provider)
    return LlmConfig(provider=provider, model=model, api_keys=env_api_keys())


def settings_path() -> Path:
    raw = os.getenv("HIRESIGHT_SETTINGS_PATH")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".hiresight" / "settings.json"


def load_user_settings(path: Optional[Path] = None) -> UserSettings:
    """
    Read persisted UI settings.
    A missing or unreadable file falls back to defaults from the environment.
    """
    path = path or settings_path()
    if path.exists():
        try:
            return UserSettings.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, ValueError) as e:
            logger.warning("Could not read settings from %s (%s), using defaults", path, e)
    return UserSettings(llm=default_llm_config())


def save_user_settings(settings: UserSettings, path: Optional[Path] = None) -> Path:
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(), indent=2), encoding="utf-8")
    logger.info("Saved settings to %s (provider=%s)", path, settings.llm.provider)
    return path


def language_name(code: str) -> str:
    """Map a language code to the name used in prompts; unknown codes pass through."""
    return SUPPORTED_LANGUAGES.get((code or "en").lower(), code)
