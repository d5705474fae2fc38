# llm_client.py
"""
Provider-neutral LLM client.

Every provider wrapper subclasses LLMClient and implements _generate(), which
sends the prompt and returns the raw text of the model's answer. call_json()
then parses that text into the requested pydantic model.
"""
import re
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError

from config import LLM_TEMPERATURE, LLM_TIMEOUT, env_api_keys
from errors import LLMConfigError, LLMError, LLMResponseError
from schemas import DocumentInput, LlmConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

PromptPart = Union[str, DocumentInput]

AVAILABLE_MODELS: Dict[str, List[Dict[str, str]]] = {
    "gemini": [
        {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
        {"id": "gemini-2.5-pro", "name": "Gemini 2.5 Pro"},
        {"id": "gemini-2.0-flash", "name": "Gemini 2.0 Flash"},
    ],
    "openai": [
        {"id": "gpt-4o", "name": "GPT-4o"},
        {"id": "gpt-4o-mini", "name": "GPT-4o mini"},
        {"id": "gpt-4-turbo", "name": "GPT-4 Turbo"},
    ],
    "anthropic": [
        {"id": "claude-3-5-sonnet-latest", "name": "Claude 3.5 Sonnet"},
        {"id": "claude-3-5-haiku-latest", "name": "Claude 3.5 Haiku"},
        {"id": "claude-3-opus-20240229", "name": "Claude 3 Opus"},
    ],
    "groq": [
        {"id": "llama-3.3-70b-versatile", "name": "LLaMA 3.3 70b"},
        {"id": "llama-3.1-8b-instant", "name": "LLaMA 3.1 8b"},
    ],
}

PROVIDER_LABELS = {
    "gemini": "Gemini",
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "groq": "Groq",
}

# ```json ... ``` block, or failing that the outermost {...} span
JSON_BLOCK_RE = re.compile(r"```json\s*([\s\S]*?)\s*```|(\{[\s\S]*\})")


def default_model(provider: str) -> str:
    models = AVAILABLE_MODELS.get(provider) or AVAILABLE_MODELS["gemini"]
    return models[0]["id"]


def schema_to_string(model: Type[BaseModel]) -> str:
    try:
        return json.dumps(model.model_json_schema(), indent=2)
    except (TypeError, ValueError):
        return "{}"


def extract_json_block(text: str) -> Optional[str]:
    match = JSON_BLOCK_RE.search(text or "")
    if not match:
        return None
    return (match.group(1) or match.group(2)).strip()


def parse_json_response(text: str, response_model: Type[T], provider: str) -> T:
    """
    Parse the model's text into response_model.

    Tries the whole text first, then a fenced ```json block or the outermost
    braces, since some providers wrap the object in prose or markdown.
    """
    text = (text or "").strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        candidate = extract_json_block(text)
        if candidate is None:
            raise LLMResponseError(f"Invalid JSON response from {provider} API.")
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON from %s: %.500s", provider, candidate)
            raise LLMResponseError(f"Failed to parse JSON response from {provider} API.") from e

    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        logger.error("%s response does not match %s: %s", provider, response_model.__name__, e)
        raise LLMResponseError(
            f"{provider} API returned JSON that does not match the expected "
            f"{response_model.__name__} format."
        ) from e


def json_instructions(system_prompt: str, response_model: Type[BaseModel]) -> str:
    """System prompt for providers without native schema enforcement."""
    return (
        f"{system_prompt}\n\n"
        "Your output must be a single, valid JSON object that conforms to the schema below. "
        "Do not include any text, explanation, or markdown formatting outside of the JSON object.\n\n"
        f"Schema:\n{schema_to_string(response_model)}"
    )


class LLMClient:
    """Base class of the provider wrappers."""

    provider = ""

    def __init__(
        self,
        model: str,
        api_key: Optional[str],
        *,
        temperature: float = LLM_TEMPERATURE,
        timeout: float = LLM_TIMEOUT,
    ):
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout

    @property
    def label(self) -> str:
        return PROVIDER_LABELS.get(self.provider, self.provider)

    def call_json(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[T],
    ) -> T:
        logger.info(
            "Calling %s model=%s for %s (%d prompt parts)",
            self.label, self.model, response_model.__name__, len(parts),
        )
        text = self._generate(system_prompt, parts, response_model)
        return parse_json_response(text, response_model, self.label)

    def _generate(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> str:
        raise NotImplementedError

    def _post(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON body and return the decoded JSON answer."""
        try:
            response = requests.post(url, headers=headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise LLMError(f"{self.label} API request failed: {e}") from e

        if not response.ok:
            raise LLMError(
                f"{self.label} API error: {response.status_code} {response.reason} - {response.text}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise LLMResponseError(f"{self.label} API returned a non-JSON body.") from e


def _require_key(provider: str, key: Optional[str]) -> str:
    if not key:
        raise LLMConfigError(
            f"API Key for {PROVIDER_LABELS[provider]} is not set. Please add it in the settings."
        )
    return key


def get_llm_client(config: LlmConfig) -> LLMClient:
    """
    Build the client for config.provider.
    Keys come from the settings first, then from the environment.
    """
    from anthropic_client import AnthropicClient
    from gemini_client import GeminiClient
    from groq_client import GroqClient
    from openai_client import OpenAIClient

    env_keys = env_api_keys()
    keys = config.api_keys
    provider = (config.provider or "").lower()
    model = config.model or default_model(provider)

    if provider == "openai":
        return OpenAIClient(model, _require_key(provider, keys.openai or env_keys.openai))
    if provider == "anthropic":
        return AnthropicClient(model, _require_key(provider, keys.anthropic or env_keys.anthropic))
    if provider == "groq":
        return GroqClient(model, _require_key(provider, keys.groq or env_keys.groq))

    if provider != "gemini":
        logger.warning("Unknown LLM provider %r, falling back to Gemini", config.provider)
        model = config.model if config.model.startswith("gemini") else default_model("gemini")
    return GeminiClient(model, _require_key("gemini", keys.gemini or env_keys.gemini))
