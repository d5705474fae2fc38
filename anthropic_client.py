# anthropic_client.py
from typing import Any, Dict, List, Type

from pydantic import BaseModel

from errors import LLMResponseError
from llm_client import LLMClient, PromptPart, json_instructions

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 4096


def build_content_block(part: PromptPart) -> Dict[str, Any]:
    if isinstance(part, str):
        return {"type": "text", "text": part}
    if part.format == "file":
        return {
            "type": "document",
            "source": {
                "type": "base64",
                "media_type": part.content.mime_type,
                "data": part.content.data,
            },
        }
    return {"type": "text", "text": part.content}


class AnthropicClient(LLMClient):
    """
    Messages API over plain HTTP.
    There is no JSON mode: the schema goes in the system prompt and the object
    is pulled out of the reply text (fenced block or outermost braces).
    """

    provider = "anthropic"

    def build_payload(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "temperature": self.temperature,
            "system": json_instructions(system_prompt, response_model),
            "messages": [
                {"role": "user", "content": [build_content_block(p) for p in parts]},
            ],
        }

    def _generate(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> str:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        data = self._post(ANTHROPIC_URL, headers, self.build_payload(system_prompt, parts, response_model))

        blocks = data.get("content") or []
        texts = [b.get("text", "") for b in blocks if isinstance(b, dict) and b.get("type") == "text"]
        if not texts:
            raise LLMResponseError("Invalid JSON response from Anthropic API.")
        return texts[0]
