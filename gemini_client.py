# gemini_client.py
import base64
from typing import List, Type

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel

from errors import LLMError
from llm_client import LLMClient, PromptPart
from schemas import DocumentInput


def build_content_part(part: PromptPart) -> types.Part:
    """Text goes in as text, uploaded files as inline bytes."""
    if isinstance(part, str):
        return types.Part.from_text(text=part)
    if isinstance(part, DocumentInput) and part.format == "file":
        return types.Part.from_bytes(
            data=base64.b64decode(part.content.data),
            mime_type=part.content.mime_type,
        )
    return types.Part.from_text(text=part.content)


class GeminiClient(LLMClient):
    """Gemini through the google-genai SDK, with the schema enforced server-side."""

    provider = "gemini"

    def __init__(self, model: str, api_key: str, **kwargs):
        super().__init__(model, api_key, **kwargs)
        # HttpOptions.timeout is in milliseconds
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
        )

    def _generate(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[build_content_part(p) for p in parts],
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=self.temperature,
                    response_mime_type="application/json",
                    response_schema=response_model,
                ),
            )
        except errors.APIError as e:
            raise LLMError(f"Gemini API error: {e}") from e
        except httpx.HTTPError as e:
            raise LLMError(f"Gemini API request failed: {e}") from e

        return (response.text or "").strip()
