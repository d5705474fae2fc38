# openai_client.py
from typing import Any, Dict, List, Type

from pydantic import BaseModel

from errors import LLMResponseError
from file_utils import document_to_text
from llm_client import LLMClient, PromptPart, json_instructions
from schemas import DocumentInput


class OpenAIClient(LLMClient):
    """
    Chat Completions over plain HTTP.

    JSON mode only guarantees *some* JSON object, so the schema travels in the
    system prompt and the answer is validated on our side.
    """

    provider = "openai"
    base_url = "https://api.openai.com/v1"
    supports_files = True

    def _content_part(self, part: PromptPart) -> Dict[str, Any]:
        if isinstance(part, str):
            return {"type": "text", "text": part}
        if part.format == "file" and self.supports_files:
            file_content = part.content
            return {
                "type": "file",
                "file": {
                    "filename": file_content.filename or "document.pdf",
                    "file_data": f"data:{file_content.mime_type};base64,{file_content.data}",
                },
            }
        return {"type": "text", "text": document_to_text(part)}

    def build_payload(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": json_instructions(system_prompt, response_model)},
                {"role": "user", "content": [self._content_part(p) for p in parts]},
            ],
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

    def _generate(
        self,
        system_prompt: str,
        parts: List[PromptPart],
        response_model: Type[BaseModel],
    ) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        data = self._post(
            f"{self.base_url}/chat/completions",
            headers,
            self.build_payload(system_prompt, parts, response_model),
        )
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseError(f"Unexpected response shape from {self.label} API.") from e
