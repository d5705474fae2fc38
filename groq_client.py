# groq_client.py
from openai_client import OpenAIClient


class GroqClient(OpenAIClient):
    """Groq speaks the OpenAI chat format but only accepts text, so PDFs are converted first."""

    provider = "groq"
    base_url = "https://api.groq.com/openai/v1"
    supports_files = False
