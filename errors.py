# errors.py
"""
Application-level exceptions.

Every failure the app can surface is one of these. They are raised where the
failure happens and only caught by the API handlers and the Streamlit UI,
which show the message as-is.
"""


class HireSightError(Exception):
    """Base class for all errors shown to the user."""


class MissingInputError(HireSightError, ValueError):
    """A required input (job description, resume, transcript) is empty."""


class UnsupportedFileTypeError(HireSightError, ValueError):
    """Uploaded document is not a PDF or DOCX, or could not be read."""


class UrlContentError(HireSightError):
    """Fetching or extracting a job posting from a URL failed."""


class LLMError(HireSightError):
    """The provider call failed (transport error or non-2xx response)."""


class LLMConfigError(LLMError):
    """Provider cannot be used as configured, e.g. missing API key."""


class LLMResponseError(LLMError):
    """The provider answered but the body was not the JSON we asked for."""
