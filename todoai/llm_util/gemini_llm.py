"""
Google Gemini adapter that talks to the public generateContent REST endpoint.

The request carries a single user message and the API key as the `key`
query parameter. The generated text is read from
candidates[0].content.parts[0].text.

PROMPT> GEMINI_API_KEY=your-key python -m todoai.llm_util.gemini_llm
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import requests
from llama_index.core.llms import CompletionResponse, CompletionResponseGen, CustomLLM, LLMMetadata
from llama_index.core.llms.callbacks import llm_completion_callback
from pydantic import Field, PrivateAttr

from todoai.errors import UpstreamError

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


def build_request_body(prompt: str) -> Dict[str, Any]:
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_generated_text(payload: Any) -> Optional[str]:
    """Return the text at candidates[0].content.parts[0].text, or None when any step is missing."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiLLM(CustomLLM):
    """Completion-only Gemini client. Failures are raised as UpstreamError."""

    model: str = Field(default=DEFAULT_GEMINI_MODEL, description="The Gemini model identifier")
    base_url: str = Field(default=GEMINI_BASE_URL, description="Prefix of the generateContent endpoint")
    timeout_seconds: float = Field(default=30.0, description="HTTP timeout for one generateContent call")
    context_window: int = 1048576
    num_output: int = 8192
    _api_key: Optional[str] = PrivateAttr(default=None)

    def __init__(self, api_key: Optional[str] = None, **kwargs: Any):
        super().__init__(**kwargs)
        self._api_key = api_key or None

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    @classmethod
    def class_name(cls) -> str:
        return "GeminiLLM"

    @property
    def metadata(self) -> LLMMetadata:
        return LLMMetadata(
            context_window=self.context_window,
            num_output=self.num_output,
            model_name=self.model,
        )

    def _post(self, prompt: str) -> Dict[str, Any]:
        if not self._api_key:
            raise UpstreamError("GEMINI_API_KEY is not configured")

        logger.debug("GeminiLLM._post. model %r, prompt length %d", self.model, len(prompt))
        try:
            response = requests.post(
                self.endpoint_url,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                json=build_request_body(prompt),
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("GeminiLLM._post, request failed: %s", type(e).__name__)
            raise UpstreamError(f"Failed to reach Gemini: {type(e).__name__}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("GeminiLLM._post, non-JSON response. status %d", response.status_code)
            raise UpstreamError(f"Gemini returned a non-JSON response (HTTP {response.status_code})") from e

        if isinstance(payload, dict) and payload.get("error"):
            error = payload["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.error("GeminiLLM._post, service error: %s", message)
            raise UpstreamError(message or "Gemini returned an error")

        if response.status_code >= 400:
            logger.error("GeminiLLM._post, HTTP status %d", response.status_code)
            raise UpstreamError(f"Gemini request failed with HTTP {response.status_code}")
        return payload

    @llm_completion_callback()
    def complete(self, prompt: str, formatted: bool = False, **kwargs: Any) -> CompletionResponse:
        payload = self._post(prompt)
        text = extract_generated_text(payload)
        if text is None:
            raise UpstreamError("No response from Gemini")
        return CompletionResponse(text=text, raw=payload)

    @llm_completion_callback()
    def stream_complete(self, prompt: str, formatted: bool = False, **kwargs: Any) -> CompletionResponseGen:
        # generateContent is not a streaming endpoint; emit the whole answer as one chunk.
        response = self.complete(prompt, formatted=formatted, **kwargs)

        def gen() -> CompletionResponseGen:
            yield CompletionResponse(text=response.text, delta=response.text, raw=response.raw)

        return gen()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    llm = GeminiLLM(api_key=os.getenv("GEMINI_API_KEY"))
    result = llm.complete("List names of 3 planets in the solar system. Comma separated. No other text.")
    print(f"response:\n{result.text}")
