"""
Infrastructure adapter: Hugging Face Inference API (text generation) → ILanguageModel.
"""

from typing import Optional

import httpx

from src.domain.errors import MalformedPayloadError, ProviderNotConfiguredError
from src.domain.ports.llm_port import ILanguageModel
from src.infrastructure.http.errors import request_json


class HuggingFaceInferenceAdapter(ILanguageModel):
    BASE_URL = "https://api-inference.huggingface.co/models"

    def __init__(
        self,
        client: httpx.AsyncClient,
        model: str,
        api_key: Optional[str],
        max_new_tokens: int = 300,
    ) -> None:
        self._client = client
        self._model = model
        self._api_key = api_key
        self._max_new_tokens = max_new_tokens

    async def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise ProviderNotConfiguredError("HF_API_KEY is not set")

        payload = await request_json(
            self._client,
            "POST",
            f"{self.BASE_URL}/{self._model}",
            resource=f"text generation ({self._model})",
            json={
                "inputs": prompt,
                # Without this the prompt itself is echoed back, labels included
                "parameters": {"return_full_text": False, "max_new_tokens": self._max_new_tokens},
            },
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            return str(payload[0].get("generated_text") or "")
        if isinstance(payload, dict) and "generated_text" in payload:
            return str(payload["generated_text"] or "")
        raise MalformedPayloadError(f"Unexpected text generation payload from {self._model}")
