"""Adaptador del proveedor de completions (SDK OpenAI, base URL compatible).

Responsabilidad:
- Traducir (prompt, esquema de salida) a una llamada `chat.completions`.
- Pedir JSON estricto con la forma del esquema y devolver el texto crudo.

Lo que NO hace (a propósito): reintentos, fallback de modelo ni validación del
resultado. El SDK se crea con `max_retries=0` para que no haya reintentos ocultos.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from core.config import AppSettings
from core.errors import CompletionConfigError

logger = logging.getLogger(__name__)


def _is_local_base_url(url: str) -> bool:
    url_l = (url or "").strip().lower()
    return url_l.startswith("http://localhost") or url_l.startswith("http://127.0.0.1") or url_l.startswith(
        "http://0.0.0.0"
    )


def build_openai_client(settings: AppSettings) -> AsyncOpenAI:
    api_key = (settings.ai_api_key or "").strip()
    if not api_key:
        # Providers locales OpenAI-compatible (Ollama, LM Studio) aceptan una key dummy.
        if not _is_local_base_url(settings.ai_base_url):
            raise CompletionConfigError(
                "No AI API key configured. Set SOIL_ASSESS_AI_API_KEY or run `soil-assess doctor setup-ai`."
            )
        api_key = "local"

    return AsyncOpenAI(
        api_key=api_key,
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=0,
    )


def build_system_prompt(output_schema: type[BaseModel]) -> str:
    schema = output_schema.model_json_schema(by_alias=True)
    return (
        "You are a helpful assistant that responds in JSON format.\n"
        "OUTPUT FORMAT: STRICT JSON only (no extra text, no fences), "
        "a single object matching this JSON Schema:\n"
        f"{json.dumps(schema, ensure_ascii=False)}"
    )


class OpenAICompletionService:
    """Implementa `core.interfaces.completion.CompletionService`."""

    def __init__(self, settings: AppSettings | None = None, *, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    @property
    def model(self) -> str:
        return self._settings.ai_model

    def _get_client(self) -> AsyncOpenAI:
        # Creación perezosa: la falta de API key se reporta al invocar, no al construir.
        if self._client is None:
            self._client = build_openai_client(self._settings)
        return self._client

    async def generate(self, *, prompt: str, output_schema: type[BaseModel]) -> Any:
        client = self._get_client()
        logger.debug("requesting completion from %s (model=%s)", self._settings.ai_base_url, self.model)

        response = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": build_system_prompt(output_schema)},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=self._settings.ai_temperature,
        )

        if not response.choices:
            return None
        return response.choices[0].message.content
