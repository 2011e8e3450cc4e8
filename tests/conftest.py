"""Fixtures compartidas.

`FakeCompletion` sustituye al proveedor IA: registra cada llamada y devuelve
una respuesta fija, lanza un error o delega en un `responder` asíncrono.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from core.config import AppSettings  # noqa: E402


class FakeCompletion:
    def __init__(
        self,
        response: Any = None,
        *,
        error: BaseException | None = None,
        responder: Callable[[str], Awaitable[Any]] | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.responder = responder
        self.calls: list[dict[str, Any]] = []

    async def generate(self, *, prompt: str, output_schema: type) -> Any:
        self.calls.append({"prompt": prompt, "output_schema": output_schema})
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            return await self.responder(prompt)
        return self.response


@pytest.fixture
def make_completion():
    return FakeCompletion


@pytest.fixture
def settings():
    # Sin .env: los tests no deben depender de la config local del desarrollador.
    return AppSettings(_env_file=None, ai_api_key="test-key")


@pytest.fixture
def valid_payload():
    return {
        "soilPh": 6.5,
        "soilBd": 1.3,
        "buildingDescription": "Two-story residential home, wood frame",
    }
