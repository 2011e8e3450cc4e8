"""Contrato del proveedor de completions.

Por qué Protocol:
- El flujo recibe el cliente de forma explícita (no hay cliente global).
- Permite sustituir el proveedor real por un doble de test sin herencia.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class CompletionService(Protocol):
    """Contrato mínimo de un proveedor de texto estructurado.

    Reglas de diseño:
    - `generate` es asíncrono: es el único punto de suspensión del flujo.
    - Devuelve el valor crudo (texto o mapping); validarlo es tarea del flujo.
    - Los errores de red/cuota/timeout se lanzan tal cual, sin reintentos.
    """

    async def generate(self, *, prompt: str, output_schema: type[BaseModel]) -> Any:
        """Envía `prompt` pidiendo una salida con la forma de `output_schema`."""

        ...
