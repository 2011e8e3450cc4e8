"""Errores tipados del Core.

Taxonomía:
- `InputValidationError`: la solicitud no cumple el esquema; se lanza antes de
  cualquier llamada externa.
- `OutputValidationError`: el proveedor respondió, pero la carga no cumple el
  esquema de salida. Nunca se devuelve un resultado parcial.
- `CompletionConfigError`: el cliente IA no puede construirse (p.ej. sin API key).
- `SoilGridsError`: la API de SoilGrids respondió con un status no exitoso.

Los errores del SDK del proveedor (openai/httpx) NO se envuelven: se propagan tal cual.
"""

from __future__ import annotations

from typing import Any


class SoilAssessmentError(Exception):
    """Base de los errores propios del proyecto."""


class SchemaValidationError(SoilAssessmentError, ValueError):
    def __init__(self, *, field: str | None, message: str) -> None:
        self.field = field
        self.message = message
        where = field or "<root>"
        super().__init__(f"{where}: {message}")


class InputValidationError(SchemaValidationError):
    """La solicitud de evaluación no es válida."""


class OutputValidationError(SchemaValidationError):
    """La respuesta del proveedor no tiene la forma de `SoilSuitabilityOutput`."""

    def __init__(self, *, field: str | None, message: str, raw: Any = None) -> None:
        super().__init__(field=field, message=message)
        self.raw = raw


class CompletionConfigError(SoilAssessmentError):
    """Configuración insuficiente para invocar al proveedor IA."""


class SoilGridsError(SoilAssessmentError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
