"""Validación explícita contra los esquemas del dominio.

Por qué un resultado discriminado (`Valid` / `Invalid`) en vez de excepciones:
- El llamador decide qué hacer con el fallo (la entrada pública lanza
  `InputValidationError`, el flujo lanza `OutputValidationError`).
- Las funciones son puras: no hacen I/O y nunca lanzan por datos inválidos.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ValidationError

from core.domain.models import SoilSuitabilityInput, SoilSuitabilityOutput

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T

    ok = True


@dataclass(frozen=True)
class Invalid:
    """Primera restricción violada (campo + descripción)."""

    field: str | None
    message: str

    ok = False


Validation = Union[Valid[T], Invalid]


_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)


def _loads_object(text: str) -> bool:
    try:
        return isinstance(json.loads(text), dict)
    except json.JSONDecodeError:
        return False


def extract_json_object(text: str) -> str | None:
    """Obtiene el objeto JSON presente en la respuesta del proveedor.

    Orden: texto completo, tramo entre la primera `{` y la última `}`, y por
    último un bloque con fences. Así un fence *dentro* de un string del JSON
    no se confunde con el objeto de la respuesta.
    """

    stripped = text.strip()
    if _loads_object(stripped):
        return stripped

    start = stripped.find("{")
    end = stripped.rfind("}")
    if 0 <= start < end:
        candidate = stripped[start : end + 1]
        if _loads_object(candidate):
            return candidate

    match = _JSON_FENCE_RE.search(text)
    if match:
        return match.group(1).strip()

    if stripped.startswith("{") and stripped.endswith("}"):
        return stripped
    return None


def _first_error(exc: ValidationError) -> Invalid:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return Invalid(field=loc or None, message=first.get("msg", "invalid value"))


def _validate(model: type[T], value: Any) -> Validation[T]:
    if isinstance(value, model):
        return Valid(value)
    try:
        return Valid(model.model_validate(value))
    except ValidationError as exc:
        return _first_error(exc)


def validate_request(value: Any) -> Validation[SoilSuitabilityInput]:
    """Valida una solicitud (modelo o mapping con claves camelCase/snake_case)."""

    return _validate(SoilSuitabilityInput, value)


def validate_result(value: Any) -> Validation[SoilSuitabilityOutput]:
    """Valida la salida del proveedor.

    Acepta un mapping ya parseado o el texto crudo de la completion; en ese caso
    se localiza el objeto JSON (plano, con fences o embebido) antes de validar.
    """

    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            return Invalid(field=None, message=f"completion bytes are not valid UTF-8: {exc.reason}")

    if isinstance(value, str):
        json_text = extract_json_object(value)
        if json_text is None:
            return Invalid(field=None, message="no JSON object found in completion text")
        try:
            value = json.loads(json_text)
        except json.JSONDecodeError as exc:
            return Invalid(field=None, message=f"malformed JSON: {exc.msg}")

    return _validate(SoilSuitabilityOutput, value)
