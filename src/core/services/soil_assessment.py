"""Flujo de evaluación de idoneidad del suelo.

Este módulo es el único punto de entrada programático del proyecto:

    result = await assess_soil_suitability({"soilPh": 6.5, "soilBd": 1.3,
                                            "buildingDescription": "..."})

Pasos del flujo (una invocación = una unidad de trabajo independiente):
1. la entrada se valida en el borde (`assess_soil_suitability`);
2. se renderiza el prompt con la plantilla fija;
3. se invoca al proveedor de completions (único `await`);
4. la respuesta cruda se valida contra `SoilSuitabilityOutput`.

No hay reintentos, fallback ni timeout propio: los errores del proveedor se
propagan sin tocar y una respuesta con forma incorrecta es un error explícito.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.domain.models import SoilSuitabilityInput, SoilSuitabilityOutput
from core.domain.validation import Invalid, validate_request, validate_result
from core.errors import InputValidationError, OutputValidationError
from core.interfaces.completion import CompletionService
from core.prompts import render_soil_suitability_prompt

logger = logging.getLogger(__name__)


class SoilSuitabilityFlow:
    """Orquesta render + invocación + validación de salida.

    El flujo no guarda estado entre invocaciones: solo conserva el handle del
    proveedor, así que puede ejecutarse concurrentemente sin locks.
    """

    def __init__(self, completion: CompletionService) -> None:
        self._completion = completion

    async def run(self, request: SoilSuitabilityInput) -> SoilSuitabilityOutput:
        prompt = render_soil_suitability_prompt(request)
        logger.debug("soil suitability prompt rendered (%d chars)", len(prompt))

        raw = await self._completion.generate(prompt=prompt, output_schema=SoilSuitabilityOutput)

        checked = validate_result(raw)
        if isinstance(checked, Invalid):
            logger.warning("completion output rejected: %s: %s", checked.field or "<root>", checked.message)
            raise OutputValidationError(field=checked.field, message=checked.message, raw=raw)
        return checked.value


async def assess_soil_suitability(
    request: SoilSuitabilityInput | Mapping[str, Any],
    *,
    completion: CompletionService | None = None,
) -> SoilSuitabilityOutput:
    """Evalúa la idoneidad del suelo para la cimentación descrita.

    Lanza `InputValidationError` antes de contactar al proveedor si la solicitud
    no cumple el esquema. Sin `completion` explícito usa el proveedor
    configurado en `AppSettings`.
    """

    checked = validate_request(request)
    if isinstance(checked, Invalid):
        raise InputValidationError(field=checked.field, message=checked.message)

    if completion is None:
        from adapters.ai_completion import OpenAICompletionService  # noqa: PLC0415

        completion = OpenAICompletionService()

    return await SoilSuitabilityFlow(completion).run(checked.value)


assess = assess_soil_suitability
