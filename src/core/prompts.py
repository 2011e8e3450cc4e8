"""Plantilla del prompt de evaluación de suelo.

Nota de seguridad: `building_description` se interpola tal cual (sin escapar),
igual que la versión web. Un texto malicioso puede intentar reescribir las
instrucciones del modelo; la validación de salida limita el daño a la forma
de la respuesta, no a su contenido.
"""

from __future__ import annotations

from core.domain.models import SoilSuitabilityInput

SOIL_SUITABILITY_TEMPLATE = (
    "You are a geotechnical engineer specializing in soil analysis for building foundations.\n"
    "\n"
    "You will assess the suitability of the soil for the foundation of a building, taking into "
    "account the soil pH, bulk density, and a description of the building to be constructed. "
    "Provide a detailed assessment of potential challenges and recommendations.\n"
    "\n"
    "Soil pH: {soil_ph}\n"
    "Soil Bulk Density: {soil_bd} kg/dm³\n"
    "Building Description: {building_description}"
)


def format_number(value: float) -> str:
    # 6.0 -> "6", 1.35 -> "1.35", 1e22 -> "1e+22" (como Number#toString en JS)
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def render_soil_suitability_prompt(request: SoilSuitabilityInput) -> str:
    """Rellena la plantilla fija en orden estable: pH, densidad, descripción."""

    return SOIL_SUITABILITY_TEMPLATE.format(
        soil_ph=format_number(request.soil_ph),
        soil_bd=format_number(request.soil_bd),
        building_description=request.building_description,
    )
