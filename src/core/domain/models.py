"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo describe la forma de salida que se le pide al proveedor IA
  (JSON Schema) y valida lo que devuelve.

Nota:
- Los nombres en el cable son camelCase (`soilPh`, `soilBd`, ...) por
  compatibilidad con la UI; en Python se usan snake_case.
- Son objetos transitorios: se crean por invocación y no se persisten.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class SoilSuitabilityInput(BaseModel):
    """Solicitud de evaluación: propiedades del suelo + descripción del edificio.

    Sin restricciones de rango ni longitud mínima: un pH de 14.2, una densidad
    negativa o una descripción vacía se aceptan y se envían al proveedor.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True, frozen=True)

    soil_ph: float = Field(
        ...,
        alias="soilPh",
        description="The pH value of the soil.",
    )
    soil_bd: float = Field(
        ...,
        alias="soilBd",
        description="The bulk density of the soil in kg/dm³.",
    )
    building_description: str = Field(
        ...,
        alias="buildingDescription",
        description="A description of the building to be constructed, including size and materials.",
    )


class SoilSuitabilityOutput(BaseModel):
    """Resultado de la evaluación producido por el proveedor IA."""

    model_config = ConfigDict(strict=True, populate_by_name=True, frozen=True, extra="ignore")

    suitability_assessment: str = Field(
        ...,
        alias="suitabilityAssessment",
        description=(
            "An assessment of the soil suitability for the building foundation, "
            "including potential challenges and recommendations."
        ),
    )


class SoilData(BaseModel):
    """Propiedades de la capa superficial (0-5 cm) en un punto, según SoilGrids.

    `None` significa que SoilGrids no tiene dato para esa propiedad en el punto.
    """

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitud consultada (WGS84).")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitud consultada (WGS84).")
    ph: float | None = Field(default=None, description="pH en agua (ya desescalado).")
    bd: float | None = Field(default=None, description="Densidad aparente en kg/dm³.")
