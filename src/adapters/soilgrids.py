"""Consulta puntual a SoilGrids (ISRIC).

Objetivo:
- Obtener pH y densidad aparente de la capa 0-5 cm para un punto (lat/lon),
  como valores de partida para la evaluación.

SoilGrids publica los valores escalados:
- `phh2o` viene multiplicado por 10.
- `bdod` viene en cg/cm³; dividido por 100 queda en kg/dm³ (= g/cm³).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import SoilData
from core.errors import SoilGridsError

logger = logging.getLogger(__name__)

_PH_LAYER = "phh2o"
_BD_LAYER = "bdod"
_PH_SCALE = 10.0
_BD_SCALE = 100.0


def _layer_mean(data: Any, name: str) -> float | None:
    if not isinstance(data, dict):
        return None
    properties = data.get("properties")
    layers = properties.get("layers") if isinstance(properties, dict) else None
    if not isinstance(layers, list):
        return None

    for layer in layers:
        if not isinstance(layer, dict) or layer.get("name") != name:
            continue
        depths = layer.get("depths")
        if not isinstance(depths, list) or not depths or not isinstance(depths[0], dict):
            return None
        values = depths[0].get("values")
        mean = values.get("mean") if isinstance(values, dict) else None
        if isinstance(mean, (int, float)) and not isinstance(mean, bool):
            return float(mean)
        return None
    return None


def parse_soilgrids_payload(data: Any, *, lat: float, lon: float) -> SoilData:
    """Convierte la respuesta JSON de SoilGrids en `SoilData` (desescalado)."""

    ph = _layer_mean(data, _PH_LAYER)
    bd = _layer_mean(data, _BD_LAYER)
    return SoilData(
        lat=lat,
        lon=lon,
        ph=ph / _PH_SCALE if ph is not None else None,
        bd=bd / _BD_SCALE if bd is not None else None,
    )


async def fetch_soil_data(
    *,
    lat: float,
    lon: float,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> SoilData:
    """Consulta SoilGrids para el punto dado.

    Lanza `ValueError` si las coordenadas están fuera de rango y
    `SoilGridsError` si la API responde con un status no exitoso.
    """

    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude out of range: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"longitude out of range: {lon}")

    settings = settings or AppSettings()
    url = f"{settings.soilgrids_base_url.rstrip('/')}/properties/query"
    params = {
        "lon": lon,
        "lat": lat,
        "depths": "0-5cm",
        "properties": f"{_PH_LAYER},{_BD_LAYER}",
    }

    if client is None:
        async with build_async_client(settings) as own_client:
            resp = await own_client.get(url, params=params)
    else:
        resp = await client.get(url, params=params)

    if resp.status_code != 200:
        logger.error("SoilGrids API error: %s %s", resp.status_code, resp.text[:200])
        raise SoilGridsError(
            f"SoilGrids API failed with status {resp.status_code}",
            status_code=resp.status_code,
        )

    return parse_soilgrids_payload(resp.json(), lat=lat, lon=lon)
