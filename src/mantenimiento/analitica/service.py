# mantenimiento/analitica/service.py
import logging
import math
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional

from .component_status import UMBRAL_ALERTA_DEFAULT, build_analysis, evaluate_component_status
from .models import AnalysisSheet, ComponentStatus
from .series import (
    CORRIENTE_MAXIMA,
    aggregate_by_hour,
    aggregate_by_month,
    append_projections,
    manual_current_limit,
    record_to_raw,
    to_observations,
)

logger = logging.getLogger(__name__)

DIAS_AGREGACION_MENSUAL = 365
TAMANO_PAGINA = 1000


class ComponentEvaluation(NamedTuple):
    points: List[Dict[str, Any]]
    status: ComponentStatus
    analysis: AnalysisSheet


async def load_component_series(
    client,
    maquina: str,
    componente: str,
    fecha_inicio: date,
    fecha_fin: date,
    dias_proyeccion: int = 90,
    component_name: Optional[str] = None,
    dias_agregacion_mensual: int = DIAS_AGREGACION_MENSUAL,
    tamano_pagina: int = TAMANO_PAGINA,
) -> List[Dict[str, Any]]:
    """
    Obtiene la serie de un componente lista para graficar: puntos reales
    agregados por hora (o por mes en rangos largos) seguidos de la proyección.
    """
    if fecha_fin < fecha_inicio:
        raise ValueError("La fecha de inicio no puede ser posterior a la fecha de fin.")

    inicio, fin = fecha_inicio.isoformat(), fecha_fin.isoformat()
    monthly = (fecha_fin - fecha_inicio).days > dias_agregacion_mensual
    raw: List[Dict[str, Any]] = []

    if monthly:
        records = await client.get_component_data_aggregated(maquina, componente, inicio, fin)
        raw.extend(r for r in (record_to_raw(rec, componente, "monthly") for rec in records) if r)
    else:
        total = await client.get_total_by_machine_and_component(maquina, componente, inicio, fin)
        total_pages = math.ceil(total / tamano_pagina) if total else 0
        for page in range(1, total_pages + 1):
            records = await client.get_component_data(maquina, componente, inicio, fin, page=page, limit=tamano_pagina)
            raw.extend(r for r in (record_to_raw(rec, componente, "daily") for rec in records) if r)
            logger.debug(f"{maquina}/{componente}: página {page}/{total_pages} cargada")

    points = aggregate_by_month(raw) if monthly else aggregate_by_hour(raw)
    logger.info(
        f"{maquina}/{componente}: {len(raw)} registros, {len(points)} puntos "
        f"({'mensual' if monthly else 'horario'}) entre {inicio} y {fin}"
    )

    fallback_limit = manual_current_limit(component_name or componente, maquina)
    if fallback_limit is not None:
        for point in points:
            if point.get(CORRIENTE_MAXIMA) is None:
                point[CORRIENTE_MAXIMA] = fallback_limit

    return append_projections(points, componente, dias_proyeccion)


async def evaluate_component(
    client,
    maquina: str,
    componente: str,
    fecha_inicio: date,
    fecha_fin: date,
    dias_proyeccion: int = 90,
    warning_ratio: float = UMBRAL_ALERTA_DEFAULT,
    today: Optional[date] = None,
    **series_options,
) -> ComponentEvaluation:
    """Carga la serie de un componente y calcula su estado y su ficha técnica."""
    points = await load_component_series(
        client, maquina, componente, fecha_inicio, fecha_fin, dias_proyeccion, **series_options
    )
    status = evaluate_component_status(to_observations(points), warning_ratio)
    return ComponentEvaluation(points=points, status=status, analysis=build_analysis(status, today))
