# mantenimiento/analitica/series.py
"""
Preparación de las series de un componente para los gráficos y la evaluación de estado.

Los registros crudos del servicio de mantenimiento se agrupan por hora (rangos
cortos) o por mes (rangos de más de un año), se completan los límites que
faltan y se agrega una proyección lineal hacia adelante.
"""

import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from .models import Metric, MetricObservation

logger = logging.getLogger(__name__)

CORRIENTE = "Corriente Promedio Suavizado"
REF_CORRIENTE = "Referencia Corriente Promedio Suavizado"
CORRIENTE_MAXIMA = "Corriente Máxima"
DESBALANCE = "Desbalance Suavizado"
REF_DESBALANCE = "Referencia Desbalance Suavizado"
UMBRAL_DESBALANCE = "Umbral Desbalance"
FACTOR_CARGA = "Factor De Carga Suavizado"
REF_FACTOR_CARGA = "Referencia Factor De Carga Suavizado"
UMBRAL_FACTOR_CARGA = "Umbral Factor Carga"

VALUE_KEYS = (CORRIENTE, REF_CORRIENTE, DESBALANCE, REF_DESBALANCE, FACTOR_CARGA, REF_FACTOR_CARGA)
LIMIT_KEYS = (CORRIENTE_MAXIMA, UMBRAL_DESBALANCE, UMBRAL_FACTOR_CARGA)

# Campo del valor, campo del límite y clave de la proyección de tendencia de cada métrica.
METRIC_FIELDS = {
    Metric.CURRENT: (CORRIENTE, CORRIENTE_MAXIMA, "proyeccion_corriente_tendencia"),
    Metric.UNBALANCE: (DESBALANCE, UMBRAL_DESBALANCE, "proyeccion_desbalance_tendencia"),
    Metric.LOAD_FACTOR: (FACTOR_CARGA, UMBRAL_FACTOR_CARGA, "proyeccion_factor_carga_tendencia"),
}

PROJECTION_KEYS = {
    CORRIENTE: {
        "trend": "proyeccion_corriente_tendencia",
        "pessimistic": "proyeccion_corriente_pesimista",
        "optimistic": "proyeccion_corriente_optimista",
    },
    REF_CORRIENTE: {"trend": "proyeccion_referencia_corriente_tendencia"},
    DESBALANCE: {
        "trend": "proyeccion_desbalance_tendencia",
        "pessimistic": "proyeccion_desbalance_pesimista",
        "optimistic": "proyeccion_desbalance_optimista",
    },
    FACTOR_CARGA: {
        "trend": "proyeccion_factor_carga_tendencia",
        "pessimistic": "proyeccion_factor_carga_pesimista",
        "optimistic": "proyeccion_factor_carga_optimista",
    },
}

MIN_PUNTOS_REGRESION = 5
FACTOR_PESIMISTA = 1.5
FACTOR_OPTIMISTA = 0.5


def safe_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def _first_number(*values: Any) -> Optional[float]:
    for value in values:
        number = safe_number(value)
        if number is not None:
            return number
    return None


def parse_point_date(value: str) -> date:
    """Acepta 'YYYY-MM', 'YYYY-MM-DD' o un datetime ISO."""
    if len(value) == 7:
        return datetime.strptime(value, "%Y-%m").date()
    return datetime.fromisoformat(value[:19]).date()


def record_to_raw(record: Dict[str, Any], component_id: str, aggregation: str = "daily") -> Optional[Dict[str, Any]]:
    """
    Convierte un registro del servicio en un punto crudo. Devuelve None si el
    registro no trae una fecha válida.
    """
    year = safe_number(record.get("Año"))
    month = _first_number(record.get("MES_REFERENCIA"), record.get("Mes"))
    if year is None or month is None:
        return None

    try:
        if aggregation == "monthly":
            fecha = datetime(int(year), int(month), 15)
        else:
            day = safe_number(record.get("Dia"))
            if day is None:
                return None
            fecha = datetime(
                int(year),
                int(month),
                int(day),
                int(safe_number(record.get("Hora")) or 0),
                int(safe_number(record.get("Minuto")) or 0),
                int(safe_number(record.get("Segundo")) or 0),
            )
    except ValueError as e:
        logger.debug(f"Registro de {component_id} con fecha inválida descartado: {e}")
        return None

    return {
        "date": fecha.isoformat(),
        "isProjection": False,
        "componentId": component_id,
        CORRIENTE: safe_number(record.get("CorrientePromedioSuavizado")),
        REF_CORRIENTE: safe_number(record.get("Referencia_CorrientePromedioSuavizado")),
        CORRIENTE_MAXIMA: safe_number(record.get("Corriente_Max")),
        DESBALANCE: safe_number(record.get("Desbalance_Suavizado")),
        REF_DESBALANCE: safe_number(record.get("Referencia_DesbalanceSuavizado")),
        UMBRAL_DESBALANCE: _first_number(record.get("Umbral_Desbalance"), record.get("Referencia_Umbral_Desbalance")),
        FACTOR_CARGA: safe_number(record.get("FactorDeCargaSuavizado")),
        REF_FACTOR_CARGA: safe_number(record.get("Referencia_FactorDeCargaSuavizado")),
        UMBRAL_FACTOR_CARGA: _first_number(
            record.get("Umbral_Factor_Carga"), record.get("Referencia_Umbral_FactorCarga")
        ),
    }


def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def _group(raw: List[Dict[str, Any]], key_length: int) -> "OrderedDict[str, List[Dict[str, Any]]]":
    groups: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
    for record in raw:
        if not record.get("date"):
            continue
        groups.setdefault(record["date"][:key_length], []).append(record)
    return groups


def aggregate_by_month(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Promedio mensual. Los límites solo promedian valores positivos."""
    points = []
    for month, records in _group(raw, 7).items():
        point = {"date": month, "componentId": records[0].get("componentId"), "isProjection": False}
        for key in VALUE_KEYS:
            point[key] = _mean([v for v in (safe_number(r.get(key)) for r in records) if v is not None])
        for key in LIMIT_KEYS:
            point[key] = _mean([v for v in (safe_number(r.get(key)) for r in records) if v is not None and v > 0])
        points.append(point)
    return sorted(points, key=lambda p: p["date"])


def aggregate_by_hour(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Promedio por hora. Cada límite toma el primer valor positivo de la hora."""
    points = []
    for hour, records in _group(raw, 13).items():
        point = {"date": f"{hour}:00:00", "componentId": records[0].get("componentId"), "isProjection": False}
        for key in VALUE_KEYS:
            point[key] = _mean([v for v in (safe_number(r.get(key)) for r in records) if v is not None])
        for key in LIMIT_KEYS:
            point[key] = next(
                (v for v in (safe_number(r.get(key)) for r in records) if v is not None and v > 0), None
            )
        points.append(point)
    return sorted(points, key=lambda p: p["date"])


def manual_current_limit(component_name: str, machine_id: str) -> Optional[float]:
    """
    Límite de corriente conocido para los componentes de planta, usado cuando
    el servicio no informa la corriente máxima.
    """
    name = (component_name or "").lower()
    machine = (machine_id or "").lower()

    if "cuchilla t8" in name:
        return 5.50
    if "traslacion t8" in name:
        return 3.35
    if "banda looper" in name:
        return 14.60
    if "cuchilla looper" in name:
        return 8.20
    if "laader" in name or "loader" in name:
        return 51.70

    is_puente = "puente" in machine or "puente" in name
    is_mesa = "mesa" in machine or "mesa" in name

    if "elevacion derecha" in name:
        return 14.00 if is_puente else 26.50
    if "elevacion izquierdo" in name or "elevacion izquierda" in name:
        return 14.00
    if "traslacion" in name:
        if is_puente:
            return 5.00
        if is_mesa:
            return 3.25
    if "motor elevacion" in name and is_mesa:
        return 26.50
    return None


def project_linear_regression(points: List[Dict[str, Any]], value_key: str, days: int = 90) -> Dict[str, List[float]]:
    """
    Ajuste por mínimos cuadrados sobre los valores positivos (x = posición en
    la serie) y proyección de `days` pasos. La pendiente nunca es negativa; los
    escenarios pesimista y optimista escalan la pendiente.
    """
    empty = {"trend": [], "pessimistic": [], "optimistic": []}
    clean = []
    for x, point in enumerate(points):
        y = safe_number(point.get(value_key))
        if y is not None and y > 0:
            clean.append((x, y))
    if len(clean) < MIN_PUNTOS_REGRESION:
        return empty

    n = len(clean)
    sum_x = sum(x for x, _ in clean)
    sum_y = sum(y for _, y in clean)
    sum_xy = sum(x * y for x, y in clean)
    sum_xx = sum(x * x for x, _ in clean)
    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return empty

    slope = max(0.0, (n * sum_xy - sum_x * sum_y) / denominator)
    intercept = (sum_y - slope * sum_x) / n
    last_x = clean[-1][0]

    result = {"trend": [], "pessimistic": [], "optimistic": []}
    for step in range(1, days + 1):
        x = last_x + step
        result["trend"].append(max(0.0, slope * x + intercept))
        result["pessimistic"].append(max(0.0, slope * FACTOR_PESIMISTA * x + intercept))
        result["optimistic"].append(max(0.0, slope * FACTOR_OPTIMISTA * x + intercept))
    return result


def append_projections(points: List[Dict[str, Any]], component_id: str, days: int = 90) -> List[Dict[str, Any]]:
    """Agrega un punto proyectado por día posterior al último punto, con los últimos límites conocidos."""
    if not points or days <= 0:
        return list(points)

    projections = {key: project_linear_regression(points, key, days) for key in PROJECTION_KEYS}
    last_point = points[-1]
    last_date = parse_point_date(last_point["date"])

    result = list(points)
    for i in range(days):
        projection_point = {
            "date": (last_date + timedelta(days=i + 1)).isoformat(),
            "isProjection": True,
            "componentId": component_id,
        }
        for value_key, scenario_keys in PROJECTION_KEYS.items():
            for scenario, point_key in scenario_keys.items():
                series = projections[value_key][scenario]
                if series:
                    projection_point[point_key] = series[i]
        for limit_key in LIMIT_KEYS:
            projection_point[limit_key] = last_point.get(limit_key)
        result.append(projection_point)
    return result


def to_observations(points: List[Dict[str, Any]]) -> List[MetricObservation]:
    """Convierte los puntos del gráfico en observaciones por métrica."""
    observations = []
    for point in points:
        fecha = parse_point_date(point["date"])
        is_projection = bool(point.get("isProjection"))
        for metric, (value_key, limit_key, projection_key) in METRIC_FIELDS.items():
            value = safe_number(point.get(projection_key if is_projection else value_key))
            limit = safe_number(point.get(limit_key))
            if value is None and limit is None:
                continue
            observations.append(
                MetricObservation(fecha=fecha, metric=metric, is_projection=is_projection, value=value, limit=limit)
            )
    return observations
