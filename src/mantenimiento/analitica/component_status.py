# mantenimiento/analitica/component_status.py
"""
Evaluación del estado de salud de un componente.

Para cada métrica (corriente, desbalance, factor de carga) se toma el último
valor real y se compara contra su límite:

* valor >= límite                      -> crítico
* valor >= umbral_alerta * límite      -> alerta por proximidad
* alguna proyección alcanza su límite  -> alerta predictiva (fecha de la primera)

El estado global es el peor de los tres; ante empate gana la primera métrica
en el orden de evaluación.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Tuple

from .models import (
    METRIC_NAMES,
    METRIC_ORDER,
    STATUS_SEVERITY,
    AnalysisSheet,
    ComponentStatus,
    Metric,
    MetricObservation,
    MetricSummary,
    StatusDetails,
    StatusLevel,
)

UMBRAL_ALERTA_DEFAULT = 0.85

MENSAJE_NORMAL = "Operación Normal"
MENSAJE_SIN_DATOS = "Sin datos disponibles"

MESES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def format_month(fecha: date) -> str:
    return f"{MESES[fecha.month - 1]} de {fecha.year}"


def percentage_of_limit(value: float, limit: float) -> int:
    """Porcentaje entero del límite, redondeando las mitades hacia arriba (86.5 -> 87)."""
    return int(Decimal(str(value / limit * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _last_real_point(observations: List[MetricObservation]) -> Optional[MetricObservation]:
    # sorted() es estable: entre puntos de la misma fecha gana el último recibido
    real = [o for o in observations if not o.is_projection and o.value is not None]
    if not real:
        return None
    return sorted(real, key=lambda o: o.fecha)[-1]


def _first_projected_breach(observations: List[MetricObservation]) -> Optional[MetricObservation]:
    projections = sorted((o for o in observations if o.is_projection), key=lambda o: o.fecha)
    for point in projections:
        if point.value is not None and point.limit is not None and point.value >= point.limit:
            return point
    return None


def _evaluate_metric(
    metric: Metric, observations: List[MetricObservation], warning_ratio: float
) -> Tuple[MetricSummary, str, StatusDetails]:
    name = METRIC_NAMES[metric]
    last_real = _last_real_point(observations)
    value = last_real.value if last_real else None
    limit = last_real.limit if last_real else None

    summary = MetricSummary(metric=metric, value=value, limit=limit)
    details = StatusDetails(metric=metric, current_value=value, limit_value=limit)
    message = MENSAJE_NORMAL

    if value is not None and limit is not None:
        if value >= limit:
            summary.status = StatusLevel.CRITICAL
            return summary, f"{name} excede el límite", details
        if limit > 0 and value / limit >= warning_ratio:
            percentage = percentage_of_limit(value, limit)
            summary.status = StatusLevel.WARNING
            message = f"{name} se acerca al límite (al {percentage}%)"

    breach = _first_projected_breach(observations)
    if breach is not None:
        summary.projected_date = breach.fecha.strftime("%Y-%m")
        if summary.status == StatusLevel.NORMAL:
            summary.status = StatusLevel.WARNING
            details.projected_date = summary.projected_date
            message = f"Proyección de {name} alcanzará el límite en {format_month(breach.fecha)}"

    return summary, message, details


def evaluate_component_status(
    observations: Iterable[MetricObservation], warning_ratio: float = UMBRAL_ALERTA_DEFAULT
) -> ComponentStatus:
    """
    Calcula el estado global de un componente a partir de su serie completa
    (valores reales y proyectados de las tres métricas). Nunca lanza excepciones.
    """
    observations = list(observations)
    if not observations:
        return ComponentStatus(
            status=StatusLevel.UNKNOWN, message=MENSAJE_SIN_DATOS, details=StatusDetails(), all_metrics=[]
        )

    status = StatusLevel.NORMAL
    message = MENSAJE_NORMAL
    details = StatusDetails()
    all_metrics = []

    for metric in METRIC_ORDER:
        metric_observations = [o for o in observations if o.metric == metric]
        summary, metric_message, metric_details = _evaluate_metric(metric, metric_observations, warning_ratio)
        all_metrics.append(summary)
        if STATUS_SEVERITY[summary.status] > STATUS_SEVERITY[status]:
            status = summary.status
            message = metric_message
            details = metric_details

    return ComponentStatus(status=status, message=message, details=details, all_metrics=all_metrics)


def _percentage_text(details: StatusDetails, prefix: str) -> Optional[str]:
    if details.current_value is None or not details.limit_value:
        return None
    percentage = percentage_of_limit(details.current_value, details.limit_value)
    return (
        f"{prefix} al {percentage}% del límite "
        f"({details.current_value:.2f} / {details.limit_value:.2f})"
    )


def build_analysis(component_status: ComponentStatus, today: Optional[date] = None) -> AnalysisSheet:
    """Arma la ficha técnica (condición, diagnóstico, tiempo estimado y acción) de un estado."""
    today = today or date.today()
    details = component_status.details
    sheet = AnalysisSheet(
        condicion="NORMAL - Estable",
        diagnostico="Holgura de seguridad: OK",
        tiempo_estimado="N/A",
        accion="Monitoreo Continuo",
    )

    if component_status.status == StatusLevel.UNKNOWN:
        sheet.condicion = "SIN DATOS"
        sheet.diagnostico = MENSAJE_SIN_DATOS
    elif component_status.status == StatusLevel.CRITICAL:
        sheet.condicion = "CRÍTICO - Límite Excedido"
        sheet.accion = "Parada / Inspección Física"
        sheet.tiempo_estimado = "Inmediato / Actual"
        sheet.diagnostico = _percentage_text(details, "Valor") or "Valor actual excede el límite de seguridad."
    elif component_status.status == StatusLevel.WARNING:
        sheet.condicion = "PREDICTIVO - Tendencia Ascendente"
        sheet.accion = "Planificar Mantenimiento / Pedir Repuesto"
        if details.projected_date:
            year, month = (int(part) for part in details.projected_date.split("-")[:2])
            breach_date = date(year, month, 1)
            sheet.tiempo_estimado = f"~{(breach_date - today).days} Días para fallo crítico"
            sheet.diagnostico = f"Proyección alcanzará el límite en {format_month(breach_date)}"
        else:
            text = _percentage_text(details, "Valor actual")
            if text:
                sheet.diagnostico = text
                sheet.tiempo_estimado = "N/A (monitoreo)"

    return sheet
