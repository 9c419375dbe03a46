# mantenimiento/analitica/models.py
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class Metric(str, Enum):
    CURRENT = "current"
    UNBALANCE = "unbalance"
    LOAD_FACTOR = "load_factor"


# Orden de evaluación; también desempata entre métricas con el mismo estado.
METRIC_ORDER = (Metric.CURRENT, Metric.UNBALANCE, Metric.LOAD_FACTOR)

METRIC_NAMES = {
    Metric.CURRENT: "Corriente",
    Metric.UNBALANCE: "Desbalance",
    Metric.LOAD_FACTOR: "Factor de Carga",
}


class StatusLevel(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


STATUS_SEVERITY = {
    StatusLevel.UNKNOWN: -1,
    StatusLevel.NORMAL: 0,
    StatusLevel.WARNING: 1,
    StatusLevel.CRITICAL: 2,
}

STATUS_LABELS = {
    StatusLevel.NORMAL: "Normal",
    StatusLevel.WARNING: "Alerta",
    StatusLevel.CRITICAL: "Crítico",
    StatusLevel.UNKNOWN: "Sin datos",
}


class MetricObservation(BaseModel):
    fecha: date
    metric: Metric
    is_projection: bool = False
    value: Optional[float] = None
    limit: Optional[float] = None


class StatusDetails(BaseModel):
    metric: Optional[Metric] = None
    current_value: Optional[float] = None
    limit_value: Optional[float] = None
    projected_date: Optional[str] = None  # YYYY-MM


class MetricSummary(BaseModel):
    metric: Metric
    value: Optional[float] = None
    limit: Optional[float] = None
    status: StatusLevel = StatusLevel.NORMAL
    projected_date: Optional[str] = None


class ComponentStatus(BaseModel):
    status: StatusLevel
    message: str
    details: StatusDetails
    all_metrics: List[MetricSummary] = []


class AnalysisSheet(BaseModel):
    """Ficha técnica que acompaña al estado en el diálogo de detalle."""

    condicion: str
    diagnostico: str
    tiempo_estimado: str
    accion: str
