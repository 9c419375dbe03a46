# mantenimiento/web/frontend/features/analysis_modal.py
from typing import Any, Callable, Dict, Optional

from reactpy import component, html

from mantenimiento.analitica.models import METRIC_NAMES, Metric

from .status_indicator import StatusIndicator


def _format_number(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}"


def _metric_name(metric: str) -> str:
    try:
        return METRIC_NAMES[Metric(metric)]
    except ValueError:
        return metric


def _metric_row(summary: Dict[str, Any]):
    return html.tr(
        {"key": summary.get("metric")},
        html.td(_metric_name(summary.get("metric"))),
        html.td(_format_number(summary.get("value"))),
        html.td(_format_number(summary.get("limit"))),
        html.td(StatusIndicator(status=summary.get("status"))),
        html.td(summary.get("projected_date") or "-"),
    )


@component
def AnalysisModal(
    is_open: bool,
    componente: Optional[str],
    status: Optional[Dict[str, Any]],
    analysis: Optional[Dict[str, Any]],
    on_close: Callable,
):
    """Ficha técnica del componente: condición, diagnóstico, tiempo estimado, acción y detalle por métrica."""
    if not is_open or not status or not analysis:
        return None

    ficha = [
        ("Condición", analysis.get("condicion")),
        ("Diagnóstico", analysis.get("diagnostico")),
        ("Tiempo estimado", analysis.get("tiempo_estimado")),
        ("Acción recomendada", analysis.get("accion")),
    ]

    return html.dialog(
        {"open": True},
        html.article(
            {"class_name": "analysis-modal"},
            html.header(
                html.button({"aria-label": "Close", "rel": "prev", "on_click": lambda e: on_close()}),
                html.h3(f"Ficha técnica: {componente}"),
                StatusIndicator(status=status.get("status"), message=status.get("message")),
            ),
            html.p(status.get("message", "")),
            html.dl({"class_name": "analysis-sheet"}, [html._(html.dt(label), html.dd(value or "-")) for label, value in ficha]),
            html.table(
                {"class_name": "striped"},
                html.thead(
                    html.tr(
                        html.th("Métrica"),
                        html.th("Valor"),
                        html.th("Límite"),
                        html.th("Estado"),
                        html.th("Proyección de falla"),
                    )
                ),
                html.tbody([_metric_row(summary) for summary in status.get("all_metrics", [])]),
            ),
            html.footer(html.button({"class_name": "secondary", "on_click": lambda e: on_close()}, "Cerrar")),
        ),
    )
