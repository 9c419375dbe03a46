# mantenimiento/web/frontend/features/dashboard_page.py
"""
Tablero de analítica: selección de máquina, componente y rango de fechas,
gráficos por métrica y estado del componente con su ficha técnica.
"""

from reactpy import component, html, use_state

from mantenimiento.analitica.models import METRIC_ORDER

from ..hooks.use_component_analysis_hook import use_component_analysis
from ..shared.async_content import AsyncContent
from ..shared.common_components import page_title
from .analysis_modal import AnalysisModal
from .chart_components import MetricChart
from .status_indicator import StatusIndicator


def _select(label: str, value, options, on_change, disabled: bool = False):
    return html.label(
        label,
        html.select(
            {
                "value": value or "",
                "disabled": disabled,
                "on_change": lambda e: on_change(e["target"]["value"] or None),
            },
            [html.option({"value": option_value, "key": option_value}, option_label) for option_value, option_label in options],
        ),
    )


@component
def DashboardPage():
    analysis = use_component_analysis()
    is_modal_open, set_is_modal_open = use_state(False)

    status = analysis["status"]
    date_range = analysis["date_range"]

    filtros = html.div(
        {"class_name": "grid dashboard-filters"},
        _select(
            "Máquina",
            analysis["maquina"],
            [(m, m) for m in analysis["machines"]],
            analysis["set_maquina"],
            disabled=not analysis["machines"],
        ),
        _select(
            "Componente",
            analysis["componente"],
            [(c["originalName"], c["name"]) for c in analysis["components"]],
            analysis["set_componente"],
            disabled=not analysis["components"],
        ),
        html.label(
            "Desde",
            html.input(
                {
                    "type": "date",
                    "value": date_range["fecha_inicio"].isoformat(),
                    "on_change": lambda e: analysis["set_fecha"]("fecha_inicio", e["target"]["value"]),
                }
            ),
        ),
        html.label(
            "Hasta",
            html.input(
                {
                    "type": "date",
                    "value": date_range["fecha_fin"].isoformat(),
                    "on_change": lambda e: analysis["set_fecha"]("fecha_fin", e["target"]["value"]),
                }
            ),
        ),
    )

    estado = (
        StatusIndicator(
            status=status.get("status"),
            message=status.get("message"),
            on_click=lambda: set_is_modal_open(True),
        )
        if status
        else None
    )

    async def handle_refresh(_event):
        await analysis["refresh"]()

    refresh_button = html.button(
        {"class_name": "secondary outline", "on_click": handle_refresh, "disabled": analysis["loading"]},
        html.i({"class_name": "fa-solid fa-rotate"}),
        " Actualizar",
    )

    return html._(
        page_title("Analítica de Componentes", status.get("message") if status else None, [estado, refresh_button]),
        filtros,
        AsyncContent(
            loading=analysis["loading"],
            error=analysis["error"],
            data=analysis["points"],
            empty_message="No hay datos para el rango seleccionado",
            children=html.div(
                {"class_name": "charts-grid"},
                [MetricChart(points=analysis["points"], metric=metric, key=metric.value) for metric in METRIC_ORDER],
            ),
        ),
        AnalysisModal(
            is_open=is_modal_open,
            componente=analysis["componente"],
            status=status,
            analysis=analysis["analysis"],
            on_close=lambda: set_is_modal_open(False),
        ),
    )
