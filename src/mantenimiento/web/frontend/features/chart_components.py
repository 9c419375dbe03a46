# mantenimiento/web/frontend/features/chart_components.py
"""
Gráficos de las métricas de un componente usando Chart.js con JavaScript inline.

Cada gráfico muestra el valor real, su referencia, el límite y las
proyecciones (tendencia, pesimista y optimista) a continuación de la serie real.
"""

import json
from typing import Any, Dict, List, Optional

from reactpy import component, html

from mantenimiento.analitica.models import METRIC_NAMES, Metric
from mantenimiento.analitica.series import (
    CORRIENTE,
    CORRIENTE_MAXIMA,
    DESBALANCE,
    FACTOR_CARGA,
    PROJECTION_KEYS,
    REF_CORRIENTE,
    REF_DESBALANCE,
    REF_FACTOR_CARGA,
    UMBRAL_DESBALANCE,
    UMBRAL_FACTOR_CARGA,
)

# Campo real, referencia y límite de cada métrica en los puntos de la serie.
CHART_FIELDS = {
    Metric.CURRENT: (CORRIENTE, REF_CORRIENTE, CORRIENTE_MAXIMA),
    Metric.UNBALANCE: (DESBALANCE, REF_DESBALANCE, UMBRAL_DESBALANCE),
    Metric.LOAD_FACTOR: (FACTOR_CARGA, REF_FACTOR_CARGA, UMBRAL_FACTOR_CARGA),
}

COLORES = {
    "valor": "rgb(54, 162, 235)",
    "referencia": "rgb(153, 102, 255)",
    "limite": "rgb(255, 99, 132)",
    "trend": "rgb(255, 159, 64)",
    "pessimistic": "rgb(220, 53, 69)",
    "optimistic": "rgb(40, 167, 69)",
}

ETIQUETAS_PROYECCION = {
    "trend": "Proyección (tendencia)",
    "pessimistic": "Proyección pesimista",
    "optimistic": "Proyección optimista",
}


def _generate_chart_script(chart_id: str, title: str, labels: list, datasets: list) -> str:
    """Genera el código JavaScript para crear un gráfico de línea con Chart.js."""
    labels_json = json.dumps(labels)
    datasets_json = json.dumps(datasets)
    title_escaped = json.dumps(title)

    return f"""
(function() {{
    function initChart() {{
        if (typeof Chart === 'undefined') {{
            setTimeout(initChart, 100);
            return;
        }}

        const canvas = document.getElementById('{chart_id}');
        if (!canvas) return;

        if (canvas._chartInstance) {{
            canvas._chartInstance.destroy();
        }}

        canvas._chartInstance = new Chart(canvas.getContext('2d'), {{
            type: 'line',
            data: {{
                labels: {labels_json},
                datasets: {datasets_json}
            }},
            options: {{
                responsive: true,
                maintainAspectRatio: false,
                interaction: {{ mode: 'index', intersect: false }},
                plugins: {{
                    title: {{ display: true, text: {title_escaped} }},
                    legend: {{ display: true, position: 'top' }}
                }},
                scales: {{
                    y: {{ beginAtZero: true }}
                }}
            }}
        }});
    }}

    if (document.readyState === 'loading') {{
        document.addEventListener('DOMContentLoaded', initChart);
    }} else {{
        initChart();
    }}
}})();
"""


def _dataset(label: str, data: list, color: str, dashed: bool = False, **extra) -> Dict[str, Any]:
    dataset = {
        "label": label,
        "data": data,
        "borderColor": color,
        "backgroundColor": color,
        "pointRadius": 0,
        "borderWidth": 2,
        "spanGaps": True,
        "tension": 0.1,
    }
    if dashed:
        dataset["borderDash"] = [6, 4]
    dataset.update(extra)
    return dataset


def build_metric_datasets(points: List[Dict[str, Any]], metric: Metric) -> Dict[str, list]:
    """
    Arma etiquetas y datasets de una métrica. Los valores reales quedan en
    null sobre los puntos proyectados y viceversa, para que las líneas no se mezclen.
    """
    value_key, reference_key, limit_key = CHART_FIELDS[metric]
    labels = [point.get("date") for point in points]

    real = [None if point.get("isProjection") else point.get(value_key) for point in points]
    reference = [None if point.get("isProjection") else point.get(reference_key) for point in points]
    limit = [point.get(limit_key) for point in points]

    datasets = [
        _dataset(METRIC_NAMES[metric], real, COLORES["valor"]),
        _dataset("Referencia", reference, COLORES["referencia"], dashed=True),
        _dataset("Límite", limit, COLORES["limite"], borderWidth=1),
    ]

    for scenario, projection_key in PROJECTION_KEYS.get(value_key, {}).items():
        data = [point.get(projection_key) if point.get("isProjection") else None for point in points]
        if any(value is not None for value in data):
            datasets.append(_dataset(ETIQUETAS_PROYECCION[scenario], data, COLORES[scenario], dashed=True))

    return {"labels": labels, "datasets": datasets}


@component
def LineChart(chart_id: str, title: str, labels: list, datasets: list, height: str = "300px"):
    chart_script = _generate_chart_script(chart_id, title, labels, datasets)
    # El script se vuelve a montar (y a ejecutar) cuando cambia su contenido.
    script_key = f"{chart_id}-{hash(chart_script)}"

    return html.div(
        {"style": {"position": "relative", "height": height, "width": "100%", "margin": "1rem 0"}},
        html.canvas({"id": chart_id, "style": {"max-width": "100%", "height": height}}),
        html.script({"key": script_key}, chart_script),
    )


@component
def MetricChart(points: List[Dict[str, Any]], metric: Metric, title: Optional[str] = None):
    chart = build_metric_datasets(points, metric)
    return html.article(
        {"class_name": "chart-card"},
        LineChart(
            chart_id=f"chart-{metric.value}",
            title=title or METRIC_NAMES[metric],
            labels=chart["labels"],
            datasets=chart["datasets"],
        ),
    )
