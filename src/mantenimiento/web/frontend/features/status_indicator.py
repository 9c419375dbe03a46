# mantenimiento/web/frontend/features/status_indicator.py
from typing import Callable, Optional

from reactpy import component, event, html

from mantenimiento.analitica.models import STATUS_LABELS, StatusLevel

STATUS_CLASSES = {
    StatusLevel.NORMAL: "status-normal",
    StatusLevel.WARNING: "status-warning",
    StatusLevel.CRITICAL: "status-critical",
    StatusLevel.UNKNOWN: "status-unknown",
}


def parse_status(value) -> StatusLevel:
    try:
        return StatusLevel(value)
    except ValueError:
        return StatusLevel.UNKNOWN


@component
def StatusIndicator(status: str, message: Optional[str] = None, on_click: Optional[Callable] = None):
    """Punto de color con el estado del componente; al pulsarlo abre la ficha técnica."""
    level = parse_status(status)
    label = STATUS_LABELS[level]
    attributes = {
        "class_name": f"status-indicator {STATUS_CLASSES[level]}",
        "data-tooltip": message or label,
        "aria-label": label,
        "type": "button",
    }
    if on_click:
        attributes["on_click"] = event(lambda e: on_click(), prevent_default=True)
    return html.button(attributes, html.span({"class_name": "status-dot"}), html.span(f" {label}"))
