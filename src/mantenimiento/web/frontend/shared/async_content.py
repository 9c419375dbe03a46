# mantenimiento/web/frontend/shared/async_content.py
"""
Componentes para manejar estados asíncronos de manera consistente.

Uso:
    from mantenimiento.web.frontend.shared.async_content import AsyncContent

    return AsyncContent(
        loading=is_loading,
        error=error_message,
        data=items,
        children=CatalogTable(items=items),
    )
"""

from typing import List, Optional

from reactpy import component, html


@component
def LoadingSpinner(size: str = "medium"):
    """Spinner de Pico.css (aria-busy)."""
    style = {}
    if size == "small":
        style = {"width": "1.5rem", "height": "1.5rem"}
    elif size == "large":
        style = {"width": "3rem", "height": "3rem"}
    return html.span({"aria-busy": "true", "style": style})


@component
def AsyncContent(
    loading: bool,
    error: Optional[str] = None,
    data: Optional[List] = None,
    loading_component=None,
    error_component=None,
    empty_component=None,
    empty_message: str = "No hay datos disponibles",
    children=None,
):
    """
    Elige qué mostrar según el estado de una carga asíncrona.

    Prioridad: error, cargando, vacío y finalmente el contenido.
    """
    if error:
        return error_component or ErrorAlert(message=error)

    if loading:
        return loading_component or LoadingSpinner()

    if data is not None and len(data) == 0:
        return empty_component or EmptyState(message=empty_message)

    return children


@component
def ErrorAlert(message: str):
    if not message:
        return None

    return html.article(
        {
            "aria_invalid": "true",
            "role": "alert",
            "style": {
                "backgroundColor": "var(--pico-color-red-200)",
                "borderColor": "var(--pico-color-red-600)",
                "color": "var(--pico-color-red-900)",
                "padding": "1em",
                "marginBottom": "1em",
                "borderRadius": "var(--pico-border-radius)",
            },
        },
        html.strong("Error: "),
        str(message),
    )


@component
def EmptyState(message: str = "No hay datos disponibles"):
    return html.article(
        {"style": {"textAlign": "center", "padding": "2rem", "color": "var(--pico-muted-color)"}},
        html.p({"style": {"fontSize": "1.5rem", "marginBottom": "0.5rem"}}, html.i({"class_name": "fa-regular fa-folder-open"})),
        html.p(message),
    )
