# mantenimiento/web/frontend/shared/data_table.py
"""
Tabla genérica para los listados de catálogos.

Uso:
    columns = [
        {"key": "nombre_area", "label": "Nombre"},
        {"key": "estado", "label": "Estado", "render": lambda row: EstadoBadge(row["estado"])},
    ]
    DataTable(data=areas, columns=columns, row_key=lambda row: row["codigo_area"])
"""

from typing import Any, Callable, Dict, List, Optional

from reactpy import component, event, html

from .async_content import AsyncContent, EmptyState


@component
def DataTable(
    data: List[Dict[str, Any]],
    columns: List[Dict[str, Any]],
    loading: bool = False,
    error: Optional[str] = None,
    actions: Optional[List[Dict[str, Any]]] = None,
    empty_message: str = "No hay datos disponibles",
    sort_by: Optional[str] = None,
    sort_dir: Optional[str] = None,
    on_sort: Optional[Callable] = None,
    row_key: Optional[Callable] = None,
):
    """
    Args:
        data: filas a mostrar
        columns: definiciones con "key", "label" y opcionalmente "render" y "sortable"
        actions: botones por fila, cada uno con "label", "on_click", "icon" y "class_name"
        on_sort: callback con la clave de la columna pulsada
        row_key: función que devuelve la key única de cada fila
    """
    return AsyncContent(
        loading=loading,
        error=error,
        data=data,
        empty_component=EmptyState(message=empty_message),
        children=_render_table(data, columns, actions, sort_by, sort_dir, on_sort, row_key),
    )


def _render_table(data, columns, actions, sort_by, sort_dir, on_sort, row_key):
    def render_header(column: Dict[str, Any]):
        column_key = column.get("key", "")
        if not column.get("sortable", True) or not on_sort:
            return html.th({"scope": "col"}, column.get("label", ""))

        indicator = ""
        if sort_by == column_key:
            indicator = " ▲" if sort_dir == "asc" else " ▼"
        return html.th(
            {"scope": "col"},
            html.a(
                {"href": "#", "on_click": event(lambda e, key=column_key: on_sort(key), prevent_default=True)},
                column.get("label", ""),
                indicator,
            ),
        )

    def render_cell(row: Dict[str, Any], column: Dict[str, Any]):
        if callable(column.get("render")):
            return html.td(column["render"](row))
        value = row.get(column.get("key", ""))
        return html.td("" if value is None else str(value))

    def render_row(row: Dict[str, Any], index: int):
        cells = [render_cell(row, col) for col in columns]
        if actions:
            cells.append(html.td(_render_actions(row, actions)))
        key = str(row_key(row)) if row_key else str(index)
        return html.tr({"key": key}, cells)

    headers = [render_header(col) for col in columns]
    if actions:
        headers.append(html.th({"scope": "col"}, "Acciones"))

    return html.article(
        {"class_name": "overflow-auto"},
        html.table(
            {"class_name": "striped"},
            html.thead(html.tr(headers)),
            html.tbody([render_row(row, idx) for idx, row in enumerate(data or [])]),
        ),
    )


def _render_actions(row: Dict[str, Any], actions: List[Dict[str, Any]]):
    buttons = []
    for action in actions:
        on_click = action.get("on_click")
        if not on_click:
            continue
        content = [action.get("label", "")]
        if action.get("icon"):
            content.insert(0, html.i({"class_name": action["icon"]}))
        buttons.append(
            html.button(
                {
                    "class_name": f"outline {action.get('class_name', 'secondary')}",
                    "on_click": event(lambda e, r=row, handler=on_click: handler(r), prevent_default=True),
                    "type": "button",
                    "data-tooltip": action.get("tooltip"),
                },
                *content,
            )
        )
    return html.div({"style": {"display": "flex", "gap": "0.5rem"}}, *buttons)
