# mantenimiento/web/frontend/features/catalog_page.py
"""
Página genérica de mantenimiento de catálogos (áreas, equipos, componentes,
tipos y categorías de evento, referencias y límites).
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from reactpy import component, event, html, use_effect, use_state

from mantenimiento.catalogos import CatalogoDef, empty_item, get_catalogo

from ..api.api_client import get_api_client
from ..hooks.use_catalog_hook import use_catalog
from ..shared.common_components import ConfirmationModal, page_title
from ..shared.data_table import DataTable
from ..state.app_context import use_app_context

logger = logging.getLogger(__name__)

ETIQUETAS_CAMPOS = {
    "nombre_area": "Nombre",
    "nombre_equipo": "Nombre",
    "nombre_componente": "Nombre",
    "nombre_evento": "Nombre",
    "nombre_categoria": "Nombre",
    "codigo_area": "Área",
    "codigo_equipo": "Equipo",
    "codigo_componente": "Componente",
    "fecha_inicio_referencia": "Inicio",
    "fecha_fin_referencia": "Fin",
    "corriente_limite_sup": "Corriente sup.",
    "corriente_limite_inf": "Corriente inf.",
    "desbalance_limite_sup": "Desbalance sup.",
    "desbalance_limite_inf": "Desbalance inf.",
    "sigma_limite": "Sigma",
    "factor_carga_limite_sup": "F. carga sup.",
    "factor_carga_limite_inf": "F. carga inf.",
    "estado": "Estado",
}


def field_label(field: str) -> str:
    return ETIQUETAS_CAMPOS.get(field, field.replace("_", " ").capitalize())


def form_fields(definicion: CatalogoDef) -> List[str]:
    """Campos editables en el orden del formulario, sin repetir."""
    fields = []
    for field in (definicion.name_field, definicion.parent_field) + definicion.required_fields:
        if field and field not in fields:
            fields.append(field)
    for field in definicion.date_fields + definicion.numeric_fields:
        if field not in fields:
            fields.append(field)
    return fields


def parent_options(definicion: CatalogoDef, parents: List[Dict[str, Any]]) -> List[tuple]:
    if not definicion.parent_catalog:
        return []
    parent = get_catalogo(definicion.parent_catalog)
    return [
        (row.get(parent.id_field), row.get(parent.name_field) if parent.name_field else row.get(parent.id_field))
        for row in parents
    ]


def coerce_form_value(definicion: CatalogoDef, field: str, raw: str) -> Any:
    if raw == "":
        return None
    if field in definicion.numeric_fields:
        try:
            return float(raw)
        except ValueError:
            return raw
    if field == definicion.parent_field:
        return int(raw) if raw.isdigit() else raw
    return raw


def build_columns(definicion: CatalogoDef, parents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    parent_names = dict(parent_options(definicion, parents))
    columns = [{"key": definicion.id_field, "label": "Código"}]
    for field in form_fields(definicion):
        column = {"key": field, "label": field_label(field)}
        if field == definicion.parent_field:
            column["render"] = lambda row, f=field: str(parent_names.get(row.get(f), row.get(f) or ""))
        columns.append(column)
    columns.append(
        {
            "key": "estado",
            "label": "Estado",
            "render": lambda row: html.span(
                {"class_name": "badge-activo" if row.get("estado") == "A" else "badge-inactivo"},
                "Activo" if row.get("estado") == "A" else "Inactivo",
            ),
        }
    )
    return columns


def _input_for(definicion: CatalogoDef, field: str, value: Any, options: List[tuple], on_change: Callable):
    handler = lambda e: on_change(field, e["target"]["value"])  # noqa: E731
    if field == definicion.parent_field:
        return html.select(
            {"value": "" if value is None else str(value), "on_change": handler, "required": True},
            html.option({"value": ""}, "Seleccione..."),
            [html.option({"value": str(option_id), "key": str(option_id)}, str(name)) for option_id, name in options],
        )
    input_type = "text"
    extra = {}
    if field in definicion.numeric_fields:
        input_type, extra = "number", {"step": "any", "min": "0"}
    elif field in definicion.date_fields:
        input_type = "date"
        value = str(value)[:10] if value else ""
    return html.input(
        {
            "type": input_type,
            "value": "" if value is None else str(value),
            "on_change": handler,
            "required": field in definicion.required_fields,
            **extra,
        }
    )


@component
def CatalogFormModal(
    is_open: bool,
    definicion: CatalogoDef,
    item: Optional[Dict[str, Any]],
    options: List[tuple],
    on_save: Callable,
    on_close: Callable,
):
    form_data, set_form_data = use_state(item or {})
    is_saving, set_is_saving = use_state(False)

    @use_effect(dependencies=[item])
    def sync_item():
        set_form_data(dict(item or {}))

    if not is_open:
        return None

    def handle_change(field: str, raw: str):
        value = coerce_form_value(definicion, field, raw)
        set_form_data(lambda old: {**old, field: value})

    async def handle_submit(_event):
        if is_saving:
            return
        set_is_saving(True)
        try:
            saved = await on_save(form_data)
        finally:
            set_is_saving(False)
        if saved:
            on_close()

    is_new = not form_data.get(definicion.id_field)
    titulo = f"{'Nuevo registro' if is_new else 'Editar registro'}: {definicion.label}"

    return html.dialog(
        {"open": True},
        html.article(
            html.header(
                html.button({"aria-label": "Close", "rel": "prev", "on_click": lambda e: on_close()}),
                html.h3(titulo),
            ),
            html.form(
                {"on_submit": event(handle_submit, prevent_default=True), "id": "catalog-form"},
                [
                    html.label(
                        {"key": field},
                        field_label(field),
                        _input_for(definicion, field, form_data.get(field), options, handle_change),
                    )
                    for field in form_fields(definicion)
                ],
                html.label(
                    "Estado",
                    html.select(
                        {"value": form_data.get("estado", "A"), "on_change": lambda e: handle_change("estado", e["target"]["value"])},
                        html.option({"value": "A"}, "Activo"),
                        html.option({"value": "I"}, "Inactivo"),
                    ),
                ),
            ),
            html.footer(
                html.div(
                    {"class_name": "grid"},
                    html.button({"class_name": "secondary", "type": "button", "on_click": lambda e: on_close()}, "Cancelar"),
                    html.button(
                        {"type": "submit", "form": "catalog-form", "aria-busy": str(is_saving).lower(), "disabled": is_saving},
                        "Guardando..." if is_saving else "Guardar",
                    ),
                ),
            ),
        ),
    )


@component
def CatalogPage(catalogo: str):
    catalog = use_catalog(catalogo)
    definicion: CatalogoDef = catalog["definicion"]
    api_client = use_app_context().get("api_client") or get_api_client()

    editing, set_editing = use_state(None)
    deleting, set_deleting = use_state(None)
    parents, set_parents = use_state([])

    @use_effect(dependencies=[catalogo])
    def load_parents():
        if not definicion.parent_catalog:
            return None

        async def load():
            try:
                data = await api_client.list_catalog(definicion.parent_catalog)
                set_parents(data)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"No se pudo cargar el catálogo '{definicion.parent_catalog}': {e}")

        task = asyncio.create_task(load())
        return lambda: task.cancel()

    async def confirm_delete():
        if deleting is not None:
            await catalog["remove_item"](deleting[definicion.id_field])
        set_deleting(None)

    actions = [
        {"label": "", "icon": "fa-solid fa-pen", "tooltip": "Editar", "on_click": lambda row: set_editing(dict(row))},
        {
            "label": "",
            "icon": "fa-solid fa-trash",
            "tooltip": "Eliminar",
            "class_name": "contrast",
            "on_click": lambda row: set_deleting(row),
        },
    ]

    new_button = html.button(
        {"on_click": lambda e: set_editing(empty_item(catalogo))},
        html.i({"class_name": "fa-solid fa-plus"}),
        " Nuevo",
    )

    return html._(
        page_title(definicion.label, f"Mantenimiento del catálogo de {definicion.label.lower()}", [new_button]),
        DataTable(
            data=catalog["items"],
            columns=build_columns(definicion, parents),
            loading=catalog["loading"],
            error=catalog["error"],
            actions=actions,
            sort_by=catalog["sort_by"],
            sort_dir=catalog["sort_dir"],
            on_sort=catalog["handle_sort"],
            row_key=lambda row: row.get(definicion.id_field),
        ),
        CatalogFormModal(
            is_open=editing is not None,
            definicion=definicion,
            item=editing,
            options=parent_options(definicion, parents),
            on_save=catalog["save_item"],
            on_close=lambda: set_editing(None),
        ),
        ConfirmationModal(
            is_open=deleting is not None,
            title="Eliminar registro",
            message="¿Seguro que desea eliminar este registro? Esta acción no se puede deshacer.",
            on_confirm=confirm_delete,
            on_cancel=lambda: set_deleting(None),
        ),
    )
