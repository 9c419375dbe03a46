# mantenimiento/web/frontend/features/sidebar_menu.py
"""
Barra lateral construida a partir de los ítems de navegación del usuario.

Los ítems de agrupación (con hijos) se muestran como secciones plegables;
los navegables como enlaces. Un ítem sin ruta ni hijos se muestra como texto.
"""

from typing import Any, Dict, List

from reactpy import component, html
from reactpy_router import link


def _item_label(item: Dict[str, Any]):
    return html._(html.i({"class_name": f"{item['icon']} fa-fw"}), html.span(f" {item['label']}"))


def _render_item(item: Dict[str, Any]):
    children = item.get("children") or []
    key = str(item.get("id"))

    if children:
        return html.li(
            {"key": key},
            html.details(
                {"open": bool(item.get("is_root"))},
                html.summary(_item_label(item)),
                html.ul([_render_item(child) for child in children]),
            ),
        )
    if item.get("path"):
        return html.li({"key": key}, link({"to": item["path"], "class_name": "sidebar-link"}, _item_label(item)))
    return html.li({"key": key, "class_name": "sidebar-disabled"}, _item_label(item))


@component
def SidebarMenu(items: List[Dict[str, Any]]):
    if not items:
        return html.p({"class_name": "sidebar-empty"}, html.small("Sin opciones de menú"))
    return html.nav({"class_name": "sidebar-menu"}, html.ul([_render_item(item) for item in items]))
