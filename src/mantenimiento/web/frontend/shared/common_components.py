# mantenimiento/web/frontend/shared/common_components.py
from typing import Callable, List, Optional

from reactpy import component, html, use_state

from ..features.sidebar_menu import SidebarMenu
from .async_content import LoadingSpinner


@component
def ThemeSwitcher(is_dark: bool, on_toggle: Callable):
    """Interruptor de tema claro / oscuro."""

    def handle_change(event):
        on_toggle(bool(event["target"]["checked"]))

    return html.label(
        {"htmlFor": "theme-switcher", "class_name": "theme-switcher"},
        html.i({"class_name": "fa-solid fa-sun"}),
        html.input(
            {
                "type": "checkbox",
                "id": "theme-switcher",
                "role": "switch",
                "checked": is_dark,
                "on_change": handle_change,
            }
        ),
        html.i({"class_name": "fa-solid fa-moon"}),
    )


@component
def ConfirmationModal(is_open: bool, title: str, message: str, on_confirm: Callable, on_cancel: Callable):
    """Modal genérico para solicitar confirmación del usuario."""
    # Los hooks se llaman siempre, aunque el modal esté cerrado.
    is_processing, set_is_processing = use_state(False)

    if not is_open:
        return None

    async def handle_confirm(_event):
        if is_processing:
            return
        set_is_processing(True)
        try:
            await on_confirm()
        finally:
            set_is_processing(False)

    return html.dialog(
        {"open": True},
        html.article(
            html.header(
                html.button({"aria-label": "Close", "rel": "prev", "on_click": lambda e: on_cancel()}),
                html.h3(title),
            ),
            html.p(message),
            html.footer(
                html.div(
                    {"class_name": "grid"},
                    html.button(
                        {"class_name": "secondary", "on_click": lambda e: on_cancel(), "disabled": is_processing},
                        "Cancelar",
                    ),
                    html.button(
                        {
                            "class_name": "pico-background-red-550",
                            "on_click": handle_confirm,
                            "disabled": is_processing,
                            "aria-busy": str(is_processing).lower(),
                        },
                        "Procesando..." if is_processing else "Confirmar",
                    ),
                ),
            ),
        ),
    )


@component
def HeaderNav(title: str, theme_is_dark: bool, on_theme_toggle: Callable, codigo_empleado: Optional[str] = None):
    return html.header(
        {"class_name": "sticky-header"},
        html.nav(
            {"class_name": "container-fluid"},
            html.ul(html.li(html.i({"class_name": "fa-solid fa-industry"})), html.li(html.strong(title))),
            html.ul(
                html.li(
                    html.small(
                        html.i({"class_name": "fa-solid fa-user"}),
                        f" {codigo_empleado}",
                    )
                )
                if codigo_empleado
                else None,
                html.li(ThemeSwitcher(is_dark=theme_is_dark, on_toggle=on_theme_toggle)),
            ),
        ),
    )


@component
def PageWithLayout(layout: dict, children):
    """
    Estructura común de cada página: cabecera, barra lateral con el menú del
    usuario y contenido principal.

    `layout` lo arma App con el título, el tema y el estado de navegación.
    """
    navigation = layout["navigation"]
    return html._(
        HeaderNav(
            title=layout["title"],
            theme_is_dark=layout["theme_is_dark"],
            on_theme_toggle=layout["on_theme_toggle"],
            codigo_empleado=layout.get("codigo_empleado"),
        ),
        html.div(
            {"class_name": "layout-with-sidebar"},
            html.aside(
                {"class_name": "sidebar"},
                LoadingSpinner() if navigation["loading"] else SidebarMenu(items=navigation["items"]),
            ),
            html.main({"class_name": "container-fluid"}, children),
        ),
    )


def page_title(title: str, subtitle: Optional[str] = None, actions: Optional[List] = None):
    return html.div(
        {"class_name": "page-title"},
        html.hgroup(html.h2(title), html.p(subtitle) if subtitle else None),
        html.div({"style": {"display": "flex", "gap": "0.5rem"}}, *(actions or [])),
    )
