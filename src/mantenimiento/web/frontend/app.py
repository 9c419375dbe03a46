# mantenimiento/web/frontend/app.py
import uuid
from typing import Any, Dict, Optional
from urllib.parse import parse_qs

from reactpy import component, html, use_effect, use_location, use_state
from reactpy_router import browser_router, link, route

from mantenimiento.common.config_manager import ConfigManager

from .api.api_client import get_api_client

# Páginas
from .features.catalog_page import CatalogPage
from .features.dashboard_page import DashboardPage

# Hooks
from .hooks.use_navigation_hook import use_navigation

# Componentes compartidos
from .shared.async_content import LoadingSpinner
from .shared.common_components import PageWithLayout
from .shared.notifications import NotificationContext, ToastContainer, build_notification_context

# Contexto de la aplicación
from .state.app_context import AppContext

# Ruta (relativa a la ruta base) -> catálogo administrado en esa página
CATALOG_ROUTES = {
    "/dashboard/area": "area",
    "/dashboard/equipo": "equipo",
    "/dashboard/componentes": "componente",
    "/dashboard/tipo-evento": "tipo_evento",
    "/dashboard/categoria-evento": "categoria_evento",
    "/dashboard/referencias": "referencia",
    "/dashboard/limites": "limite",
}


def employee_code_from_search(search: Optional[str]) -> Optional[str]:
    """Lee `codigo_empleado` de la query string (`?codigo_empleado=123`)."""
    values = parse_qs((search or "").lstrip("?")).get("codigo_empleado")
    if not values or not values[0].strip():
        return None
    return values[0].strip()


def with_base_path(base_path: str, path: str) -> str:
    if not base_path:
        return path
    return base_path if path == "/" else f"{base_path}{path}"


# --- Componentes de Página ---
@component
def AccessDeniedPage(message: str):
    return html.main(
        {"class_name": "container access-denied"},
        html.article(
            html.header(html.i({"class_name": "fa-solid fa-lock"}), html.strong(" Acceso denegado")),
            html.p(message),
        ),
    )


@component
def NotFoundPage(layout: Dict[str, Any]):
    return PageWithLayout(
        layout=layout,
        children=html.article(
            html.h2("404: Página no encontrada"),
            html.p("La página que buscas no existe."),
            link({"to": with_base_path(layout["base_path"], "/")}, "Volver al tablero"),
        ),
    )


@component
def DashboardRoute(layout: Dict[str, Any]):
    return PageWithLayout(layout=layout, children=DashboardPage())


@component
def CatalogRoute(layout: Dict[str, Any], catalogo: str):
    return PageWithLayout(layout=layout, children=CatalogPage(catalogo=catalogo, key=catalogo))


@component
def AppRoutes(layout: Dict[str, Any]):
    """Enrutador de la aplicación, o la página de acceso denegado si el usuario no tiene menú."""
    navigation = layout["navigation"]
    if navigation["loading"] and not navigation["items"]:
        return html.main({"class_name": "container"}, LoadingSpinner(size="large"))
    if navigation["access_denied"]:
        return AccessDeniedPage(message=navigation["error"] or "No tienes acceso a esta aplicación.")

    base_path = layout["base_path"]
    catalog_routes = [
        route(with_base_path(base_path, path), CatalogRoute(layout=layout, catalogo=catalogo))
        for path, catalogo in CATALOG_ROUTES.items()
    ]
    return browser_router(
        route(with_base_path(base_path, "/"), DashboardRoute(layout=layout)),
        *catalog_routes,
        route("*", NotFoundPage(layout=layout)),
    )


@component
def App():
    """
    Componente raíz que provee los contextos (notificaciones y dependencias),
    carga el menú del usuario y monta el enrutador.
    """
    notifications, set_notifications = use_state([])
    is_dark, set_is_dark = use_state(True)
    script_to_run, set_script_to_run = use_state(html._())

    app_config = ConfigManager.get_app_config()
    api_client = get_api_client()
    location = use_location()
    codigo_empleado = employee_code_from_search(location.search)
    navigation = use_navigation(codigo_empleado, api_client=api_client)

    @use_effect(dependencies=[is_dark])
    def apply_theme():
        theme = "dark" if is_dark else "light"
        key = f"theme-script-{uuid.uuid4()}"
        js_code = f"document.documentElement.setAttribute('data-theme', '{theme}')"
        set_script_to_run(html.script({"key": key}, js_code))

    layout = {
        "title": app_config["titulo_sistema"],
        "base_path": app_config["base_path"],
        "theme_is_dark": is_dark,
        "on_theme_toggle": set_is_dark,
        "codigo_empleado": codigo_empleado,
        "navigation": navigation,
    }

    app_context_value = {
        "api_client": api_client,
        "codigo_empleado": codigo_empleado,
        "app_config": app_config,
    }

    return AppContext(
        NotificationContext(
            html._(
                script_to_run,
                AppRoutes(layout=layout),
                ToastContainer(),
            ),
            value=build_notification_context(notifications, set_notifications),
        ),
        value=app_context_value,
    )


# --- Elementos del <head> ---
head = html.head(
    html.title(ConfigManager.get_app_config()["titulo_sistema"]),
    html.meta({"charset": "utf-8"}),
    html.meta({"name": "viewport", "content": "width=device-width, initial-scale=1"}),
    html.link({"rel": "stylesheet", "href": "https://cdn.jsdelivr.net/npm/@picocss/pico@2.1.1/css/pico.min.css"}),
    html.link({"rel": "stylesheet", "href": "https://cdn.jsdelivr.net/npm/@picocss/pico@2.1.1/css/pico.colors.min.css"}),
    html.link(
        {"rel": "stylesheet", "href": "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.2/css/all.min.css"}
    ),
    html.script({"src": "https://cdn.jsdelivr.net/npm/chart.js@4.4.1/dist/chart.umd.min.js"}),
    html.link({"rel": "stylesheet", "href": "/static/custom.css"}),
)
