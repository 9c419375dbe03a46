# mantenimiento/web/frontend/hooks/use_navigation_hook.py
"""
Hook que carga el menú del usuario para la barra lateral.

El backend ya cruza los perfiles del usuario con los de la aplicación y
devuelve los ítems listos para mostrar; aquí solo se guarda el resultado y
los estados de carga, error y acceso denegado.
"""

import asyncio
from typing import Any, Dict, Optional

from reactpy import use_callback, use_effect, use_ref, use_state

from ..api.api_client import ApiClient, get_api_client
from ..state.app_context import use_app_context


def use_navigation(codigo_empleado: Optional[str], api_client: Optional[ApiClient] = None) -> Dict[str, Any]:
    """
    Returns:
        Dict con items, loading, error, has_menu, access_denied y refresh.
    """
    if api_client is None:
        api_client = use_app_context().get("api_client") or get_api_client()

    items, set_items = use_state([])
    loading, set_loading = use_state(True)
    error, set_error = use_state(None)
    has_menu, set_has_menu = use_state(False)
    access_denied, set_access_denied = use_state(False)

    is_mounted = use_ref(True)

    @use_effect(dependencies=[])
    def mount_lifecycle():
        is_mounted.current = True
        return lambda: setattr(is_mounted, "current", False)

    @use_callback
    async def load_navigation():
        if not is_mounted.current:
            return
        set_loading(True)
        set_error(None)
        try:
            data = await api_client.get_navigation(codigo_empleado)
            if is_mounted.current:
                set_items(data.get("items", []))
                set_has_menu(bool(data.get("has_menu")))
                set_access_denied(bool(data.get("access_denied")))
                set_error(data.get("error"))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if is_mounted.current:
                set_items([])
                set_has_menu(False)
                set_error(f"Error cargando menú: {e}")
        finally:
            if is_mounted.current:
                set_loading(False)

    @use_effect(dependencies=[codigo_empleado])
    def load_on_change():
        task = asyncio.create_task(load_navigation())
        return lambda: task.cancel()

    return {
        "items": items,
        "loading": loading,
        "error": error,
        "has_menu": has_menu,
        "access_denied": access_denied,
        "refresh": load_navigation,
    }
