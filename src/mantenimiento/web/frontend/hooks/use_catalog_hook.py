# mantenimiento/web/frontend/hooks/use_catalog_hook.py
import asyncio
from typing import Any, Callable, Dict, Optional

from reactpy import use_callback, use_effect, use_ref, use_state

from mantenimiento.catalogos import get_catalogo
from mantenimiento.common.exceptions import ValidationException

from ..api.api_client import ApiClient, get_api_client
from ..shared.notifications import use_notify
from ..state.app_context import use_app_context


def use_catalog(catalogo: str, api_client: Optional[ApiClient] = None) -> Dict[str, Any]:
    """
    Listado y mantenimiento (alta, edición y baja) de un catálogo.

    Returns:
        Dict con items, loading, error, refresh, save_item, remove_item,
        sort_by, sort_dir y handle_sort.
    """
    if api_client is None:
        api_client = use_app_context().get("api_client") or get_api_client()
    show_notification: Callable = use_notify()
    definicion = get_catalogo(catalogo)

    items, set_items = use_state([])
    loading, set_loading = use_state(True)
    error, set_error = use_state(None)
    sort_by, set_sort_by = use_state(definicion.name_field)
    sort_dir, set_sort_dir = use_state("asc")

    is_mounted = use_ref(True)

    @use_effect(dependencies=[])
    def mount_lifecycle():
        is_mounted.current = True
        return lambda: setattr(is_mounted, "current", False)

    @use_callback
    async def load_items():
        if not is_mounted.current:
            return
        set_loading(True)
        set_error(None)
        try:
            data = await api_client.list_catalog(catalogo)
            if is_mounted.current:
                set_items(data)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if is_mounted.current:
                set_error(str(e))
                show_notification(f"Error al cargar {definicion.label.lower()}: {e}", "error")
        finally:
            if is_mounted.current:
                set_loading(False)

    @use_effect(dependencies=[catalogo])
    def load_on_mount():
        task = asyncio.create_task(load_items())
        return lambda: task.cancel()

    async def save_item(item: Dict[str, Any]) -> bool:
        """Devuelve True si se guardó; los errores se notifican y no se propagan al formulario."""
        try:
            await api_client.save_catalog_item(catalogo, item)
        except ValidationException as e:
            show_notification(" ".join(e.errors) or e.message, "error")
            return False
        except asyncio.CancelledError:
            raise
        except Exception as e:
            show_notification(f"Error al guardar: {e}", "error")
            return False
        show_notification("Registro guardado correctamente.", "success")
        await load_items()
        return True

    async def remove_item(item_id: int) -> bool:
        try:
            await api_client.delete_catalog_item(catalogo, item_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            show_notification(f"Error al eliminar: {e}", "error")
            return False
        show_notification("Registro eliminado.", "success")
        await load_items()
        return True

    def handle_sort(column_key: str):
        if sort_by == column_key:
            set_sort_dir("desc" if sort_dir == "asc" else "asc")
        else:
            set_sort_by(column_key)
            set_sort_dir("asc")

    def _sort_key(row: Dict[str, Any]):
        value = row.get(sort_by)
        return (value is None, str(value).lower() if isinstance(value, str) else value if value is not None else 0)

    try:
        sorted_items = sorted(items, key=_sort_key, reverse=sort_dir == "desc")
    except TypeError:
        # columnas con tipos mezclados: se deja el orden del servidor
        sorted_items = items

    return {
        "definicion": definicion,
        "items": sorted_items,
        "loading": loading,
        "error": error,
        "refresh": load_items,
        "save_item": save_item,
        "remove_item": remove_item,
        "sort_by": sort_by,
        "sort_dir": sort_dir,
        "handle_sort": handle_sort,
    }
