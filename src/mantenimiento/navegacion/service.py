# mantenimiento/navegacion/service.py
import asyncio
import logging
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence

from pydantic import ValidationError

from .menu_tree import MenuNode, filter_active, merge_fragments

logger = logging.getLogger(__name__)

MENSAJE_SIN_ACCESO = "No tienes acceso a esta aplicación."
MENSAJE_ERROR_MENU = "Error cargando menú"


class NavigationResult(NamedTuple):
    """
    Resultado de cargar el menú de un usuario.

    `has_menu` y `access_denied` son las dos señales que la interfaz usa para
    decidir si muestra la barra lateral o la página de acceso denegado.
    """

    items: List[MenuNode]
    has_menu: bool
    access_denied: bool
    error: Optional[str] = None


def _role_codes(entries: Iterable[Any]) -> List[Any]:
    codes = []
    for entry in entries:
        if isinstance(entry, dict) and entry.get("codigo_tipo_usuario") is not None:
            codes.append(entry["codigo_tipo_usuario"])
    return codes


def extract_user_roles(response: Any) -> List[Any]:
    """Códigos de tipo de usuario del empleado (`data.Tipo_usuario`, objeto o lista)."""
    data = response.get("data") if isinstance(response, dict) else None
    tipos = (data or {}).get("Tipo_usuario") if isinstance(data, dict) else None
    if isinstance(tipos, dict):
        tipos = list(tipos.values())
    return _role_codes(tipos or [])


def extract_application_roles(response: Any) -> List[Any]:
    """Códigos de tipo de usuario habilitados para la aplicación (`data[]`)."""
    data = response.get("data") if isinstance(response, dict) else None
    return _role_codes(data if isinstance(data, list) else [])


def match_roles(user_roles: Sequence[Any], app_roles: Sequence[Any]) -> List[Any]:
    """Intersección de perfiles conservando el orden de los perfiles del usuario."""
    allowed = {str(code) for code in app_roles}
    matched = []
    for code in user_roles:
        if str(code) in allowed and code not in matched:
            matched.append(code)
    return matched


def parse_fragment(response: Any) -> List[MenuNode]:
    """
    Convierte la respuesta de `menu-tree` en un fragmento.
    El servicio puede devolver un nodo, una lista de nodos, o el nodo sin envolver en `data`.
    """
    if isinstance(response, dict) and response.get("data") is not None:
        raw = response["data"]
    elif isinstance(response, dict) and response.get("codigo_menu"):
        raw = response
    else:
        raw = response if isinstance(response, list) else []

    raw_nodes = raw if isinstance(raw, list) else [raw]
    fragment = []
    for raw_node in raw_nodes:
        try:
            fragment.append(MenuNode.model_validate(raw_node))
        except ValidationError as e:
            logger.warning(f"Nodo de menú descartado por formato inválido: {e.error_count()} errores")
    return fragment


async def _fetch_fragment(client, codigo_tipo_usuario: Any) -> List[MenuNode]:
    try:
        return parse_fragment(await client.get_menu_tree(codigo_tipo_usuario))
    except Exception as e:
        logger.warning(f"No se pudo obtener el menú del perfil {codigo_tipo_usuario}: {e}")
        return []


async def load_navigation(client, codigo_empleado: Optional[str], codigo_aplicacion: str) -> NavigationResult:
    """
    Carga el menú del empleado para la aplicación indicada.

    Resuelve los perfiles del usuario y los de la aplicación, pide en paralelo
    el fragmento de menú de cada perfil coincidente, los fusiona y filtra los
    inactivos. Un menú vacío equivale a acceso denegado.
    """
    if not codigo_empleado or not codigo_aplicacion:
        return NavigationResult(items=[], has_menu=False, access_denied=True, error=MENSAJE_SIN_ACCESO)

    try:
        user_roles = extract_user_roles(await client.get_user_profiles(codigo_empleado))
        app_roles = extract_application_roles(await client.get_application_profiles(codigo_aplicacion))
    except Exception as e:
        logger.error(f"Error cargando los perfiles del empleado {codigo_empleado}: {e}", exc_info=True)
        return NavigationResult(items=[], has_menu=False, access_denied=False, error=MENSAJE_ERROR_MENU)

    matched = match_roles(user_roles, app_roles)
    logger.info(f"Empleado {codigo_empleado}: {len(matched)} perfiles habilitados para {codigo_aplicacion}")

    fragments = await asyncio.gather(*(_fetch_fragment(client, codigo) for codigo in matched))
    items = filter_active(merge_fragments(fragments))

    if not items:
        return NavigationResult(items=[], has_menu=False, access_denied=True, error=MENSAJE_SIN_ACCESO)
    return NavigationResult(items=items, has_menu=True, access_denied=False)
