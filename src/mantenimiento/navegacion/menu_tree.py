# mantenimiento/navegacion/menu_tree.py
"""
Ensamblado del árbol de menú.

Cada perfil (tipo de usuario) concedido devuelve su propio fragmento de menú.
Un mismo ítem puede llegar por varios perfiles con hijos distintos, así que
los fragmentos se fusionan por `codigo_menu` conservando el orden en que cada
código apareció por primera vez. Luego se descartan los ítems inactivos y se
traduce el resultado a la forma que consume la barra lateral.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, TypedDict
from urllib.parse import urlsplit

from pydantic import BaseModel

from .iconos import resolve_icon

RUTA_RAIZ = "."
RUTA_RAMA = "|"


class EstadoMenu(str, Enum):
    ACTIVO = "A"
    INACTIVO = "I"


class MenuNode(BaseModel):
    codigo_menu: Optional[int] = None
    codigo_padre: Optional[int] = None
    nombre: str = ""
    icono: Optional[str] = None
    path: Optional[str] = None
    estado: Optional[str] = None
    codigo_aplicacion: Optional[str] = None
    children: Optional[List["MenuNode"]] = None

    @property
    def is_active(self) -> bool:
        return self.estado == EstadoMenu.ACTIVO.value


class RenderItem(TypedDict):
    id: int
    label: str
    icon: str
    path: Optional[str]
    original_path: Optional[str]
    is_root: bool
    is_branch: bool
    children: Optional[List["RenderItem"]]


def is_navigable(path: Optional[str]) -> bool:
    """Un ítem es navegable si tiene ruta y no es uno de los marcadores de agrupación."""
    return bool(path) and path not in (RUTA_RAIZ, RUTA_RAMA)


def normalize_path(path: str) -> str:
    """Si el servicio devolvió una URL absoluta, se conserva solo ruta, query y fragmento."""
    if not (path.startswith("http://") or path.startswith("https://") or path.startswith("//")):
        return path
    try:
        parts = urlsplit(path)
    except ValueError:
        return path
    normalized = parts.path or "/"
    if parts.query:
        normalized += f"?{parts.query}"
    if parts.fragment:
        normalized += f"#{parts.fragment}"
    return normalized


def merge_nodes(nodes: Iterable[MenuNode]) -> List[MenuNode]:
    """
    Reduce una lista de nodos por `codigo_menu`.

    El primer nodo visto de cada código conserva sus campos; los duplicados
    solo aportan hijos, que se concatenan y se fusionan recursivamente.
    Los nodos sin código se descartan.
    """
    merged: Dict[int, MenuNode] = {}
    pending_children: Dict[int, List[MenuNode]] = {}

    for node in nodes:
        if not node.codigo_menu:
            continue
        if node.codigo_menu not in merged:
            merged[node.codigo_menu] = node
            pending_children[node.codigo_menu] = []
        pending_children[node.codigo_menu].extend(node.children or [])

    result = []
    for codigo, node in merged.items():
        children = merge_nodes(pending_children[codigo])
        result.append(node.model_copy(update={"children": children or None}))
    return result


def merge_fragments(fragments: Sequence[Sequence[MenuNode]]) -> List[MenuNode]:
    """Fusiona los fragmentos de todos los perfiles en un único bosque ordenado."""
    return merge_nodes(node for fragment in fragments for node in fragment)


def filter_active(nodes: Sequence[MenuNode]) -> List[MenuNode]:
    """
    Conserva solo los ítems activos. Un ítem inactivo se descarta con todo su
    subárbol, aunque tenga hijos activos.
    """
    result = []
    for node in nodes:
        if not node.is_active:
            continue
        children = filter_active(node.children) if node.children else []
        result.append(node.model_copy(update={"children": children or None}))
    return result


def to_render_items(nodes: Sequence[MenuNode], base_path: str = "") -> List[RenderItem]:
    items: List[RenderItem] = []
    for node in nodes:
        navigable_path = None
        if is_navigable(node.path):
            navigable_path = f"{base_path}{normalize_path(node.path)}"
        children = to_render_items(node.children, base_path) if node.children else None
        items.append(
            RenderItem(
                id=node.codigo_menu,
                label=node.nombre,
                icon=resolve_icon(node.icono),
                path=navigable_path,
                original_path=node.path,
                is_root=node.path == RUTA_RAIZ,
                is_branch=node.path == RUTA_RAMA,
                children=children or None,
            )
        )
    return items
