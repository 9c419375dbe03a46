# mantenimiento/navegacion/iconos.py
"""
Tabla de iconos del menú.

El servicio de seguridades devuelve nombres de icono simbólicos (los de la
librería Lucide). Aquí se traducen a clases de Font Awesome, que es la
librería que carga la interfaz. Cualquier nombre desconocido cae en "Shield".
"""

from typing import Dict, Optional

ICONO_POR_DEFECTO = "Shield"

ICONOS: Dict[str, str] = {
    "Shield": "fa-solid fa-shield-halved",
    "Home": "fa-solid fa-house",
    "House": "fa-solid fa-house",
    "LayoutDashboard": "fa-solid fa-gauge-high",
    "Gauge": "fa-solid fa-gauge",
    "Activity": "fa-solid fa-wave-square",
    "LineChart": "fa-solid fa-chart-line",
    "ChartLine": "fa-solid fa-chart-line",
    "BarChart": "fa-solid fa-chart-column",
    "BarChart3": "fa-solid fa-chart-column",
    "PieChart": "fa-solid fa-chart-pie",
    "Settings": "fa-solid fa-gear",
    "Settings2": "fa-solid fa-sliders",
    "Wrench": "fa-solid fa-wrench",
    "Hammer": "fa-solid fa-hammer",
    "Cog": "fa-solid fa-gear",
    "Cpu": "fa-solid fa-microchip",
    "Factory": "fa-solid fa-industry",
    "Building": "fa-solid fa-building",
    "Building2": "fa-solid fa-building",
    "MapPin": "fa-solid fa-location-dot",
    "Map": "fa-solid fa-map",
    "Users": "fa-solid fa-users",
    "User": "fa-solid fa-user",
    "UserCog": "fa-solid fa-user-gear",
    "Folder": "fa-solid fa-folder",
    "FolderOpen": "fa-solid fa-folder-open",
    "FileText": "fa-solid fa-file-lines",
    "ClipboardList": "fa-solid fa-clipboard-list",
    "List": "fa-solid fa-list",
    "ListChecks": "fa-solid fa-list-check",
    "Tags": "fa-solid fa-tags",
    "Tag": "fa-solid fa-tag",
    "Calendar": "fa-solid fa-calendar",
    "CalendarClock": "fa-solid fa-calendar-days",
    "AlertTriangle": "fa-solid fa-triangle-exclamation",
    "TriangleAlert": "fa-solid fa-triangle-exclamation",
    "Bell": "fa-solid fa-bell",
    "Zap": "fa-solid fa-bolt",
    "Database": "fa-solid fa-database",
    "Server": "fa-solid fa-server",
    "Layers": "fa-solid fa-layer-group",
    "Boxes": "fa-solid fa-boxes-stacked",
    "Box": "fa-solid fa-box",
    "Package": "fa-solid fa-box",
    "Ruler": "fa-solid fa-ruler",
    "SlidersHorizontal": "fa-solid fa-sliders",
}


def resolve_icon(name: Optional[str]) -> str:
    """Devuelve la clase CSS del icono, o la del icono por defecto si no existe."""
    if name and name in ICONOS:
        return ICONOS[name]
    return ICONOS[ICONO_POR_DEFECTO]
