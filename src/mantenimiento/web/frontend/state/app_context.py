# mantenimiento/web/frontend/state/app_context.py
"""
Contexto global de la aplicación para inyección de dependencias.

Comparte entre páginas y hooks el cliente API, el código del empleado y la
configuración de la aplicación (título, ruta base).

Uso:
    # En app.py (componente raíz)
    return AppContext(children, value={"api_client": api_client, ...})

    # En hooks o componentes
    api_client = use_app_context()["api_client"]
"""

from typing import Any, Dict

from reactpy import create_context, use_context

AppContext = create_context({})


def use_app_context() -> Dict[str, Any]:
    return use_context(AppContext) or {}
