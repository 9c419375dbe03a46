# mantenimiento/web/backend/dependencies.py
from typing import Optional

from fastapi import HTTPException

from mantenimiento.analitica.mantenimiento_client import MantenimientoClient
from mantenimiento.navegacion.seguridades_client import SeguridadesClient


# --- Proveedor del cliente de mantenimiento ---
class MantenimientoClientProvider:
    """
    Contenedor de la instancia creada en run_web.py, para que los endpoints
    la reciban a través de FastAPI `Depends`.
    """

    def __init__(self):
        self._client: Optional[MantenimientoClient] = None

    def set_client(self, client: Optional[MantenimientoClient]):
        self._client = client

    def get_client(self) -> MantenimientoClient:
        if self._client is None:
            raise HTTPException(status_code=503, detail="Servicio de mantenimiento no disponible.")
        return self._client

    def peek(self) -> Optional[MantenimientoClient]:
        return self._client


mantenimiento_client_provider = MantenimientoClientProvider()
get_mantenimiento_client = mantenimiento_client_provider.get_client


# --- Proveedor del cliente de seguridades ---
class SeguridadesClientProvider:
    def __init__(self):
        self._client: Optional[SeguridadesClient] = None

    def set_client(self, client: Optional[SeguridadesClient]):
        self._client = client

    def get_client(self) -> SeguridadesClient:
        if self._client is None:
            raise HTTPException(status_code=503, detail="Servicio de seguridades no disponible.")
        return self._client

    def peek(self) -> Optional[SeguridadesClient]:
        return self._client


seguridades_client_provider = SeguridadesClientProvider()
get_seguridades_client = seguridades_client_provider.get_client
