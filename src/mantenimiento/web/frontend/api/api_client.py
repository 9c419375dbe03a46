# mantenimiento/web/frontend/api/api_client.py
from datetime import date
from typing import Any, Dict, List, Optional

from mantenimiento.catalogos import validate_catalog_data
from mantenimiento.common.config_manager import ConfigManager
from mantenimiento.common.exceptions import APIException, ValidationException
from mantenimiento.common.http_client import RestClient


# Cliente de la interfaz contra nuestra propia API de FastAPI
class ApiClient(RestClient):
    def __init__(self, base_url: str = "http://127.0.0.1:8000", timeout: float = 60.0, max_retries: int = 3):
        super().__init__(base_url=base_url, timeout=timeout, max_retries=max_retries)

    # MÉTODOS DE NAVEGACIÓN
    async def get_navigation(self, codigo_empleado: Optional[str]) -> Dict[str, Any]:
        params = {"codigo_empleado": codigo_empleado} if codigo_empleado else None
        data = await self._request("GET", "/api/navegacion", params=params)
        if not isinstance(data, dict):
            raise APIException(f"Respuesta inesperada del servidor: '{str(data)[:200]}'")
        return data

    # MÉTODOS DE CATÁLOGOS
    async def list_catalog(self, catalogo: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/catalogos/{catalogo}") or []

    async def get_catalog_item(self, catalogo: str, item_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/api/catalogos/{catalogo}/{item_id}")

    async def save_catalog_item(self, catalogo: str, item: Dict[str, Any]) -> Dict[str, Any]:
        validation_result = validate_catalog_data(catalogo, item)
        if not validation_result.is_valid:
            raise ValidationException("Datos inválidos", validation_result.errors)
        return await self._request("POST", f"/api/catalogos/{catalogo}", json_data=item)

    async def delete_catalog_item(self, catalogo: str, item_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/catalogos/{catalogo}/{item_id}")

    # MÉTODOS DE ANALÍTICA
    async def get_machines(self) -> List[str]:
        return await self._request("GET", "/api/maquinas") or []

    async def get_components(self, maquina: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/maquinas/{maquina}/componentes") or []

    @staticmethod
    def _range_params(maquina: str, componente: str, fecha_inicio: date, fecha_fin: date) -> Dict[str, Any]:
        return {
            "maquina": maquina,
            "componente": componente,
            "fecha_inicio": fecha_inicio.isoformat(),
            "fecha_fin": fecha_fin.isoformat(),
        }

    async def get_status(self, maquina: str, componente: str, fecha_inicio: date, fecha_fin: date) -> Dict[str, Any]:
        return await self._request(
            "GET", "/api/analitica/estado", params=self._range_params(maquina, componente, fecha_inicio, fecha_fin)
        )


_api_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    global _api_client
    if _api_client is None:
        _api_client = ApiClient(base_url=ConfigManager.get_web_config()["api_base_url"])
    return _api_client
