# mantenimiento/analitica/mantenimiento_client.py
import logging
from typing import Any, Dict, List, Optional

from ..catalogos import get_catalogo
from ..common.http_client import RestClient

logger = logging.getLogger(__name__)

CALCULOS_ENDPOINT = "/api/CalculosCorrientesDatosMantenimiento"


def _data(response: Any) -> Any:
    """El servicio envuelve casi todo en {"data": ...}."""
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


class MantenimientoClient(RestClient):
    """
    Cliente del servicio de mantenimiento: datos calculados de corriente por
    máquina y componente, y los catálogos de referencia.
    """

    # --- MÁQUINAS Y COMPONENTES ---

    async def get_machines(self, page: int = 1, limit: int = 100) -> List[str]:
        response = await self._request("GET", f"{CALCULOS_ENDPOINT}/machines", params={"page": page, "limit": limit})
        return [row["maquina"] for row in _data(response) or [] if isinstance(row, dict) and row.get("maquina")]

    async def get_components_by_machine(self, maquina: str, page: int = 1, limit: int = 100) -> List[Dict[str, Any]]:
        response = await self._request(
            "POST",
            f"{CALCULOS_ENDPOINT}/componentsByMachine",
            json_data={"maquina": maquina, "page": page, "limit": limit},
        )
        return _data(response) or []

    # --- TOTALES ---

    async def get_total_by_machine_and_component(
        self, maquina: str, componente: str, fecha_inicio: str, fecha_fin: str
    ) -> int:
        response = await self._request(
            "POST",
            f"{CALCULOS_ENDPOINT}/totalByMaquinaAndComponente",
            json_data={"maquina": maquina, "componente": componente, "fecha_inicio": fecha_inicio, "fecha_fin": fecha_fin},
        )
        return int((response or {}).get("total", 0))

    # --- DATOS ---

    async def get_component_data(
        self, maquina: str, componente: str, fecha_inicio: str, fecha_fin: str, page: int = 1, limit: int = 1000
    ) -> List[Dict[str, Any]]:
        response = await self._request(
            "POST",
            f"{CALCULOS_ENDPOINT}/machineComponentDates",
            json_data={
                "maquina": maquina,
                "componente": componente,
                "fecha_inicio": fecha_inicio,
                "fecha_fin": fecha_fin,
                "page": page,
                "limit": limit,
            },
        )
        return _data(response) or []

    async def get_component_data_aggregated(
        self, maquina: str, componente: str, fecha_inicio: str, fecha_fin: str
    ) -> List[Dict[str, Any]]:
        response = await self._request(
            "POST",
            f"{CALCULOS_ENDPOINT}/machineComponentDatesAggregated",
            json_data={"maquina": maquina, "componente": componente, "fecha_inicio": fecha_inicio, "fecha_fin": fecha_fin},
        )
        return _data(response) or []

    # --- CATÁLOGOS ---

    async def list_catalog(self, catalogo: str) -> List[Dict[str, Any]]:
        return _data(await self._request("GET", get_catalogo(catalogo).endpoint)) or []

    async def get_catalog_item(self, catalogo: str, item_id: Any) -> Optional[Dict[str, Any]]:
        return _data(await self._request("GET", f"{get_catalogo(catalogo).endpoint}/{item_id}"))

    async def save_catalog_item(self, catalogo: str, item: Dict[str, Any]) -> Dict[str, Any]:
        definicion = get_catalogo(catalogo)
        logger.info(f"Guardando {catalogo} con {definicion.id_field}={item.get(definicion.id_field)}")
        return _data(await self._request("POST", definicion.endpoint, json_data=item))

    async def delete_catalog_item(self, catalogo: str, item_id: Any) -> None:
        logger.info(f"Eliminando {catalogo} {item_id}")
        await self._request("DELETE", f"{get_catalogo(catalogo).endpoint}/{item_id}")
