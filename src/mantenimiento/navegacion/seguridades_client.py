# mantenimiento/navegacion/seguridades_client.py
import logging
from typing import Any, Dict, Union

from ..common.http_client import RestClient

logger = logging.getLogger(__name__)


class SeguridadesClient(RestClient):
    """Cliente del servicio de seguridades: perfiles de usuario, perfiles de aplicación y árbol de menú por perfil."""

    async def get_user_profiles(self, codigo_empleado: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/usuarios/usuarioByCodigoEmpleado", json_data={"codigo_empleado": codigo_empleado}
        )

    async def get_application_profiles(self, codigo_aplicacion: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/tipo-usuario-aplicacions/by_aplicacion", json_data={"codigo_aplicacion": codigo_aplicacion}
        )

    async def get_menu_tree(self, codigo_tipo_usuario: Union[int, str]) -> Dict[str, Any]:
        logger.debug(f"Solicitando árbol de menú para el perfil {codigo_tipo_usuario}")
        return await self._request(
            "POST", "/api/menus/menu-tree", json_data={"codigo_tipo_usuario": codigo_tipo_usuario}
        )
