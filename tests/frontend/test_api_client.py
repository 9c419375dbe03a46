# tests/frontend/test_api_client.py
"""Tests para el cliente de la interfaz contra la API propia."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from mantenimiento.common.exceptions import APIException, ValidationException
from mantenimiento.web.frontend.api.api_client import ApiClient


@pytest.mark.asyncio
class TestApiClient:
    async def test_guardar_invalido_no_llama_a_la_api(self):
        client = ApiClient()
        client._request = AsyncMock()
        with pytest.raises(ValidationException) as exc_info:
            await client.save_catalog_item("area", {"nombre_area": "", "estado": "A"})
        assert exc_info.value.errors
        client._request.assert_not_called()

    async def test_guardar_valido(self):
        client = ApiClient()
        client._request = AsyncMock(return_value={"codigo_area": 3})
        item = {"codigo_area": 0, "nombre_area": "Acería", "estado": "A"}
        assert await client.save_catalog_item("area", item) == {"codigo_area": 3}
        client._request.assert_awaited_once_with("POST", "/api/catalogos/area", json_data=item)

    async def test_parametros_de_rango(self):
        client = ApiClient()
        client._request = AsyncMock(return_value={"points": []})
        await client.get_status("M1", "C1", date(2025, 1, 1), date(2025, 1, 31))
        client._request.assert_awaited_once_with(
            "GET",
            "/api/analitica/estado",
            params={"maquina": "M1", "componente": "C1", "fecha_inicio": "2025-01-01", "fecha_fin": "2025-01-31"},
        )

    async def test_navegacion_sin_empleado(self):
        client = ApiClient()
        client._request = AsyncMock(return_value={"items": [], "has_menu": False, "access_denied": True})
        data = await client.get_navigation(None)
        assert data["access_denied"] is True
        client._request.assert_awaited_once_with("GET", "/api/navegacion", params=None)

    async def test_navegacion_respuesta_inesperada(self):
        client = ApiClient()
        client._request = AsyncMock(return_value="<html>")
        with pytest.raises(APIException):
            await client.get_navigation("123")
