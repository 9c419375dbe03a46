"""Tests para los módulos de `common`."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from mantenimiento.common.config_loader import ConfigLoader
from mantenimiento.common.config_manager import ConfigManager
from mantenimiento.common.exceptions import APIException, ValidationException
from mantenimiento.common.http_client import RestClient


def respuesta(status_code=200, json_data=None, content=b"{}"):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.content = content
    response.json.return_value = json_data
    response.text = ""
    return response


class TestConfigLoading:
    def test_config_loader_initialized(self):
        assert ConfigLoader.is_initialized()
        project_root = ConfigLoader.get_project_root()
        assert project_root.is_dir()
        assert (project_root / "pyproject.toml").exists()

    def test_config_manager_reads_mock_env(self):
        api_config = ConfigManager.get_api_config()
        assert api_config["mantenimiento_url"] == "https://mantenimiento.test"
        assert api_config["mantenimiento_token"] == "test-token"
        assert api_config["max_retries"] == 3

        app_config = ConfigManager.get_app_config()
        assert app_config["codigo_aplicacion"] == "APP_TEST"
        assert app_config["base_path"] == ""

        analitica = ConfigManager.get_analitica_config()
        assert analitica["dias_proyeccion"] == 30
        assert analitica["umbral_alerta"] == 0.85
        assert analitica["tamano_pagina"] == 1000


class TestExceptions:
    def test_api_exception(self):
        e = APIException("falló", status_code=502)
        assert e.status_code == 502
        assert "falló" in str(e)

    def test_validation_exception(self):
        e = ValidationException("Datos inválidos", ["campo requerido"])
        assert e.errors == ["campo requerido"]
        assert "Datos inválidos" in str(e)


@pytest.mark.asyncio
class TestRestClient:
    async def test_envia_token_y_devuelve_json(self):
        client = RestClient("https://svc.test/", token="abc")
        assert client.base_url == "https://svc.test"
        assert client._headers()["Authorization"] == "Bearer abc"

        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False
        mock_async_client.request.return_value = respuesta(json_data={"data": [1, 2]})

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client):
            result = await client._request("GET", "/api/area", params={"x": 1})

        assert result == {"data": [1, 2]}
        mock_async_client.request.assert_awaited_once_with(method="GET", url="/api/area", params={"x": 1}, json=None)

    async def test_respuesta_vacia(self):
        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False
        mock_async_client.request.return_value = respuesta(content=b"")

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client):
            assert await RestClient("https://svc.test")._request("DELETE", "/api/area/1") is None

    async def test_error_http_se_traduce_a_api_exception(self):
        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False
        mock_async_client.request.return_value = respuesta(404, json_data={"message": "Area no encontrada"})

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client):
            with pytest.raises(APIException) as exc_info:
                await RestClient("https://svc.test")._request("GET", "/api/area/99")

        assert exc_info.value.status_code == 404
        assert "Area no encontrada" in exc_info.value.message

    async def test_reintenta_errores_de_conexion(self):
        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False
        mock_async_client.request.side_effect = [
            httpx.ConnectError("sin conexión"),
            respuesta(json_data={"ok": True}),
        ]

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client), patch(
            "mantenimiento.common.http_client.asyncio.sleep", new=AsyncMock()
        ) as mock_sleep:
            result = await RestClient("https://svc.test", max_retries=3)._request("GET", "/api/area")

        assert result == {"ok": True}
        assert mock_async_client.request.await_count == 2
        mock_sleep.assert_awaited_once_with(1)

    async def test_agota_reintentos(self):
        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False
        mock_async_client.request.side_effect = httpx.ConnectError("sin conexión")

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client), patch(
            "mantenimiento.common.http_client.asyncio.sleep", new=AsyncMock()
        ):
            with pytest.raises(APIException, match="Error de conexión"):
                await RestClient("https://svc.test", max_retries=2)._request("GET", "/api/area")

        assert mock_async_client.request.await_count == 2

    async def test_close(self):
        mock_async_client = AsyncMock(spec=httpx.AsyncClient)
        mock_async_client.is_closed = False

        with patch("mantenimiento.common.http_client.httpx.AsyncClient", return_value=mock_async_client):
            async with RestClient("https://svc.test") as client:
                assert client._client is mock_async_client

        mock_async_client.aclose.assert_awaited_once()
        assert client._client is None
