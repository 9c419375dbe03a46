"""Tests para el backend de la interfaz web."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from mantenimiento.analitica.mantenimiento_client import MantenimientoClient
from mantenimiento.common.exceptions import APIException
from mantenimiento.navegacion.seguridades_client import SeguridadesClient
from mantenimiento.web.main import create_app


@pytest.fixture
def mock_mantenimiento_client():
    client = MagicMock(spec=MantenimientoClient)
    client.list_catalog = AsyncMock(return_value=[{"codigo_area": 1, "nombre_area": "Laminación", "estado": "A"}])
    client.get_catalog_item = AsyncMock(return_value={"codigo_area": 1, "nombre_area": "Laminación"})
    client.save_catalog_item = AsyncMock(return_value={"codigo_area": 2})
    client.delete_catalog_item = AsyncMock(return_value=None)
    client.get_machines = AsyncMock(return_value=["M1", "M2"])
    client.get_components_by_machine = AsyncMock(return_value=[{"componente": "Motor A"}, {"componente": None}])
    client.get_total_by_machine_and_component = AsyncMock(return_value=1)
    client.get_component_data = AsyncMock(
        return_value=[
            {"Año": 2025, "Mes": 3, "Dia": 1, "Hora": 8, "CorrientePromedioSuavizado": 9, "Corriente_Max": 10}
        ]
    )
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_seguridades_client():
    client = MagicMock(spec=SeguridadesClient)
    client.get_user_profiles = AsyncMock(return_value={"data": {"Tipo_usuario": [{"codigo_tipo_usuario": 1}]}})
    client.get_application_profiles = AsyncMock(return_value={"data": [{"codigo_tipo_usuario": 1}]})
    client.get_menu_tree = AsyncMock(
        return_value={
            "data": {
                "codigo_menu": 1,
                "nombre": "Catálogos",
                "path": ".",
                "icono": "Folder",
                "estado": "A",
                "children": [
                    {"codigo_menu": 2, "nombre": "Áreas", "path": "/dashboard/area", "estado": "A"},
                    {"codigo_menu": 3, "nombre": "Oculto", "path": "/x", "estado": "I"},
                ],
            }
        }
    )
    client.close = AsyncMock()
    return client


@pytest.fixture
def client(mock_mantenimiento_client, mock_seguridades_client):
    """Cliente de prueba de FastAPI para la interfaz web, adaptado para Lifespan."""
    app = create_app(mantenimiento_client=mock_mantenimiento_client, seguridades_client=mock_seguridades_client)
    with TestClient(app) as test_client:
        yield test_client


class TestNavegacionEndpoint:
    def test_menu_del_empleado(self, client: TestClient):
        response = client.get("/api/navegacion", params={"codigo_empleado": "123"})
        assert response.status_code == 200
        data = response.json()
        assert data["has_menu"] is True
        assert data["access_denied"] is False
        raiz = data["items"][0]
        assert raiz["label"] == "Catálogos"
        assert raiz["is_root"] is True
        assert [c["path"] for c in raiz["children"]] == ["/dashboard/area"]

    def test_sin_empleado_es_acceso_denegado(self, client: TestClient, mock_seguridades_client):
        response = client.get("/api/navegacion")
        assert response.status_code == 200
        assert response.json()["access_denied"] is True
        mock_seguridades_client.get_user_profiles.assert_not_called()


class TestCatalogosEndpoints:
    def test_lista_de_catalogos(self, client: TestClient):
        response = client.get("/api/catalogos")
        assert response.status_code == 200
        assert {c["key"] for c in response.json()} >= {"area", "limite"}

    def test_listar_area(self, client: TestClient):
        response = client.get("/api/catalogos/area")
        assert response.status_code == 200
        assert response.json()[0]["nombre_area"] == "Laminación"

    def test_catalogo_desconocido(self, client: TestClient):
        response = client.get("/api/catalogos/planetas")
        assert response.status_code == 404

    def test_guardar_valido(self, client: TestClient, mock_mantenimiento_client):
        response = client.post("/api/catalogos/area", json={"nombre_area": "Acería", "estado": "A"})
        assert response.status_code == 200
        enviado = mock_mantenimiento_client.save_catalog_item.await_args.args[1]
        assert enviado["codigo_area"] == 0
        assert enviado["nombre_area"] == "Acería"

    def test_guardar_invalido(self, client: TestClient, mock_mantenimiento_client):
        response = client.post("/api/catalogos/area", json={"nombre_area": "", "estado": "A"})
        assert response.status_code == 400
        assert response.json()["detail"]["errors"]
        mock_mantenimiento_client.save_catalog_item.assert_not_called()

    def test_item_no_encontrado(self, client: TestClient, mock_mantenimiento_client):
        mock_mantenimiento_client.get_catalog_item.side_effect = APIException("Not found", status_code=404)
        response = client.get("/api/catalogos/area/99")
        assert response.status_code == 404

    def test_eliminar_en_uso_es_conflicto(self, client: TestClient, mock_mantenimiento_client):
        mock_mantenimiento_client.delete_catalog_item.side_effect = APIException("En uso", status_code=409)
        response = client.delete("/api/catalogos/area/1")
        assert response.status_code == 409

    def test_servicio_caido_es_502(self, client: TestClient, mock_mantenimiento_client):
        mock_mantenimiento_client.list_catalog.side_effect = APIException("Error de conexión: timeout")
        response = client.get("/api/catalogos/equipo")
        assert response.status_code == 502


class TestAnaliticaEndpoints:
    def test_maquinas_y_componentes(self, client: TestClient):
        assert client.get("/api/maquinas").json() == ["M1", "M2"]
        response = client.get("/api/maquinas/M1/componentes")
        assert response.status_code == 200
        assert response.json() == [{"id": "Motor A", "name": "Motor A", "originalName": "Motor A"}]

    def test_serie(self, client: TestClient):
        params = {"maquina": "M1", "componente": "Motor A", "fecha_inicio": "2025-03-01", "fecha_fin": "2025-03-02"}
        response = client.get("/api/analitica/serie", params=params)
        assert response.status_code == 200
        points = response.json()["points"]
        assert points[0]["isProjection"] is False
        assert len(points) == 1 + 30

    def test_estado(self, client: TestClient, mock_mantenimiento_client):
        params = {"maquina": "M1", "componente": "Motor A", "fecha_inicio": "2025-03-01", "fecha_fin": "2025-03-02"}
        response = client.get("/api/analitica/estado", params=params)
        assert response.status_code == 200
        data = response.json()
        assert len(data["points"]) == 1 + 30
        assert data["points"][0]["isProjection"] is False
        assert mock_mantenimiento_client.get_component_data.await_count == 1
        assert data["status"]["status"] == "warning"
        assert data["status"]["message"] == "Corriente se acerca al límite (al 90%)"
        assert data["analysis"]["condicion"] == "PREDICTIVO - Tendencia Ascendente"

    def test_rango_invertido_es_400(self, client: TestClient):
        params = {"maquina": "M1", "componente": "Motor A", "fecha_inicio": "2025-03-05", "fecha_fin": "2025-03-01"}
        response = client.get("/api/analitica/estado", params=params)
        assert response.status_code == 400


def test_sin_cliente_inyectado_es_503():
    app = create_app()
    with TestClient(app) as test_client:
        response = test_client.get("/api/maquinas")
    assert response.status_code == 503
