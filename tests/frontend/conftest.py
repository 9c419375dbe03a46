# tests/frontend/conftest.py
"""
Fixtures compartidas para tests del frontend.

Proveen un ApiClient mockeado para inyectar en hooks y componentes.
"""
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from mantenimiento.web.frontend.api.api_client import ApiClient


@pytest.fixture
def mock_api_client() -> ApiClient:
    mock = MagicMock(spec=ApiClient)

    mock.get_navigation = AsyncMock(return_value={"items": [], "has_menu": False, "access_denied": True})
    mock.list_catalog = AsyncMock(return_value=[{"codigo_area": 1, "nombre_area": "Laminación", "estado": "A"}])
    mock.save_catalog_item = AsyncMock(return_value={"codigo_area": 1})
    mock.delete_catalog_item = AsyncMock(return_value={"message": "eliminado"})
    mock.get_machines = AsyncMock(return_value=["M1"])
    mock.get_components = AsyncMock(return_value=[{"id": "C1", "name": "C1", "originalName": "C1"}])
    mock.get_status = AsyncMock(return_value={"points": [], "status": None, "analysis": None})

    return mock


@pytest.fixture
def mock_app_context(mock_api_client: ApiClient) -> Dict[str, Any]:
    return {"api_client": mock_api_client}


@pytest.fixture
def sample_points() -> List[Dict[str, Any]]:
    """Dos puntos reales y uno proyectado de corriente."""
    return [
        {
            "date": "2025-03-01T08:00:00",
            "isProjection": False,
            "Corriente Promedio Suavizado": 10.0,
            "Referencia Corriente Promedio Suavizado": 9.0,
            "Corriente Máxima": 20.0,
        },
        {
            "date": "2025-03-01T09:00:00",
            "isProjection": False,
            "Corriente Promedio Suavizado": 11.0,
            "Referencia Corriente Promedio Suavizado": 9.5,
            "Corriente Máxima": 20.0,
        },
        {
            "date": "2025-03-02",
            "isProjection": True,
            "proyeccion_corriente_tendencia": 12.0,
            "proyeccion_corriente_pesimista": 13.0,
            "proyeccion_corriente_optimista": 11.5,
            "Corriente Máxima": 20.0,
        },
    ]
