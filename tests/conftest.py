from unittest.mock import patch

import pytest

# Esta importación es necesaria para que la fixture de configuración funcione.
from mantenimiento.common.config_loader import ConfigLoader


@pytest.fixture(scope="session", autouse=True)
def setup_and_mock_config(pytestconfig):
    """
    Se ejecuta una sola vez por sesión para asegurar que la configuración
    esté 'mockeada' antes de que cualquier prueba se ejecute.
    Esto previene que los tests intenten leer archivos .env.
    """
    ConfigLoader.reset()
    ConfigLoader.initialize_service("mantenimiento_test_session")

    mock_settings = {
        "CODIGO_APLICACION": "APP_TEST",
        "BASE_PATH": "",
        "TITULO_SISTEMA": "Tablero de Pruebas",
        "MANTENIMIENTO_API_URL": "https://mantenimiento.test",
        "MANTENIMIENTO_API_TOKEN": "test-token",
        "SEGURIDADES_API_URL": "https://seguridades.test",
        "ANALITICA_DIAS_PROYECCION": 30,
        "ANALITICA_UMBRAL_ALERTA": 0.85,
    }

    def mock_get(key, default=None, warning_msg=None):
        return mock_settings.get(key, default)

    patcher = patch("mantenimiento.common.config_manager.ConfigManager._get_env_with_warning", side_effect=mock_get)
    patcher.start()
    yield mock_settings
    patcher.stop()
