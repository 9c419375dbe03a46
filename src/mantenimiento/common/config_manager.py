# mantenimiento/common/config_manager.py
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CODIGO_APLICACION_DEFAULT = "APP_MANETENIMIENTO_PREDICTIVO"
TITULO_SISTEMA_DEFAULT = "SISTEMA INTEGRADO DE PRODUCTIVIDAD OPERACIONAL (SIPO)"


class ConfigManager:
    """
    Gestor de configuración centralizado del tablero de mantenimiento.

    Todos los métodos públicos son @classmethod para centralizar la lectura
    de variables de entorno y poder parchearla en los tests.
    """

    @classmethod
    def _get_env_with_warning(cls, key: str, default: Any = None, warning_msg: Optional[str] = None) -> Any:
        """
        Obtiene una variable de entorno.
        Advierte si la variable no está definida y se esperaba que lo estuviera.
        """
        value = os.getenv(key, default)
        if value is None or (isinstance(value, str) and not value.strip()):
            if warning_msg:
                logger.warning(f"ADVERTENCIA ConfigManager: {warning_msg}")
            return default
        return value

    @staticmethod
    def _as_bool(value: Any) -> bool:
        return str(value).strip().lower() in ("true", "1", "yes", "si", "sí")

    # --- CONFIGURACIONES GENERALES ---

    @classmethod
    def get_log_config(cls) -> Dict[str, Any]:
        """Obtiene la configuración de logging de forma unificada."""
        return {
            "directory": cls._get_env_with_warning("LOG_DIRECTORY", "logs"),
            "level_str": cls._get_env_with_warning("LOG_LEVEL", "INFO"),
            "format": cls._get_env_with_warning(
                "LOG_FORMAT", "%(asctime)s - PID:%(process)d - %(name)s - %(levelname)s - %(funcName)s - %(message)s"
            ),
            "datefmt": cls._get_env_with_warning("LOG_DATEFMT", "%Y-%m-%d %H:%M:%S"),
            "backupCount": int(cls._get_env_with_warning("LOG_BACKUP_COUNT", 7)),
            "app_log_filename_web": cls._get_env_with_warning("APP_LOG_FILENAME_WEB", "mantenimiento_web.log"),
            "when": "midnight",
            "interval": 1,
            "encoding": "utf-8",
        }

    @classmethod
    def get_api_config(cls) -> Dict[str, Any]:
        """Obtiene las URLs y credenciales de los servicios REST externos."""
        return {
            "mantenimiento_url": cls._get_env_with_warning(
                "MANTENIMIENTO_API_URL",
                "http://localhost:3000",
                "MANTENIMIENTO_API_URL no definida, se usa http://localhost:3000",
            ),
            "mantenimiento_token": cls._get_env_with_warning(
                "MANTENIMIENTO_API_TOKEN", "", "MANTENIMIENTO_API_TOKEN no definido, las peticiones irán sin token"
            ),
            "seguridades_url": cls._get_env_with_warning(
                "SEGURIDADES_API_URL",
                "http://localhost:3001",
                "SEGURIDADES_API_URL no definida, se usa http://localhost:3001",
            ),
            "timeout": float(cls._get_env_with_warning("API_TIMEOUT_SEG", 30)),
            "max_retries": int(cls._get_env_with_warning("API_MAX_REINTENTOS", 3)),
        }

    @classmethod
    def get_app_config(cls) -> Dict[str, Any]:
        """Identidad de la aplicación frente al servicio de seguridades."""
        return {
            "codigo_aplicacion": cls._get_env_with_warning("CODIGO_APLICACION", CODIGO_APLICACION_DEFAULT),
            "base_path": cls._get_env_with_warning("BASE_PATH", "").rstrip("/"),
            "titulo_sistema": cls._get_env_with_warning("TITULO_SISTEMA", TITULO_SISTEMA_DEFAULT),
        }

    @classmethod
    def get_analitica_config(cls) -> Dict[str, Any]:
        """Parámetros de la evaluación de estado y de las series."""
        return {
            "dias_proyeccion": int(cls._get_env_with_warning("ANALITICA_DIAS_PROYECCION", 90)),
            "umbral_alerta": float(cls._get_env_with_warning("ANALITICA_UMBRAL_ALERTA", 0.85)),
            "dias_agregacion_mensual": int(cls._get_env_with_warning("ANALITICA_DIAS_AGREGACION_MENSUAL", 365)),
            "tamano_pagina": int(cls._get_env_with_warning("ANALITICA_TAMANO_PAGINA", 1000)),
        }

    # --- CONFIGURACIONES ESPECÍFICAS POR SERVICIO ---

    @classmethod
    def get_web_config(cls) -> Dict[str, Any]:
        """Obtiene la configuración específica para la interfaz web."""
        return {
            "host": cls._get_env_with_warning("WEB_HOST", "0.0.0.0"),
            "port": int(cls._get_env_with_warning("WEB_PORT", 8000)),
            "debug": cls._as_bool(cls._get_env_with_warning("WEB_DEBUG", "False")),
            "api_base_url": cls._get_env_with_warning("WEB_API_BASE_URL", "http://127.0.0.1:8000"),
        }
