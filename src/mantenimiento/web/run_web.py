# mantenimiento/web/run_web.py
"""
Punto de entrada único del servicio Web (Servidor Uvicorn).
"""

from __future__ import annotations

import asyncio
import logging
import platform
import signal
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import uvicorn

if __name__ == "__main__":
    src_path = str(Path(__file__).resolve().parent.parent.parent)
    if src_path not in sys.path:
        sys.path.insert(0, src_path)

from mantenimiento.analitica.mantenimiento_client import MantenimientoClient
from mantenimiento.common.config_loader import ConfigLoader
from mantenimiento.common.config_manager import ConfigManager
from mantenimiento.common.logging_setup import setup_logging
from mantenimiento.navegacion.seguridades_client import SeguridadesClient
from mantenimiento.web.main import create_app

# --- Globales del Servicio ---
_service_name = "web"
_shutdown_initiated = False
_server_instance: Optional[uvicorn.Server] = None


# ---------- Gestión de Cierre Ordenado (Graceful Shutdown) ----------


def _graceful_shutdown(signum: int, frame: Any) -> None:
    """Manejador de señales para un cierre ordenado."""
    global _shutdown_initiated
    if _shutdown_initiated:
        logging.warning("Señal de cierre duplicada recibida. Ya se está deteniendo.")
        return
    _shutdown_initiated = True
    logging.info(f"Señal de parada recibida (Señal: {signum}). Iniciando cierre ordenado...")

    if _server_instance:
        _server_instance.should_exit = True
    else:
        sys.exit(0)


def _setup_signals() -> None:
    """Configura los manejadores de señales para Windows y Unix."""
    if sys.platform == "win32":
        signal.signal(signal.SIGINT, _graceful_shutdown)
        try:
            signal.signal(signal.SIGBREAK, _graceful_shutdown)
        except AttributeError:
            logging.warning("signal.SIGBREAK no está disponible.")
    else:
        signal.signal(signal.SIGINT, _graceful_shutdown)
        signal.signal(signal.SIGTERM, _graceful_shutdown)


# ---------- Lógica del Servicio ----------


def _setup_dependencies() -> Dict[str, Any]:
    """Crea los clientes de los servicios REST externos."""
    api_config = ConfigManager.get_api_config()

    logging.info(f"Creando cliente de mantenimiento ({api_config['mantenimiento_url']})...")
    mantenimiento_client = MantenimientoClient(
        base_url=api_config["mantenimiento_url"],
        token=api_config["mantenimiento_token"],
        timeout=api_config["timeout"],
        max_retries=api_config["max_retries"],
    )

    logging.info(f"Creando cliente de seguridades ({api_config['seguridades_url']})...")
    seguridades_client = SeguridadesClient(
        base_url=api_config["seguridades_url"],
        timeout=api_config["timeout"],
        max_retries=api_config["max_retries"],
    )
    return {"mantenimiento_client": mantenimiento_client, "seguridades_client": seguridades_client}


def _run_service(deps: Dict[str, Any]) -> None:
    """Inicializa y ejecuta el servidor Uvicorn."""
    global _server_instance

    app = create_app(
        mantenimiento_client=deps["mantenimiento_client"],
        seguridades_client=deps["seguridades_client"],
    )

    web_config = ConfigManager.get_web_config()
    host = web_config.get("host", "127.0.0.1")
    port = web_config.get("port", 8000)
    reload = web_config.get("debug", False)

    logging.info(f"Configuración del servidor: http://{host}:{port} (Reload: {reload})")

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        reload=reload,
        workers=1,  # ReactPy mantiene el estado de los componentes en memoria
        loop="asyncio",
    )
    _server_instance = uvicorn.Server(config)
    _server_instance.run()


def _cleanup_resources() -> None:
    logging.info(f"Servicio {_service_name.upper()} ha concluido y liberado recursos.")


# ---------- Punto de Entrada Principal ----------


def main(service_name: str) -> None:
    """Punto de entrada síncrono llamado por __main__.py."""
    global _service_name

    if platform.system() == "Windows":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    _service_name = service_name

    # El logging se debe iniciar antes que nada
    setup_logging(service_name=service_name)
    logging.info(f"Iniciando el servicio: {_service_name.capitalize()}...")

    _setup_signals()

    try:
        deps = _setup_dependencies()
        _run_service(deps)
    except (KeyboardInterrupt, SystemExit):
        logging.info("Servicio detenido por el usuario o el sistema.")
    except Exception as e:
        logging.critical(f"Error crítico no controlado en main: {e}", exc_info=True)
        sys.exit(1)
    finally:
        _cleanup_resources()


if __name__ == "__main__":
    ConfigLoader.initialize_service("web")
    main("web")
