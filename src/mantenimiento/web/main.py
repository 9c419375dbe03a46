# mantenimiento/web/main.py
import asyncio
import platform

if platform.system() == "Windows":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from reactpy.backend.fastapi import Options, configure
from starlette.staticfiles import StaticFiles

from mantenimiento.analitica.mantenimiento_client import MantenimientoClient
from mantenimiento.common.config_manager import ConfigManager
from mantenimiento.navegacion.seguridades_client import SeguridadesClient

from .backend.api import router as api_router
from .backend.dependencies import mantenimiento_client_provider, seguridades_client_provider
from .frontend.app import App, head

logger = logging.getLogger(__name__)


# --- Gestor de ciclo de vida (Lifespan) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Iniciando aplicación y recursos...")
    for name, provider in (
        ("mantenimiento", mantenimiento_client_provider),
        ("seguridades", seguridades_client_provider),
    ):
        if provider.peek() is None:
            logger.warning(f"El cliente de {name} no fue inyectado desde run_web.py")

    yield

    logger.info("Iniciando cierre ordenado de recursos...")
    for name, provider in (
        ("mantenimiento", mantenimiento_client_provider),
        ("seguridades", seguridades_client_provider),
    ):
        client = provider.peek()
        if client is not None:
            try:
                await client.close()
                logger.info(f"Cliente de {name} cerrado.")
            except Exception as e:
                logger.error(f"Error al cerrar el cliente de {name}: {e}", exc_info=True)


def create_app(
    mantenimiento_client: Optional[MantenimientoClient] = None,
    seguridades_client: Optional[SeguridadesClient] = None,
) -> FastAPI:
    """Crea y configura la aplicación FastAPI."""
    app_config = ConfigManager.get_app_config()
    app = FastAPI(title=f"{app_config['titulo_sistema']} - Mantenimiento API", lifespan=lifespan)

    mantenimiento_client_provider.set_client(mantenimiento_client)
    seguridades_client_provider.set_client(seguridades_client)

    app.include_router(api_router)

    static_files_path = Path(__file__).parent / "frontend" / "static"
    if static_files_path.exists():
        app.mount("/static", StaticFiles(directory=static_files_path), name="static")

    configure(app, App, options=Options(head=head))

    return app
