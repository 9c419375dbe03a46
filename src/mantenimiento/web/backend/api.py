# mantenimiento/web/backend/api.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from mantenimiento.analitica.mantenimiento_client import MantenimientoClient
from mantenimiento.analitica.service import evaluate_component, load_component_series
from mantenimiento.catalogos import CATALOGOS, validate_catalog_data
from mantenimiento.common.config_manager import ConfigManager
from mantenimiento.common.exceptions import APIException, ValidationException
from mantenimiento.navegacion.menu_tree import to_render_items
from mantenimiento.navegacion.seguridades_client import SeguridadesClient
from mantenimiento.navegacion.service import load_navigation

from .dependencies import get_mantenimiento_client, get_seguridades_client
from .schemas import CatalogItemRequest, Componente, NavigationResponse, SeriesResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# ------------------------------------------------------------------
# Mapeo centralizado de errores
# ------------------------------------------------------------------
def _handle_endpoint_errors(func_name: str, e: Exception, resource: str, resource_id: Optional[Any] = None):
    """
    Traduce cualquier excepción de un endpoint a la HTTPException que corresponde.
    No retorna: siempre lanza.
    """
    if isinstance(e, HTTPException):
        raise e

    error_msg = e.message if isinstance(e, (APIException, ValidationException)) else str(e)

    # 404
    if (isinstance(e, APIException) and e.status_code == 404) or any(
        txt in error_msg.lower() for txt in ("no encontrado", "no se encontró", "not found")
    ):
        logger.warning("%s: %s %s no encontrado -> 404", func_name, resource, resource_id or "")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} no encontrado.")

    # 409
    if (isinstance(e, APIException) and e.status_code == 409) or any(
        txt in error_msg.lower() for txt in ("no se puede", "conflicto")
    ):
        logger.warning("%s: conflicto -> 409: %s", func_name, error_msg)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error_msg)

    # 400
    if isinstance(e, ValidationException):
        logger.warning("%s: datos inválidos -> 400: %s", func_name, e.errors)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"message": error_msg, "errors": e.errors})
    if isinstance(e, ValueError) or (isinstance(e, APIException) and e.status_code == 400):
        logger.warning("%s: ValueError -> 400: %s", func_name, error_msg)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)

    # 502: el servicio externo falló o no respondió
    if isinstance(e, APIException):
        logger.error("%s: error del servicio externo -> 502: %s", func_name, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error_msg)

    logger.error("%s: error inesperado -> 500: %s", func_name, error_msg, exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error interno del servidor.")


def _require_catalog(catalogo: str):
    if catalogo not in CATALOGOS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Catálogo '{catalogo}' no encontrado.")
    return CATALOGOS[catalogo]


# ------------------------------------------------------------------
# Navegación
# ------------------------------------------------------------------
@router.get("/api/navegacion", tags=["Navegación"], response_model=NavigationResponse)
async def get_navegacion(
    codigo_empleado: Optional[str] = Query(None),
    client: SeguridadesClient = Depends(get_seguridades_client),
):
    """Menú del empleado para esta aplicación, listo para la barra lateral."""
    app_config = ConfigManager.get_app_config()
    result = await load_navigation(client, codigo_empleado, app_config["codigo_aplicacion"])
    return NavigationResponse(
        items=to_render_items(result.items, app_config["base_path"]),
        has_menu=result.has_menu,
        access_denied=result.access_denied,
        error=result.error,
    )


# ------------------------------------------------------------------
# Catálogos
# ------------------------------------------------------------------
@router.get("/api/catalogos", tags=["Catálogos"])
def get_catalogos() -> List[Dict[str, Any]]:
    return [
        {
            "key": c.key,
            "label": c.label,
            "id_field": c.id_field,
            "name_field": c.name_field,
            "parent_field": c.parent_field,
            "parent_catalog": c.parent_catalog,
        }
        for c in CATALOGOS.values()
    ]


@router.get("/api/catalogos/{catalogo}", tags=["Catálogos"])
async def list_catalog_items(catalogo: str, client: MantenimientoClient = Depends(get_mantenimiento_client)):
    _require_catalog(catalogo)
    try:
        return await client.list_catalog(catalogo)
    except Exception as e:
        _handle_endpoint_errors("list_catalog_items", e, catalogo)


@router.get("/api/catalogos/{catalogo}/{item_id}", tags=["Catálogos"])
async def get_catalog_item(
    catalogo: str, item_id: int, client: MantenimientoClient = Depends(get_mantenimiento_client)
):
    _require_catalog(catalogo)
    try:
        item = await client.get_catalog_item(catalogo, item_id)
    except Exception as e:
        _handle_endpoint_errors("get_catalog_item", e, catalogo, item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{catalogo} no encontrado.")
    return item


@router.post("/api/catalogos/{catalogo}", tags=["Catálogos"])
async def save_catalog_item(
    catalogo: str,
    item: CatalogItemRequest = Body(...),
    client: MantenimientoClient = Depends(get_mantenimiento_client),
):
    """Crea (código 0) o actualiza un registro de catálogo."""
    definicion = _require_catalog(catalogo)
    data = item.model_dump()
    data.setdefault(definicion.id_field, 0)
    try:
        validation = validate_catalog_data(catalogo, data)
        if not validation.is_valid:
            raise ValidationException("Datos inválidos", validation.errors)
        return await client.save_catalog_item(catalogo, data)
    except Exception as e:
        _handle_endpoint_errors("save_catalog_item", e, catalogo, data.get(definicion.id_field))


@router.delete("/api/catalogos/{catalogo}/{item_id}", tags=["Catálogos"])
async def delete_catalog_item(
    catalogo: str, item_id: int, client: MantenimientoClient = Depends(get_mantenimiento_client)
):
    _require_catalog(catalogo)
    try:
        await client.delete_catalog_item(catalogo, item_id)
        return {"message": f"{catalogo} {item_id} eliminado."}
    except Exception as e:
        _handle_endpoint_errors("delete_catalog_item", e, catalogo, item_id)


# ------------------------------------------------------------------
# Máquinas y componentes
# ------------------------------------------------------------------
@router.get("/api/maquinas", tags=["Analítica"])
async def get_maquinas(client: MantenimientoClient = Depends(get_mantenimiento_client)) -> List[str]:
    try:
        return await client.get_machines()
    except Exception as e:
        _handle_endpoint_errors("get_maquinas", e, "Máquinas")


@router.get("/api/maquinas/{maquina}/componentes", tags=["Analítica"])
async def get_componentes(
    maquina: str, client: MantenimientoClient = Depends(get_mantenimiento_client)
) -> List[Componente]:
    try:
        rows = await client.get_components_by_machine(maquina)
    except Exception as e:
        _handle_endpoint_errors("get_componentes", e, "Componentes", maquina)
    componentes = []
    for row in rows:
        name = (row.get("componente") or row.get("nombre_componente")) if isinstance(row, dict) else row
        if name:
            componentes.append(Componente(id=str(name), name=str(name), originalName=str(name)))
    return componentes


# ------------------------------------------------------------------
# Analítica
# ------------------------------------------------------------------
def _series_options() -> Dict[str, Any]:
    analitica = ConfigManager.get_analitica_config()
    return {
        "dias_agregacion_mensual": analitica["dias_agregacion_mensual"],
        "tamano_pagina": analitica["tamano_pagina"],
    }


@router.get("/api/analitica/serie", tags=["Analítica"], response_model=SeriesResponse)
async def get_serie(
    maquina: str,
    componente: str,
    fecha_inicio: date,
    fecha_fin: date,
    dias_proyeccion: Optional[int] = Query(None, ge=0, le=365),
    client: MantenimientoClient = Depends(get_mantenimiento_client),
):
    """Serie agregada del componente con su proyección, lista para graficar."""
    if dias_proyeccion is None:
        dias_proyeccion = ConfigManager.get_analitica_config()["dias_proyeccion"]
    try:
        points = await load_component_series(
            client, maquina, componente, fecha_inicio, fecha_fin, dias_proyeccion, **_series_options()
        )
    except Exception as e:
        _handle_endpoint_errors("get_serie", e, "Serie", f"{maquina}/{componente}")
    return SeriesResponse(maquina=maquina, componente=componente, points=points)


@router.get("/api/analitica/estado", tags=["Analítica"], response_model=StatusResponse)
async def get_estado(
    maquina: str,
    componente: str,
    fecha_inicio: date,
    fecha_fin: date,
    dias_proyeccion: Optional[int] = Query(None, ge=0, le=365),
    client: MantenimientoClient = Depends(get_mantenimiento_client),
):
    """Serie, estado (normal / alerta / crítico) y ficha técnica del componente en una sola carga."""
    analitica = ConfigManager.get_analitica_config()
    if dias_proyeccion is None:
        dias_proyeccion = analitica["dias_proyeccion"]
    try:
        evaluation = await evaluate_component(
            client,
            maquina,
            componente,
            fecha_inicio,
            fecha_fin,
            dias_proyeccion,
            warning_ratio=analitica["umbral_alerta"],
            **_series_options(),
        )
    except Exception as e:
        _handle_endpoint_errors("get_estado", e, "Estado", f"{maquina}/{componente}")
    return StatusResponse(
        maquina=maquina,
        componente=componente,
        points=evaluation.points,
        status=evaluation.status,
        analysis=evaluation.analysis,
    )
