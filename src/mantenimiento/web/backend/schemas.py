# mantenimiento/web/backend/schemas.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from mantenimiento.analitica.models import AnalysisSheet, ComponentStatus


class NavigationResponse(BaseModel):
    items: List[Dict[str, Any]]
    has_menu: bool
    access_denied: bool
    error: Optional[str] = None


class CatalogItemRequest(BaseModel):
    """Registro de catálogo tal como lo envía el formulario; los campos dependen del catálogo."""

    model_config = ConfigDict(extra="allow")

    estado: str = "A"


class SeriesResponse(BaseModel):
    maquina: str
    componente: str
    points: List[Dict[str, Any]]


class StatusResponse(BaseModel):
    maquina: str
    componente: str
    points: List[Dict[str, Any]] = []
    status: ComponentStatus
    analysis: AnalysisSheet


class Componente(BaseModel):
    id: str
    name: str
    originalName: str
