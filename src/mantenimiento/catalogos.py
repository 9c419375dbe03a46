# mantenimiento/catalogos.py
"""
Catálogos de referencia administrados desde el tablero.

Cada catálogo se expone en el servicio de mantenimiento como un recurso REST
con listado, detalle, guardado (inserta si el código es 0) y borrado.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Tuple


class ValidationResult(NamedTuple):
    is_valid: bool
    errors: List[str]


class CatalogoDef(NamedTuple):
    key: str
    label: str
    endpoint: str
    id_field: str
    name_field: Optional[str]
    required_fields: Tuple[str, ...]
    parent_field: Optional[str] = None
    parent_catalog: Optional[str] = None
    numeric_fields: Tuple[str, ...] = ()
    date_fields: Tuple[str, ...] = ()


ESTADOS_VALIDOS = ("A", "I")

CATALOGOS: Dict[str, CatalogoDef] = {
    "area": CatalogoDef(
        key="area",
        label="Áreas",
        endpoint="/api/area",
        id_field="codigo_area",
        name_field="nombre_area",
        required_fields=("nombre_area",),
    ),
    "equipo": CatalogoDef(
        key="equipo",
        label="Equipos",
        endpoint="/api/equipo",
        id_field="codigo_equipo",
        name_field="nombre_equipo",
        required_fields=("nombre_equipo", "codigo_area"),
        parent_field="codigo_area",
        parent_catalog="area",
    ),
    "componente": CatalogoDef(
        key="componente",
        label="Componentes",
        endpoint="/api/componente",
        id_field="codigo_componente",
        name_field="nombre_componente",
        required_fields=("nombre_componente", "codigo_equipo"),
        parent_field="codigo_equipo",
        parent_catalog="equipo",
    ),
    "tipo_evento": CatalogoDef(
        key="tipo_evento",
        label="Tipos de Evento",
        endpoint="/api/tipo_evento",
        id_field="codigo_tipo_evento",
        name_field="nombre_evento",
        required_fields=("nombre_evento",),
    ),
    "categoria_evento": CatalogoDef(
        key="categoria_evento",
        label="Categorías de Evento",
        endpoint="/api/categoria_evento",
        id_field="codigo_categoria_evento",
        name_field="nombre_categoria",
        required_fields=("nombre_categoria",),
    ),
    "referencia": CatalogoDef(
        key="referencia",
        label="Referencias",
        endpoint="/api/referencia",
        id_field="codigo_referencia",
        name_field=None,
        required_fields=("codigo_componente", "fecha_inicio_referencia", "fecha_fin_referencia"),
        parent_field="codigo_componente",
        parent_catalog="componente",
        date_fields=("fecha_inicio_referencia", "fecha_fin_referencia"),
    ),
    "limite": CatalogoDef(
        key="limite",
        label="Límites",
        endpoint="/api/limites",
        id_field="codigo_limite",
        name_field=None,
        required_fields=("codigo_componente",),
        parent_field="codigo_componente",
        parent_catalog="componente",
        numeric_fields=(
            "corriente_limite_sup",
            "corriente_limite_inf",
            "desbalance_limite_sup",
            "desbalance_limite_inf",
            "sigma_limite",
            "factor_carga_limite_sup",
            "factor_carga_limite_inf",
        ),
    ),
}


def get_catalogo(key: str) -> CatalogoDef:
    try:
        return CATALOGOS[key]
    except KeyError:
        raise KeyError(f"Catálogo '{key}' no encontrado") from None


def empty_item(key: str) -> Dict[str, Any]:
    """Plantilla de un registro nuevo: código 0 y estado activo."""
    catalogo = get_catalogo(key)
    item: Dict[str, Any] = {catalogo.id_field: 0, "estado": "A"}
    for field in catalogo.required_fields + catalogo.numeric_fields + catalogo.date_fields:
        item.setdefault(field, None if field in catalogo.numeric_fields else "")
    return item


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_catalog_data(key: str, data: Dict[str, Any]) -> ValidationResult:
    """
    Valida un registro de catálogo antes de enviarlo al servicio.
    """
    catalogo = get_catalogo(key)
    errors: List[str] = []

    for field in catalogo.required_fields:
        if _is_blank(data.get(field)):
            errors.append(f"El campo '{field}' es requerido.")

    estado = data.get("estado", "A")
    if estado not in ESTADOS_VALIDOS:
        errors.append("El campo 'estado' debe ser 'A' (activo) o 'I' (inactivo).")

    for field in catalogo.numeric_fields:
        value = data.get(field)
        if _is_blank(value):
            continue
        try:
            if float(value) < 0:
                errors.append(f"El campo '{field}' no puede ser negativo.")
        except (TypeError, ValueError):
            errors.append(f"El campo '{field}' debe ser numérico.")

    if catalogo.key == "limite":
        for prefix in ("corriente", "desbalance", "factor_carga"):
            sup, inf = data.get(f"{prefix}_limite_sup"), data.get(f"{prefix}_limite_inf")
            try:
                if not _is_blank(sup) and not _is_blank(inf) and float(inf) > float(sup):
                    errors.append(f"El límite inferior de '{prefix}' no puede superar al superior.")
            except (TypeError, ValueError):
                continue

    if catalogo.date_fields:
        inicio, fin = (str(data.get(field) or "") for field in catalogo.date_fields)
        if inicio and fin and inicio[:10] > fin[:10]:
            errors.append("La fecha de inicio no puede ser posterior a la fecha de fin.")

    return ValidationResult(is_valid=not errors, errors=errors)
