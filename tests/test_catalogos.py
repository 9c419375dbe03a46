"""Tests para las definiciones y la validación de catálogos."""

import pytest

from mantenimiento.catalogos import CATALOGOS, empty_item, get_catalogo, validate_catalog_data


class TestDefiniciones:
    def test_catalogos_disponibles(self):
        assert set(CATALOGOS) == {
            "area",
            "equipo",
            "componente",
            "tipo_evento",
            "categoria_evento",
            "referencia",
            "limite",
        }
        assert get_catalogo("limite").endpoint == "/api/limites"

    def test_catalogo_inexistente(self):
        with pytest.raises(KeyError, match="no encontrado"):
            get_catalogo("desconocido")

    def test_empty_item(self):
        item = empty_item("equipo")
        assert item["codigo_equipo"] == 0
        assert item["estado"] == "A"
        assert item["nombre_equipo"] == ""


class TestValidateCatalogData:
    def test_area_valida(self):
        result = validate_catalog_data("area", {"codigo_area": 0, "nombre_area": "Laminación", "estado": "A"})
        assert result.is_valid
        assert result.errors == []

    def test_campos_requeridos(self):
        result = validate_catalog_data("equipo", {"nombre_equipo": "  "})
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_estado_invalido(self):
        result = validate_catalog_data("area", {"nombre_area": "X", "estado": "Z"})
        assert not result.is_valid
        assert "estado" in result.errors[0]

    def test_limites_numericos(self):
        result = validate_catalog_data(
            "limite",
            {
                "codigo_componente": 3,
                "corriente_limite_sup": 10,
                "corriente_limite_inf": 12,
                "sigma_limite": -1,
                "desbalance_limite_sup": "abc",
            },
        )
        assert not result.is_valid
        assert any("negativo" in e for e in result.errors)
        assert any("numérico" in e for e in result.errors)
        assert any("inferior de 'corriente'" in e for e in result.errors)

    def test_rango_de_fechas_de_referencia(self):
        data = {
            "codigo_componente": 1,
            "fecha_inicio_referencia": "2025-05-01",
            "fecha_fin_referencia": "2025-04-01T00:00:00",
        }
        result = validate_catalog_data("referencia", data)
        assert not result.is_valid
        assert result.errors == ["La fecha de inicio no puede ser posterior a la fecha de fin."]

        data["fecha_fin_referencia"] = "2025-05-01"
        assert validate_catalog_data("referencia", data).is_valid
