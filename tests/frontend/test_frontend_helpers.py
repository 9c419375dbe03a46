# tests/frontend/test_frontend_helpers.py
"""Tests para las funciones puras de las páginas (rutas, formularios y gráficos)."""

from mantenimiento.analitica.models import Metric, StatusLevel
from mantenimiento.catalogos import get_catalogo
from mantenimiento.web.frontend.app import CATALOG_ROUTES, employee_code_from_search, with_base_path
from mantenimiento.web.frontend.features.analysis_modal import AnalysisModal
from mantenimiento.web.frontend.features.catalog_page import (
    build_columns,
    coerce_form_value,
    field_label,
    form_fields,
    parent_options,
)
from mantenimiento.web.frontend.features.chart_components import build_metric_datasets
from mantenimiento.web.frontend.features.sidebar_menu import SidebarMenu
from mantenimiento.web.frontend.features.status_indicator import StatusIndicator, parse_status


class TestRutas:
    def test_employee_code_from_search(self):
        assert employee_code_from_search("?codigo_empleado=123") == "123"
        assert employee_code_from_search("?otro=1&codigo_empleado=%20456%20") == "456"
        assert employee_code_from_search("") is None
        assert employee_code_from_search(None) is None
        assert employee_code_from_search("?codigo_empleado=") is None

    def test_with_base_path(self):
        assert with_base_path("", "/dashboard/area") == "/dashboard/area"
        assert with_base_path("/mant", "/") == "/mant"
        assert with_base_path("/mant", "/dashboard/area") == "/mant/dashboard/area"

    def test_todas_las_rutas_apuntan_a_un_catalogo(self):
        for catalogo in CATALOG_ROUTES.values():
            assert get_catalogo(catalogo).key == catalogo


class TestCatalogForm:
    def test_form_fields_sin_repetir(self):
        assert form_fields(get_catalogo("equipo")) == ["nombre_equipo", "codigo_area"]
        limite = form_fields(get_catalogo("limite"))
        assert limite[0] == "codigo_componente"
        assert "sigma_limite" in limite
        assert len(limite) == len(set(limite))

    def test_coerce_form_value(self):
        limite = get_catalogo("limite")
        assert coerce_form_value(limite, "corriente_limite_sup", "12.5") == 12.5
        assert coerce_form_value(limite, "corriente_limite_sup", "") is None
        assert coerce_form_value(limite, "codigo_componente", "7") == 7
        assert coerce_form_value(get_catalogo("area"), "nombre_area", "Acería") == "Acería"

    def test_parent_options(self):
        equipo = get_catalogo("equipo")
        areas = [{"codigo_area": 1, "nombre_area": "Laminación"}]
        assert parent_options(equipo, areas) == [(1, "Laminación")]
        assert parent_options(get_catalogo("area"), areas) == []

    def test_build_columns(self):
        columns = build_columns(get_catalogo("equipo"), [{"codigo_area": 1, "nombre_area": "Laminación"}])
        assert [c["key"] for c in columns] == ["codigo_equipo", "nombre_equipo", "codigo_area", "estado"]
        assert columns[2]["render"]({"codigo_area": 1}) == "Laminación"

    def test_field_label(self):
        assert field_label("nombre_area") == "Nombre"
        assert field_label("campo_nuevo") == "Campo nuevo"


class TestGraficos:
    def test_build_metric_datasets(self, sample_points):
        chart = build_metric_datasets(sample_points, Metric.CURRENT)
        assert chart["labels"] == ["2025-03-01T08:00:00", "2025-03-01T09:00:00", "2025-03-02"]
        labels = [d["label"] for d in chart["datasets"]]
        assert labels[:3] == ["Corriente", "Referencia", "Límite"]
        assert "Proyección (tendencia)" in labels
        assert chart["datasets"][0]["data"] == [10.0, 11.0, None]
        tendencia = next(d for d in chart["datasets"] if d["label"] == "Proyección (tendencia)")
        assert tendencia["data"] == [None, None, 12.0]

    def test_metrica_sin_proyeccion(self, sample_points):
        chart = build_metric_datasets(sample_points, Metric.UNBALANCE)
        assert [d["label"] for d in chart["datasets"]] == ["Desbalance", "Referencia", "Límite"]


class TestComponentes:
    def test_parse_status(self):
        assert parse_status("critical") == StatusLevel.CRITICAL
        assert parse_status(None) == StatusLevel.UNKNOWN
        assert parse_status("otro") == StatusLevel.UNKNOWN

    def test_componentes_se_construyen(self):
        assert StatusIndicator(status="warning", message="Corriente se acerca al límite") is not None
        assert SidebarMenu(items=[]) is not None
        assert AnalysisModal(is_open=False, componente=None, status=None, analysis=None, on_close=lambda: None)
