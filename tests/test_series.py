"""Tests para la preparación de series (agregación, límites y proyección)."""

from datetime import date

import pytest

from mantenimiento.analitica.models import Metric
from mantenimiento.analitica.series import (
    CORRIENTE,
    CORRIENTE_MAXIMA,
    DESBALANCE,
    UMBRAL_DESBALANCE,
    aggregate_by_hour,
    aggregate_by_month,
    append_projections,
    manual_current_limit,
    parse_point_date,
    project_linear_regression,
    record_to_raw,
    safe_number,
    to_observations,
)


def registro(**overrides):
    base = {
        "Año": 2025,
        "Mes": 3,
        "Dia": 14,
        "Hora": 10,
        "Minuto": 5,
        "Segundo": 0,
        "CorrientePromedioSuavizado": 12.5,
        "Corriente_Max": 20,
        "Desbalance_Suavizado": 1.2,
        "Umbral_Desbalance": None,
        "Referencia_Umbral_Desbalance": 5,
        "FactorDeCargaSuavizado": "0.6",
        "Umbral_Factor_Carga": 1,
    }
    base.update(overrides)
    return base


class TestHelpers:
    @pytest.mark.parametrize(
        "value,expected",
        [(None, None), ("3.5", 3.5), ("abc", None), (True, None), (float("nan"), None), (4, 4.0)],
    )
    def test_safe_number(self, value, expected):
        assert safe_number(value) == expected

    def test_parse_point_date(self):
        assert parse_point_date("2025-03") == date(2025, 3, 1)
        assert parse_point_date("2025-03-14T10:00:00") == date(2025, 3, 14)
        assert parse_point_date("2025-03-14") == date(2025, 3, 14)


class TestRecordToRaw:
    def test_registro_diario(self):
        raw = record_to_raw(registro(), "MOTOR-1")
        assert raw["date"] == "2025-03-14T10:05:00"
        assert raw["componentId"] == "MOTOR-1"
        assert raw[CORRIENTE] == 12.5
        assert raw[CORRIENTE_MAXIMA] == 20
        assert raw[UMBRAL_DESBALANCE] == 5

    def test_registro_mensual_se_fecha_el_15(self):
        raw = record_to_raw({"Año": 2024, "MES_REFERENCIA": 7}, "MOTOR-1", "monthly")
        assert raw["date"] == "2024-07-15T00:00:00"

    def test_fecha_invalida(self):
        assert record_to_raw(registro(Año=None), "M") is None
        assert record_to_raw(registro(Dia=None), "M") is None
        assert record_to_raw(registro(Mes=13), "M") is None


class TestAggregation:
    def test_por_hora_promedia_y_toma_primer_limite_positivo(self):
        raw = [
            {"date": "2025-03-14T10:05:00", CORRIENTE: 10, CORRIENTE_MAXIMA: 0},
            {"date": "2025-03-14T10:40:00", CORRIENTE: 20, CORRIENTE_MAXIMA: 30},
            {"date": "2025-03-14T09:10:00", CORRIENTE: 5, CORRIENTE_MAXIMA: 25},
        ]
        points = aggregate_by_hour(raw)
        assert [p["date"] for p in points] == ["2025-03-14T09:00:00", "2025-03-14T10:00:00"]
        assert points[1][CORRIENTE] == 15
        assert points[1][CORRIENTE_MAXIMA] == 30
        assert points[1][DESBALANCE] is None

    def test_por_mes_promedia_limites_positivos(self):
        raw = [
            {"date": "2024-07-15T00:00:00", CORRIENTE: 10, CORRIENTE_MAXIMA: 20},
            {"date": "2024-07-15T00:00:00", CORRIENTE: 30, CORRIENTE_MAXIMA: 0},
            {"date": "2024-06-15T00:00:00", CORRIENTE: 8, CORRIENTE_MAXIMA: 40},
        ]
        points = aggregate_by_month(raw)
        assert [p["date"] for p in points] == ["2024-06", "2024-07"]
        assert points[1][CORRIENTE] == 20
        assert points[1][CORRIENTE_MAXIMA] == 20


class TestManualCurrentLimit:
    @pytest.mark.parametrize(
        "componente,maquina,expected",
        [
            ("Cuchilla T8", "Linea 1", 5.50),
            ("Motor Elevacion Derecha", "Puente Grua", 14.00),
            ("Motor Elevacion Derecha", "Linea 2", 26.50),
            ("Traslacion", "Mesa 3", 3.25),
            ("Ventilador", "Linea 1", None),
        ],
    )
    def test_limites_conocidos(self, componente, maquina, expected):
        assert manual_current_limit(componente, maquina) == expected


class TestProjection:
    def test_pocos_puntos_no_proyecta(self):
        points = [{CORRIENTE: v} for v in (1, 2, 3, 4)]
        assert project_linear_regression(points, CORRIENTE, 10) == {"trend": [], "pessimistic": [], "optimistic": []}

    def test_tendencia_lineal(self):
        points = [{CORRIENTE: float(v)} for v in (1, 2, 3, 4, 5)]
        result = project_linear_regression(points, CORRIENTE, 3)
        assert result["trend"] == pytest.approx([6.0, 7.0, 8.0])
        assert result["pessimistic"][0] > result["trend"][0] > result["optimistic"][0]

    def test_pendiente_negativa_se_aplana(self):
        points = [{CORRIENTE: float(v)} for v in (10, 8, 6, 4, 2)]
        result = project_linear_regression(points, CORRIENTE, 2)
        assert result["trend"][0] == result["trend"][1]

    def test_append_projections(self):
        points = [
            {"date": f"2025-03-0{i}T00:00:00", "isProjection": False, CORRIENTE: float(i), CORRIENTE_MAXIMA: 50.0}
            for i in range(1, 6)
        ]
        result = append_projections(points, "MOTOR-1", days=3)
        proyectados = result[5:]
        assert len(result) == 8
        assert [p["date"] for p in proyectados] == ["2025-03-06", "2025-03-07", "2025-03-08"]
        assert all(p["isProjection"] for p in proyectados)
        assert proyectados[0]["proyeccion_corriente_tendencia"] == pytest.approx(6.0)
        assert proyectados[0][CORRIENTE_MAXIMA] == 50.0
        assert "proyeccion_desbalance_tendencia" not in proyectados[0]

    def test_append_projections_sin_puntos(self):
        assert append_projections([], "M", 10) == []


class TestToObservations:
    def test_convierte_reales_y_proyectados(self):
        points = [
            {"date": "2025-03-14T10:00:00", "isProjection": False, CORRIENTE: 10.0, CORRIENTE_MAXIMA: 20.0},
            {"date": "2025-03-15", "isProjection": True, "proyeccion_corriente_tendencia": 11.0, CORRIENTE_MAXIMA: 20.0},
        ]
        observaciones = to_observations(points)
        assert [(o.metric, o.is_projection, o.value) for o in observaciones] == [
            (Metric.CURRENT, False, 10.0),
            (Metric.CURRENT, True, 11.0),
        ]
        assert observaciones[1].fecha == date(2025, 3, 15)
