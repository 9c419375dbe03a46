# mantenimiento/web/frontend/hooks/use_component_analysis_hook.py
"""
Hook del tablero de analítica: máquinas, componentes, serie y estado del
componente seleccionado.
"""

import asyncio
from datetime import date, timedelta
from typing import Any, Dict, Optional

from reactpy import use_callback, use_effect, use_ref, use_state

from ..api.api_client import ApiClient, get_api_client
from ..shared.notifications import use_notify
from ..state.app_context import use_app_context

DIAS_RANGO_INICIAL = 30


def default_range(today: Optional[date] = None) -> Dict[str, date]:
    today = today or date.today()
    return {"fecha_inicio": today - timedelta(days=DIAS_RANGO_INICIAL), "fecha_fin": today}


def use_component_analysis(api_client: Optional[ApiClient] = None) -> Dict[str, Any]:
    if api_client is None:
        api_client = use_app_context().get("api_client") or get_api_client()
    show_notification = use_notify()

    machines, set_machines = use_state([])
    components, set_components = use_state([])
    maquina, set_maquina = use_state(None)
    componente, set_componente = use_state(None)
    date_range, set_date_range = use_state(default_range)
    points, set_points = use_state([])
    status, set_status = use_state(None)
    analysis, set_analysis = use_state(None)
    loading, set_loading = use_state(False)
    error, set_error = use_state(None)

    is_mounted = use_ref(True)

    @use_effect(dependencies=[])
    def mount_lifecycle():
        is_mounted.current = True
        return lambda: setattr(is_mounted, "current", False)

    @use_effect(dependencies=[])
    def load_machines():
        async def load():
            try:
                data = await api_client.get_machines()
                if is_mounted.current:
                    set_machines(data)
                    if data:
                        set_maquina(data[0])
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if is_mounted.current:
                    set_error(f"Error al cargar máquinas: {e}")

        task = asyncio.create_task(load())
        return lambda: task.cancel()

    @use_effect(dependencies=[maquina])
    def load_components():
        if not maquina:
            return None

        async def load():
            try:
                data = await api_client.get_components(maquina)
                if is_mounted.current:
                    set_components(data)
                    set_componente(data[0]["originalName"] if data else None)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if is_mounted.current:
                    set_components([])
                    show_notification(f"Error al cargar componentes: {e}", "error")

        task = asyncio.create_task(load())
        return lambda: task.cancel()

    @use_callback
    async def load_analysis():
        if not maquina or not componente or not is_mounted.current:
            return
        set_loading(True)
        set_error(None)
        fecha_inicio, fecha_fin = date_range["fecha_inicio"], date_range["fecha_fin"]
        try:
            estado = await api_client.get_status(maquina, componente, fecha_inicio, fecha_fin)
            if is_mounted.current:
                set_points(estado.get("points", []))
                set_status(estado.get("status"))
                set_analysis(estado.get("analysis"))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if is_mounted.current:
                set_points([])
                set_status(None)
                set_analysis(None)
                set_error(str(e))
        finally:
            if is_mounted.current:
                set_loading(False)

    @use_effect(dependencies=[maquina, componente, date_range])
    def load_on_selection():
        task = asyncio.create_task(load_analysis())
        return lambda: task.cancel()

    def set_fecha(campo: str, valor: str):
        try:
            nueva = date.fromisoformat(valor)
        except ValueError:
            show_notification("Fecha inválida", "warning")
            return
        updated = {**date_range, campo: nueva}
        if updated["fecha_inicio"] > updated["fecha_fin"]:
            show_notification("La fecha de inicio no puede ser posterior a la fecha de fin", "warning")
            return
        set_date_range(updated)

    return {
        "machines": machines,
        "components": components,
        "maquina": maquina,
        "set_maquina": set_maquina,
        "componente": componente,
        "set_componente": set_componente,
        "date_range": date_range,
        "set_fecha": set_fecha,
        "points": points,
        "status": status,
        "analysis": analysis,
        "loading": loading,
        "error": error,
        "refresh": load_analysis,
    }
