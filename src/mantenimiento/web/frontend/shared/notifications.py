# mantenimiento/web/frontend/shared/notifications.py
import asyncio
import logging
import uuid
from typing import Callable, Dict, List

from reactpy import component, create_context, event, html, use_context, use_effect, use_state

logger = logging.getLogger(__name__)

NotificationContext = create_context(None)

TOAST_SECONDS = 5

TOAST_STYLES = {
    "success": {"class_name": "toast-success", "icon": "fa-solid fa-circle-check", "aria_label": "Mensaje de éxito"},
    "error": {"class_name": "toast-error", "icon": "fa-solid fa-circle-xmark", "aria_label": "Mensaje de error"},
    "warning": {
        "class_name": "toast-warning",
        "icon": "fa-solid fa-triangle-exclamation",
        "aria_label": "Mensaje de advertencia",
    },
    "info": {"class_name": "toast-info", "icon": "fa-solid fa-circle-info", "aria_label": "Mensaje informativo"},
}


def build_notification_context(notifications: List[Dict], set_notifications: Callable) -> Dict:
    """Valor del NotificationContext a partir del estado de la lista de notificaciones."""

    def show_notification(message: str, style: str = "success"):
        new_id = str(uuid.uuid4())
        set_notifications(lambda old: old + [{"id": new_id, "message": message, "style": style}])

    def dismiss_notification(notification_id: str):
        set_notifications(lambda old: [n for n in old if n["id"] != notification_id])

    return {
        "notifications": notifications,
        "show_notification": show_notification,
        "dismiss_notification": dismiss_notification,
    }


def use_notify() -> Callable:
    """Devuelve `show_notification`, o un registro en el log si no hay contexto (tests)."""
    ctx = use_context(NotificationContext)
    if ctx:
        return ctx["show_notification"]
    return lambda message, style="info": logger.info(f"[{style}] {message}")


@component
def Toast(message: str, style: str, on_dismiss: Callable):
    """Notificación individual con entrada animada y descarte automático."""
    is_visible, set_is_visible = use_state(False)

    @use_effect(dependencies=[])
    def animate_in():
        set_is_visible(True)

    @use_effect(dependencies=[])
    def setup_auto_dismiss():
        async def dismiss_later():
            await asyncio.sleep(TOAST_SECONDS)
            on_dismiss()

        task = asyncio.create_task(dismiss_later())
        return lambda: task.cancel()

    config = TOAST_STYLES.get(style, TOAST_STYLES["info"])
    class_name = f"toast {config['class_name']}" + (" show" if is_visible else "")

    attributes = {"class_name": class_name, "role": "alert", "aria-label": config["aria_label"]}
    if style == "error":
        attributes["aria-invalid"] = "true"

    return html.article(
        attributes,
        html.div(
            {"class_name": "toast-content"},
            html.div(
                {"class_name": "toast-message"},
                html.i({"class_name": f"toast-icon {config['icon']}"}),
                html.span({"class_name": "toast-text"}, message),
            ),
            html.button(
                {
                    "class_name": "toast-close",
                    "aria-label": "Cerrar notificación",
                    "on_click": event(lambda e: on_dismiss(), prevent_default=True),
                },
                "×",
            ),
        ),
    )


@component
def ToastContainer():
    notification_ctx = use_context(NotificationContext)
    if not notification_ctx:
        return None

    dismiss_notification = notification_ctx["dismiss_notification"]
    return html.div(
        {"class_name": "toast-container"},
        html.div(
            {"class_name": "toast-stack"},
            [
                Toast(
                    key=n["id"],
                    message=n["message"],
                    style=n["style"],
                    on_dismiss=lambda nid=n["id"]: dismiss_notification(nid),
                )
                for n in notification_ctx["notifications"]
            ],
        ),
    )
