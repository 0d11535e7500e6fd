"""FastAPI dependency utilities."""

from fastapi import WebSocket

from fitpulse.infrastructure.notifications import NotificationHubs


def get_notification_hubs(websocket: WebSocket) -> NotificationHubs:
    """Return the hubs created during application startup."""

    hubs = getattr(websocket.app.state, "notification_hubs", None)
    if hubs is None:
        raise RuntimeError("Notification hubs are not initialized")
    return hubs
