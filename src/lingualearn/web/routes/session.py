"""Session state, navigation and notification endpoints."""

from fastapi import APIRouter, HTTPException, status

from lingualearn.web.converters import notification_response, session_state
from lingualearn.web.schemas import (
    NavigateRequest,
    NotificationResponse,
    SessionStateResponse,
)
from lingualearn.web.sessions import get_engine

router = APIRouter(prefix="/api", tags=["session"])


@router.get("/session", response_model=SessionStateResponse)
async def get_session_state() -> SessionStateResponse:
    """Current screen, active pointers, user and notifications."""
    return session_state(get_engine())


@router.get("/session/dashboard")
async def get_dashboard() -> dict:
    """Dashboard summary for the current language."""
    dashboard = get_engine().dashboard()
    if dashboard is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Select a language first")
    return dashboard


@router.post("/session/navigate", response_model=SessionStateResponse)
async def navigate(request: NavigateRequest) -> SessionStateResponse:
    """Switch screens."""
    engine = get_engine()
    if not engine.navigate(request.screen):
        latest = engine.notifications.queue[-1].message if len(engine.notifications) else ""
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=latest)
    return session_state(engine)


@router.get("/notifications", response_model=list[NotificationResponse])
async def list_notifications() -> list[NotificationResponse]:
    """Notifications that have not expired yet."""
    return [notification_response(n) for n in get_engine().notifications.queue]


@router.delete("/notifications/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_notification(notification_id: int) -> None:
    """Dismiss a notification before it expires."""
    if not get_engine().notifications.dismiss(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found",
        )
