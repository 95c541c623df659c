import logging

from socketio.exceptions import ConnectionRefusedError as SocketConnectionRefused

from visitdesk.core.config import get_settings
from visitdesk.core.security import ACCESS_TOKEN, decode_token
from visitdesk.db.models import UserRole
from visitdesk.socket.manager import socket_state

settings = get_settings()
logger = logging.getLogger(__name__)


def resolve_staff_identity(auth: dict | None) -> tuple[str, str] | None:
    """(user_id, role) from the access token a dashboard client connects with."""
    token = (auth or {}).get("token")
    if not token:
        return None
    try:
        payload = decode_token(token, expected_type=ACCESS_TOKEN)
    except ValueError:
        return None
    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in {item.value for item in UserRole}:
        return None
    return user_id, role


def register_socket_events(sio):
    @sio.event(namespace=settings.DASHBOARD_NAMESPACE)
    async def connect(sid, environ, auth):
        identity = resolve_staff_identity(auth)
        if not identity:
            raise SocketConnectionRefused("authentication required")
        user_id, role = identity
        socket_state.bind(user_id, sid)
        await sio.enter_room(sid, f"role:{role}", namespace=settings.DASHBOARD_NAMESPACE)
        logger.debug("dashboard connected sid=%s user_id=%s role=%s", sid, user_id, role)
        await sio.emit(
            "dashboard.snapshot",
            {"data": {"message": "connected", "role": role}},
            to=sid,
            namespace=settings.DASHBOARD_NAMESPACE,
        )

    @sio.event(namespace=settings.DASHBOARD_NAMESPACE)
    async def disconnect(sid):
        socket_state.unbind_sid(sid)
