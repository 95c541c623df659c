class SocketState:
    """Which staff account owns which dashboard connection."""

    def __init__(self):
        self.sid_user: dict[str, str] = {}
        self.user_sids: dict[str, set[str]] = {}

    def bind(self, user_id: str, sid: str):
        self.sid_user[sid] = user_id
        self.user_sids.setdefault(user_id, set()).add(sid)

    def unbind_sid(self, sid: str):
        user_id = self.sid_user.pop(sid, None)
        if not user_id:
            return
        sids = self.user_sids.get(user_id, set())
        sids.discard(sid)
        if not sids:
            self.user_sids.pop(user_id, None)

    def connected_users(self) -> int:
        return len(self.user_sids)


socket_state = SocketState()
