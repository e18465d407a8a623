"""
Session store holding the auth token, role and user id
"""
from typing import Any, MutableMapping, Optional

TOKEN_KEY = 'token'
ROLE_KEY = 'role'
USER_ID_KEY = 'userId'
USERNAME_KEY = 'username'

_KEYS = (TOKEN_KEY, ROLE_KEY, USER_ID_KEY, USERNAME_KEY)


class SessionStore:
    """
    Thin wrapper over a mapping (the Flask session in the app, a dict in tests).

    Written only at login and cleared only at logout; everything else reads.
    """

    def __init__(self, backing: MutableMapping[str, Any]):
        self._backing = backing

    def get(self, key: str, default: Any = None) -> Any:
        return self._backing.get(key, default)

    def set(self, key: str, value: Any):
        self._backing[key] = value

    def clear(self):
        """Drop the auth keys; other session data (flash messages) survives"""
        for key in _KEYS:
            self._backing.pop(key, None)

    @property
    def token(self) -> Optional[str]:
        return self.get(TOKEN_KEY)

    @property
    def role(self) -> Optional[str]:
        return self.get(ROLE_KEY)

    @property
    def user_id(self) -> Optional[str]:
        return self.get(USER_ID_KEY)

    @property
    def username(self) -> Optional[str]:
        return self.get(USERNAME_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def start(self, token: str, role: str, user_id: Optional[str] = None, username: Optional[str] = None):
        """Record a fresh login. user_id is kept only when the backend returned one."""
        self.clear()
        self.set(TOKEN_KEY, token)
        self.set(ROLE_KEY, role)
        if user_id:
            self.set(USER_ID_KEY, user_id)
        if username:
            self.set(USERNAME_KEY, username)
