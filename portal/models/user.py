"""
Logged-in user model
"""
from typing import Optional

from flask_login import UserMixin
from pydantic import BaseModel, ConfigDict, Field


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    role: str
    user_id: Optional[str] = Field(default=None, alias='userId')


class SessionUser(UserMixin):
    """User rebuilt on every request from the session store"""

    def __init__(self, identity: str, role: str, token: str, user_id: Optional[str] = None):
        self.id = identity
        self.role = role
        self.token = token
        # Backend record id; None when the login response carried no userId
        self.user_id = user_id

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'

    @classmethod
    def from_store(cls, store) -> Optional['SessionUser']:
        """Build the user from a SessionStore, None when logged out"""
        identity = store.user_id or store.username
        if not store.is_authenticated() or not identity:
            return None
        return cls(identity, store.role, store.token, user_id=store.user_id)

    def __repr__(self):
        return f'<SessionUser {self.id} ({self.role})>'
