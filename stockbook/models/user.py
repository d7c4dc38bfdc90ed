"""
User model for authentication

Users are a static list; there is no user management.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from flask_login import UserMixin


class UserRole(str, Enum):
    ADMIN = 'admin'
    STAFF = 'staff'


@dataclass(frozen=True, eq=False)
class User(UserMixin):
    id: str
    name: str
    email: str  # login identifier
    role: UserRole

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role.value})>'


def find_user(users: Iterable[User], user_id: Optional[str]) -> Optional[User]:
    return next((u for u in users if u.id == user_id), None)


def find_user_by_email(users: Iterable[User], email: Optional[str]) -> Optional[User]:
    """Exact email match, as typed on the login form."""
    return next((u for u in users if u.email == email), None)
