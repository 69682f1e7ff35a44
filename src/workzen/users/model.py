from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Plain data object, no database access.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    login_id: Optional[str] = None
    is_active: bool = True
