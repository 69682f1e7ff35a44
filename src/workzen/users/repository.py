from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_login(self, login: str) -> Optional[User]:
        """Look a user up by email or login id."""

        raise NotImplementedError
