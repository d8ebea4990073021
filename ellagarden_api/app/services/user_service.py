"""
Business logic for user accounts.

Users are stored in the data store with hashed passwords.  No route
currently exposes them; admin access is granted through the shared
secret in ``core.security``.
"""

import logging
from typing import Optional

from ..core.errors import ConflictError
from ..core.security import hash_password, verify_password
from ..core.store import DataStore
from ..schemas.user import User, UserCreate


logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def get_user(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self.store.users.values():
            if user.username == username:
                return user
        return None

    async def create_user(self, data: UserCreate) -> User:
        """Create a user; usernames are unique."""
        if await self.get_user_by_username(data.username) is not None:
            raise ConflictError(f"Username '{data.username}' is already taken")
        user = User(
            id=self.store.next_id("users"),
            username=data.username,
            password=hash_password(data.password),
        )
        self.store.users[user.id] = user
        logger.info("Registered user %s", data.username)
        return user

    async def verify_user(self, username: str, password: str) -> bool:
        user = await self.get_user_by_username(username)
        if user is None:
            return False
        return verify_password(password, user.password)
