import logging
from typing import Dict, List, Optional

from circulation.errors import DuplicateIdentifierError, InvalidArgumentError, NotFoundError
from circulation.user import User

logger = logging.getLogger(__name__)


class Ledger:
    """Registered users keyed by user id, in registration order."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def register_user(self, name: str, user_id: str) -> User:
        key = (user_id or "").strip()
        if not key:
            raise InvalidArgumentError("User ID cannot be empty.")
        if not name or not name.strip():
            raise InvalidArgumentError("User name cannot be empty.")
        if key in self._users:
            raise DuplicateIdentifierError(f"User with ID {key} already exists.")
        user = User(name=name, user_id=key)
        self._users[key] = user
        logger.info(f"User registered: {key} '{user.name}'")
        return user

    def find_user(self, user_id: str) -> Optional[User]:
        return self._users.get((user_id or "").strip())

    def get(self, user_id: str) -> User:
        user = self.find_user(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found.")
        return user

    def list_users(self) -> List[User]:
        return list(self._users.values())

    def holder_of(self, isbn: str) -> Optional[User]:
        """The user currently holding a book, if any."""
        for user in self._users.values():
            if user.holds(isbn):
                return user
        return None

    def __len__(self) -> int:
        return len(self._users)
