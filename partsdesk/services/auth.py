# partsdesk/services/auth.py

from typing import Optional, Sequence

from ..models.users import User
from ..utils.logger import get_logger

log = get_logger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid ID or password"


def authenticate(users: Sequence[User], shared_password: str, user_id: str, password: str) -> Optional[User]:
    """
    Static allow-list check: case-insensitive id, exact shared password.
    Returns the user, or None when either part does not match.
    """
    wanted = (user_id or "").strip().lower()
    user = next((u for u in users if u.id.lower() == wanted), None)
    if user is None or password != shared_password:
        log.info("login_rejected", user_id=wanted)
        return None
    log.info("login_accepted", user_id=user.id, role=user.role.value)
    return user
