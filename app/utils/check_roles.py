from typing import Optional

from fastapi import Depends

from app.core.config import ADMIN_ROLE
from app.core.exceptions import UnauthorizedException
from app.schemas.auth.auth_schemas import SessionUser
from app.utils.get_user import get_current_session
from app.utils.logger import get_logger

logger = get_logger("auth.guard")


def ensure_role(session: Optional[SessionUser], roles: list[str]) -> SessionUser:
    if session is None:
        logger.warning("Missing session")
        raise UnauthorizedException()

    if session.role not in roles:
        logger.warning(
            "Role not permitted",
            extra={"user_id": session.id, "role": session.role},
        )
        raise UnauthorizedException()

    return session


def require_role(roles: list[str]):
    async def role_checker(
        session: Optional[SessionUser] = Depends(get_current_session),
    ) -> SessionUser:
        return ensure_role(session, roles)
    return role_checker


require_admin = require_role([ADMIN_ROLE])
