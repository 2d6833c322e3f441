from typing import Optional

from fastapi import Header, Request
from pydantic import ValidationError

from app.core.exceptions import UnauthorizedException
from app.core.security import decode_access_token
from app.schemas.auth.auth_schemas import SessionUser
from app.utils.logger import get_logger

logger = get_logger("auth.guard")


async def get_current_session(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Optional[SessionUser]:
    """
    Resolve the caller's session from the bearer token.

    Returns None when no bearer token was sent, so the role guard decides
    how to reject anonymous callers. A token that is present but invalid
    is always rejected here.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization.split("Bearer ")[1].strip()
    payload = decode_access_token(token)

    try:
        session = SessionUser(
            id=payload.get("sub"),
            role=payload.get("role"),
            username=payload.get("username"),
        )
    except ValidationError:
        logger.warning("Token is missing session claims")
        raise UnauthorizedException("Invalid session")

    request.state.user = session
    return session
