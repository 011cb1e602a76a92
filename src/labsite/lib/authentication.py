import logging
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import func
from sqlalchemy.orm import Session

from labsite import deps
from labsite.lib.logging.context import format_raised_exception_info_as_dict, logging_context, save_to_logging_context
from labsite.models.enums.user_role import UserRole
from labsite.models.user import User

JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM") or "HS256"
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE")

logger = logging.getLogger(__name__)


@dataclass
class UserData:
    user: User
    active_roles: list[UserRole]


def decode_jwt(token: str) -> dict:
    if not JWT_SECRET:
        logger.warning(msg="Failed to authenticate user; JWT_SECRET is not configured.", extra=logging_context())
        return {}

    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            options={"verify_aud": JWT_AUDIENCE is not None},
        )
    except JWTError as ex:
        save_to_logging_context(format_raised_exception_info_as_dict(ex))
        logger.debug(msg="Failed to authenticate user; Could not decode user token.", extra=logging_context())
        return {}


class JWTBearer(HTTPBearer):
    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request):
        credentials: Optional[HTTPAuthorizationCredentials]
        try:
            credentials = await super(JWTBearer, self).__call__(request)
        except HTTPException:
            credentials = None

        if credentials:
            if not credentials.scheme == "Bearer":
                save_to_logging_context({"scheme": credentials.scheme})
                logger.info(msg="Failed to authenticate user; Invalid authentication scheme.", extra=logging_context())
                raise HTTPException(status_code=403, detail="Invalid authentication scheme.")

            token_payload = decode_jwt(credentials.credentials)

            if not token_payload:
                logger.info(msg="Failed to authenticate user; Invalid or expired token.", extra=logging_context())
                raise HTTPException(status_code=403, detail="Invalid token or expired token.")

            logger.debug(msg="Successfully acquired JWT.", extra=logging_context())
            return token_payload

        logger.debug(msg="Failed to authenticate user; No credentials were provided.", extra=logging_context())
        return None


async def get_current_user(
    token_payload: Optional[dict] = Depends(JWTBearer(auto_error=False)),
    db: Session = Depends(deps.get_db),
) -> Optional[UserData]:
    """
    The user named by the bearer token's ``sub`` claim (an email address), or None for anonymous
    requests. Unknown and inactive users are treated as anonymous.
    """
    if token_payload is None:
        save_to_logging_context({"user_authenticated": False})
        logger.info(msg="Failed to authenticate user; No token was supplied.", extra=logging_context())
        return None

    email: Optional[str] = token_payload.get("sub")
    if email is None:
        save_to_logging_context({"user_authenticated": False})
        logger.info(msg="Failed to authenticate user; Email not present in token payload.", extra=logging_context())
        return None

    user = db.query(User).filter(func.lower(User.email) == email.lower()).order_by(User.id).first()
    if user is None:
        save_to_logging_context({"user_authenticated": False})
        logger.info(msg="Failed to authenticate user; No account for this email.", extra=logging_context())
        return None

    if not user.is_active:
        save_to_logging_context({"user": user.id, "user_authenticated": False})
        logger.info(msg="Failed to authenticate user; User is inactive.", extra=logging_context())
        return None

    save_to_logging_context(
        {"user": user.id, "user_authenticated": True, "active_roles": [role.name for role in user.roles]}
    )
    logger.info(msg="Successfully authenticated user via JWT.", extra=logging_context())
    return UserData(user, user.roles)
