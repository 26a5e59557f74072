"""
Bearer-token authorization.

Tokens are issued by the identity service and signed with the shared
``SECRET_KEY``. The claims this service reads are ``sub`` (user id),
``first_name``, ``last_name`` and ``roles``.
"""
import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from content_api.config import settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class Role:
    SYSTEM_ADMINISTRATOR = "SystemAdministrator"
    MANAGER = "Manager"
    NEWS_AUTHOR = "NewsAuthor"
    NEWS_EDITOR = "NewsEditor"
    PRODUCT_AUTHOR = "ProductAuthor"
    PRODUCT_EDITOR = "ProductEditor"


MANAGER_OR_ADMIN = (Role.MANAGER, Role.SYSTEM_ADMINISTRATOR)
NEWS_WRITERS = (Role.NEWS_AUTHOR, Role.NEWS_EDITOR, Role.SYSTEM_ADMINISTRATOR)
NEWS_EDITORS = (Role.NEWS_EDITOR, Role.SYSTEM_ADMINISTRATOR)
PRODUCT_WRITERS = (Role.PRODUCT_AUTHOR, Role.PRODUCT_EDITOR, Role.SYSTEM_ADMINISTRATOR)
PRODUCT_EDITORS = (Role.PRODUCT_EDITOR, Role.SYSTEM_ADMINISTRATOR)


class CurrentUser(BaseModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    roles: list[str] = []

    @property
    def by_line(self) -> str:
        return f"{self.last_name}, {self.first_name}"


def create_access_token(
    user_id: str,
    first_name: str = "",
    last_name: str = "",
    roles: list[str] | tuple[str, ...] = (),
    expires_minutes: int | None = None,
) -> str:
    """Sign a token carrying the claims ``get_current_user`` understands."""
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    claims = {
        "sub": user_id,
        "first_name": first_name,
        "last_name": last_name,
        "roles": list(roles),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    return CurrentUser(
        id=user_id,
        first_name=payload.get("first_name") or "",
        last_name=payload.get("last_name") or "",
        roles=payload.get("roles") or [],
    )


def require_roles(*roles: str):
    """Return a dependency that admits users holding any of *roles*."""

    def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not set(roles).intersection(user.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this operation",
            )
        return user

    return _check
