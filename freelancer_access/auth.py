from datetime import datetime, timedelta, timezone
import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.config import settings
from freelancer_access.database import get_db
from freelancer_access.exceptions import AuthenticationError, AuthorizationError
from freelancer_access.models.user import User
from freelancer_access.schemas.access import AccessSubject

logger = logging.getLogger(__name__)

# OAuth2 scheme for token validation
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    if "sub" not in to_encode:
        raise ValueError("Missing 'sub' claim (user id) in token data.")

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire, "sub": str(to_encode["sub"])})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> int:
    """Return the user id carried in the token's ``sub`` claim."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        logger.info("Token expired")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT decoding failed: {e}")
        raise AuthenticationError("Invalid token")

    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise AuthenticationError("Token does not contain a valid 'sub' field.")
    return int(sub)


async def get_current_user(token: str = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)) -> User:
    user_id = decode_access_token(token)
    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


async def get_current_subject(current_user: User = Depends(get_current_user)) -> AccessSubject:
    return AccessSubject.from_user(current_user)


def is_administrator(user: User) -> bool:
    return any(role in settings.admin_roles for role in user.role_names)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not is_administrator(current_user):
        raise AuthorizationError("Admin privileges required")
    return current_user
