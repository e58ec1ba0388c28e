from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
import structlog

from autotest.config.settings import settings
from autotest.core.exceptions import AuthError
from autotest.models.schemas import TokenUser

logger = structlog.get_logger()

# bcrypt embeds a per-password salt in the hash
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)

# Missing credentials are reported by get_current_user as AuthError (401)
security = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(user: TokenUser, expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``{id, email, role, plan}`` with an expiry."""
    to_encode: Dict[str, Any] = user.model_dump()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str) -> Optional[TokenUser]:
    """Decode a token; any signature, expiry or shape problem yields None."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return TokenUser(**payload)
    except JWTError:
        return None
    except (TypeError, ValueError):
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenUser:
    """FastAPI dependency resolving the bearer token to its claims."""
    if credentials is None or not credentials.credentials:
        raise AuthError("No token provided")

    user = verify_token(credentials.credentials)
    if user is None:
        logger.info("Rejected bearer token")
        raise AuthError("Invalid token")
    return user
