import structlog

from autotest.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from autotest.core.security import create_access_token, get_password_hash, verify_password
from autotest.models.database import UserModel
from autotest.models.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenUser,
    UserOut,
)
from autotest.repositories.interfaces.user_repository import IUserRepository

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6


def _issue(user: UserModel) -> AuthResponse:
    claims = TokenUser(id=user.id, email=user.email, role=user.role, plan=user.plan)
    return AuthResponse(token=create_access_token(claims), user=UserOut.model_validate(user))


class AuthService:
    """Registration, login and current-user lookup"""

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    async def register(self, request: RegisterRequest) -> AuthResponse:
        email = request.email.strip().lower()
        if len(request.password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if await self.user_repository.get_by_email(email):
            raise ConflictError("User already exists")

        user = await self.user_repository.create(
            email=email, name=request.name.strip(), password_hash=get_password_hash(request.password)
        )
        logger.info("User registered", user_id=user.id)
        return _issue(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        user = await self.user_repository.get_by_email(request.email.strip().lower())
        if not user or not verify_password(request.password, user.password_hash):
            logger.info("Login rejected")
            raise AuthError("Invalid credentials")
        return _issue(user)

    async def current_user(self, token_user: TokenUser) -> UserOut:
        user = await self.user_repository.get_by_id(token_user.id)
        if not user:
            raise NotFoundError("User", token_user.id)
        return UserOut.model_validate(user)
