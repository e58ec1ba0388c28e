from fastapi import APIRouter, Depends, status
import structlog

from autotest.models.schemas import AuthResponse, LoginRequest, RegisterRequest, TokenUser, UserOut
from autotest.services.auth_service import AuthService
from autotest.core.dependencies import get_auth_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Create an account and return an access token"""
    return await service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    return await service.login(request)


@router.get("/verify", response_model=UserOut)
async def verify(
    current_user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Resolve the bearer token to the stored user"""
    return await service.current_user(current_user)


@router.get("/me", response_model=UserOut)
async def me(
    current_user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return await service.current_user(current_user)
