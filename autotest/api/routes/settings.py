from fastapi import APIRouter, Depends

from autotest.models.schemas import (
    MessageResponse, PasswordChangeRequest, SettingsPayload, SettingsResponse,
    TokenUser, TwoFactorSetupResponse,
)
from autotest.services.settings_service import SettingsService
from autotest.core.dependencies import get_settings_service
from autotest.core.security import get_current_user

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    current_user: TokenUser = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    settings = await service.get_settings(current_user.id)
    return SettingsResponse(settings=settings)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    request: SettingsPayload,
    current_user: TokenUser = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    """Update only the sections present in the body"""
    settings = await service.update_settings(current_user.id, request)
    return SettingsResponse(settings=settings)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: PasswordChangeRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    await service.change_password(current_user.id, request)
    return MessageResponse(message="Password updated successfully")


@router.post("/2fa/enable", response_model=TwoFactorSetupResponse)
async def enable_two_factor(
    current_user: TokenUser = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    return await service.enable_two_factor(current_user.id)
