from fastapi import APIRouter, Depends, status

from autotest.models.schemas import (
    InviteRequest, InviteResponse, MessageResponse, RoleUpdateRequest, TeamResponse, TokenUser,
)
from autotest.services.team_service import TeamService
from autotest.core.dependencies import get_team_service
from autotest.core.security import get_current_user

router = APIRouter(prefix="/team", tags=["team"])


@router.get("", response_model=TeamResponse)
async def list_members(
    current_user: TokenUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    """The owner followed by invited members"""
    members = await service.list_members(current_user.id)
    return TeamResponse(members=members)


@router.post("/invite", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
async def invite_member(
    request: InviteRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    member = await service.invite(current_user.id, request)
    return InviteResponse(message="Invitation sent successfully", member=member)


@router.patch("/{user_id}", response_model=MessageResponse)
async def update_member_role(
    user_id: int,
    request: RoleUpdateRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    await service.update_role(current_user.id, user_id, request.role)
    return MessageResponse(message="Member role updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_member(
    user_id: int,
    current_user: TokenUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    await service.remove_member(current_user.id, user_id)
    return MessageResponse(message="Member removed successfully")
