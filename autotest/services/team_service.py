import secrets
from typing import List

import structlog

from autotest.core.exceptions import ConflictError, NotFoundError, ValidationError
from autotest.core.security import get_password_hash
from autotest.models.schemas import (
    InvitedMember,
    InviteRequest,
    TeamMemberOut,
    UserRole,
)
from autotest.repositories.interfaces.team_repository import ITeamRepository
from autotest.repositories.interfaces.user_repository import IUserRepository

logger = structlog.get_logger()


class TeamService:
    def __init__(self, team_repository: ITeamRepository, user_repository: IUserRepository):
        self.team_repository = team_repository
        self.user_repository = user_repository

    async def list_members(self, owner_id: int) -> List[TeamMemberOut]:
        return await self.team_repository.list_members(owner_id)

    async def invite(self, owner_id: int, request: InviteRequest) -> InvitedMember:
        """Existing users join immediately; unknown e-mails get a placeholder account and stay pending."""
        email = (request.email or "").strip().lower()
        if not email or request.role is None:
            raise ValidationError("Email and role are required")

        user = await self.user_repository.get_by_email(email)
        if user:
            if user.id == owner_id:
                raise ConflictError("You already own this team")
            if await self.team_repository.get_membership(owner_id, user.id):
                raise ConflictError("User is already a team member")
            status = "active"
        else:
            # Placeholder account with an unusable random password
            user = await self.user_repository.create(
                email=email,
                name=email.split("@")[0],
                password_hash=get_password_hash(secrets.token_urlsafe(16)),
                role=request.role.value,
            )
            status = "pending"

        await self.team_repository.add_member(owner_id, user.id, request.role.value, status)
        logger.info(
            "Team invitation sent",
            owner_id=owner_id,
            user_id=user.id,
            role=request.role.value,
            status=status,
            has_message=bool(request.message),
        )
        return InvitedMember(id=user.id, email=email, role=request.role.value, status=status)

    async def update_role(self, owner_id: int, user_id: int, role: UserRole) -> None:
        if not await self.team_repository.update_role(owner_id, user_id, role.value):
            raise NotFoundError("Team member", user_id)
        logger.info("Team role updated", owner_id=owner_id, user_id=user_id, role=role.value)

    async def remove_member(self, owner_id: int, user_id: int) -> None:
        if not await self.team_repository.remove_member(owner_id, user_id):
            raise NotFoundError("Team member", user_id)
        logger.info("Team member removed", owner_id=owner_id, user_id=user_id)
