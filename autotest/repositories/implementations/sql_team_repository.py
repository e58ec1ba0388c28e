from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from autotest.models.database import ProjectModel, TeamMemberModel, TestCaseModel, UserModel
from autotest.models.schemas import TeamMemberOut
from autotest.repositories.interfaces.team_repository import ITeamRepository


class SQLTeamRepository(ITeamRepository):
    """SQLAlchemy implementation of team repository"""

    def __init__(self, db: Session):
        self.db = db

    def _counts(self, model, column, user_ids: List[int]) -> Dict[int, int]:
        if not user_ids:
            return {}
        rows = (
            self.db.query(column, func.count(model.id))
            .filter(column.in_(user_ids))
            .group_by(column)
            .all()
        )
        return {user_id: count for user_id, count in rows}

    async def list_members(self, owner_id: int) -> List[TeamMemberOut]:
        owner = self.db.query(UserModel).filter(UserModel.id == owner_id).first()
        memberships = (
            self.db.query(TeamMemberModel, UserModel)
            .join(UserModel, TeamMemberModel.user_id == UserModel.id)
            .filter(TeamMemberModel.team_owner_id == owner_id)
            .order_by(TeamMemberModel.invited_at.asc(), TeamMemberModel.id.asc())
            .all()
        )

        user_ids = ([owner.id] if owner else []) + [user.id for _, user in memberships]
        projects = self._counts(ProjectModel, ProjectModel.user_id, user_ids)
        tests = self._counts(TestCaseModel, TestCaseModel.created_by, user_ids)

        members: List[TeamMemberOut] = []
        if owner:
            members.append(
                TeamMemberOut(
                    id=owner.id,
                    name=owner.name,
                    email=owner.email,
                    user_role=owner.role,
                    role="owner",
                    status="active",
                    created_at=owner.created_at,
                    projects_count=projects.get(owner.id, 0),
                    tests_generated=tests.get(owner.id, 0),
                )
            )
        for membership, user in memberships:
            members.append(
                TeamMemberOut(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    user_role=user.role,
                    role=membership.role,
                    status=membership.status,
                    created_at=user.created_at,
                    last_login=membership.joined_at,
                    projects_count=projects.get(user.id, 0),
                    tests_generated=tests.get(user.id, 0),
                )
            )
        return members

    async def count_members(self, owner_id: int) -> int:
        return (
            self.db.query(func.count(TeamMemberModel.id))
            .filter(TeamMemberModel.team_owner_id == owner_id)
            .scalar()
            or 0
        )

    async def get_membership(self, owner_id: int, user_id: int) -> Optional[TeamMemberModel]:
        return (
            self.db.query(TeamMemberModel)
            .filter(TeamMemberModel.team_owner_id == owner_id, TeamMemberModel.user_id == user_id)
            .first()
        )

    async def add_member(self, owner_id: int, user_id: int, role: str, status: str) -> TeamMemberModel:
        membership = TeamMemberModel(
            user_id=user_id,
            team_owner_id=owner_id,
            role=role,
            status=status,
            joined_at=datetime.utcnow() if status == "active" else None,
        )
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership

    async def update_role(self, owner_id: int, user_id: int, role: str) -> Optional[TeamMemberModel]:
        membership = await self.get_membership(owner_id, user_id)
        if not membership:
            return None
        membership.role = role
        self.db.query(UserModel).filter(UserModel.id == user_id).update({UserModel.role: role})
        self.db.commit()
        self.db.refresh(membership)
        return membership

    async def remove_member(self, owner_id: int, user_id: int) -> bool:
        membership = await self.get_membership(owner_id, user_id)
        if not membership:
            return False
        self.db.delete(membership)
        self.db.commit()
        return True
