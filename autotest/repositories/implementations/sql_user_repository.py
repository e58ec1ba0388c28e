from typing import Any, Optional

from sqlalchemy.orm import Session

from autotest.models.database import UserModel
from autotest.repositories.interfaces.user_repository import IUserRepository


class SQLUserRepository(IUserRepository):
    """SQLAlchemy implementation of user repository"""

    def __init__(self, db: Session):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.id == user_id).first()

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.email == email).first()

    async def create(
        self, email: str, name: str, password_hash: str, role: str = "user", plan: str = "free"
    ) -> UserModel:
        db_user = UserModel(email=email, name=name, password_hash=password_hash, role=role, plan=plan)
        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return db_user

    async def update(self, user_id: int, **fields: Any) -> Optional[UserModel]:
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return None

        for field, value in fields.items():
            setattr(db_user, field, value)

        self.db.commit()
        self.db.refresh(db_user)
        return db_user
