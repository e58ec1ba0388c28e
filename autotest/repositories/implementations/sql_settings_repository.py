from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from autotest.models.database import UserSettingsModel, UserTwoFactorModel
from autotest.repositories.interfaces.settings_repository import ISettingsRepository

# Section name on the wire -> column on user_settings
SECTION_COLUMNS = {
    "profile": "profile_settings",
    "notifications": "notification_settings",
    "security": "security_settings",
    "preferences": "preference_settings",
}


class SQLSettingsRepository(ISettingsRepository):
    """SQLAlchemy implementation of settings repository"""

    def __init__(self, db: Session):
        self.db = db

    async def get(self, user_id: int) -> Optional[UserSettingsModel]:
        return self.db.query(UserSettingsModel).filter(UserSettingsModel.user_id == user_id).first()

    async def create(self, user_id: int, sections: Dict[str, Dict[str, Any]]) -> UserSettingsModel:
        row = UserSettingsModel(user_id=user_id)
        for section, column in SECTION_COLUMNS.items():
            setattr(row, column, dict(sections.get(section) or {}))
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    async def update(self, user_id: int, sections: Dict[str, Dict[str, Any]]) -> UserSettingsModel:
        row = await self.get(user_id)
        if row is None:
            return await self.create(user_id, sections)

        for section, values in sections.items():
            column = SECTION_COLUMNS.get(section)
            if column is not None:
                # JSON columns only notice reassignment
                setattr(row, column, dict(values))
        self.db.commit()
        self.db.refresh(row)
        return row

    async def save_two_factor(self, user_id: int, secret: str, backup_codes: List[str]) -> UserTwoFactorModel:
        row = self.db.query(UserTwoFactorModel).filter(UserTwoFactorModel.user_id == user_id).first()
        if row is None:
            row = UserTwoFactorModel(user_id=user_id, secret=secret, backup_codes=backup_codes, enabled=False)
            self.db.add(row)
        else:
            row.secret = secret
            row.backup_codes = list(backup_codes)
            row.enabled = False
        self.db.commit()
        self.db.refresh(row)
        return row
