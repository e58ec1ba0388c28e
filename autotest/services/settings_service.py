import base64
import secrets
from typing import Any, Dict
from urllib.parse import quote

import structlog

from autotest.core.exceptions import ConflictError, NotFoundError, ValidationError
from autotest.core.security import get_password_hash, verify_password
from autotest.models.schemas import PasswordChangeRequest, SettingsPayload, TwoFactorSetupResponse
from autotest.repositories.interfaces.settings_repository import ISettingsRepository
from autotest.repositories.interfaces.user_repository import IUserRepository

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6
BACKUP_CODE_COUNT = 10
TOTP_ISSUER = "AutoTestAI"
QR_CODE_URL = "https://api.qrserver.com/v1/create-qr-code/?size=200x200&data={data}"

DEFAULT_NOTIFICATIONS = {
    "email_reports": True,
    "email_failures": True,
    "email_weekly_summary": False,
    "push_notifications": True,
    "slack_integration": False,
    "webhook_url": "",
}

DEFAULT_SECURITY = {
    "two_factor_enabled": False,
    "session_timeout": 24,
    "password_expiry": 90,
    "login_notifications": True,
}

DEFAULT_PREFERENCES = {
    "default_environment": "development",
    "default_test_type": "bdd",
    "auto_execute": False,
    "dark_mode": False,
    "compact_view": False,
}


def _payload(row) -> SettingsPayload:
    return SettingsPayload(
        profile=row.profile_settings or {},
        notifications=row.notification_settings or {},
        security=row.security_settings or {},
        preferences=row.preference_settings or {},
    )


class SettingsService:
    def __init__(self, settings_repository: ISettingsRepository, user_repository: IUserRepository):
        self.settings_repository = settings_repository
        self.user_repository = user_repository

    async def _user(self, user_id: int):
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def get_settings(self, user_id: int) -> SettingsPayload:
        row = await self.settings_repository.get(user_id)
        if row is None:
            user = await self._user(user_id)
            row = await self.settings_repository.create(
                user_id,
                {
                    "profile": {
                        "name": user.name,
                        "email": user.email,
                        "company": "",
                        "timezone": "UTC",
                        "language": "en",
                    },
                    "notifications": DEFAULT_NOTIFICATIONS,
                    "security": DEFAULT_SECURITY,
                    "preferences": DEFAULT_PREFERENCES,
                },
            )
        return _payload(row)

    async def update_settings(self, user_id: int, payload: SettingsPayload) -> SettingsPayload:
        """Replace the sections present in the payload; the rest are left alone."""
        current = await self.get_settings(user_id)
        sections: Dict[str, Dict[str, Any]] = payload.model_dump(exclude_none=True)

        profile = sections.get("profile")
        if profile is not None:
            changes = {}
            if profile.get("name") and profile["name"] != current.profile.get("name"):
                changes["name"] = str(profile["name"]).strip()
            email = str(profile.get("email") or "").strip().lower()
            if email and email != current.profile.get("email"):
                existing = await self.user_repository.get_by_email(email)
                if existing and existing.id != user_id:
                    raise ConflictError("Email is already in use")
                changes["email"] = email
                profile["email"] = email
            if changes:
                await self.user_repository.update(user_id, **changes)

        row = await self.settings_repository.update(user_id, sections)
        logger.info("Settings updated", user_id=user_id, sections=sorted(sections))
        return _payload(row)

    async def change_password(self, user_id: int, request: PasswordChangeRequest) -> None:
        if not request.current_password or not request.new_password:
            raise ValidationError("Current and new password are required")
        if len(request.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = await self._user(user_id)
        if not verify_password(request.current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        await self.user_repository.update(user_id, password_hash=get_password_hash(request.new_password))
        logger.info("Password changed", user_id=user_id)

    async def enable_two_factor(self, user_id: int) -> TwoFactorSetupResponse:
        user = await self._user(user_id)
        secret = base64.b32encode(secrets.token_bytes(20)).decode("ascii").rstrip("=")
        backup_codes = [secrets.token_hex(3).upper() for _ in range(BACKUP_CODE_COUNT)]
        await self.settings_repository.save_two_factor(user_id, secret, backup_codes)

        otpauth = f"otpauth://totp/{TOTP_ISSUER}:{quote(user.email)}?secret={secret}&issuer={TOTP_ISSUER}"
        return TwoFactorSetupResponse(
            secret=secret,
            qr_code_url=QR_CODE_URL.format(data=quote(otpauth, safe="")),
            backup_codes=backup_codes,
            message="2FA setup initiated. Scan the QR code with your authenticator app.",
        )
