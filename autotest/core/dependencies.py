from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session

from autotest.config.settings import settings
from autotest.core.database import get_database
from autotest.repositories.interfaces.ai_service import IAIService
from autotest.repositories.interfaces.billing_repository import IBillingRepository
from autotest.repositories.interfaces.execution_repository import IExecutionRepository
from autotest.repositories.interfaces.project_repository import IProjectRepository
from autotest.repositories.interfaces.report_repository import IReportRepository
from autotest.repositories.interfaces.settings_repository import ISettingsRepository
from autotest.repositories.interfaces.team_repository import ITeamRepository
from autotest.repositories.interfaces.test_case_repository import ITestCaseRepository
from autotest.repositories.interfaces.user_repository import IUserRepository

from autotest.repositories.implementations.gemini_service import GeminiService
from autotest.repositories.implementations.openai_service import OpenAIService
from autotest.repositories.implementations.sql_billing_repository import SQLBillingRepository
from autotest.repositories.implementations.sql_execution_repository import SQLExecutionRepository
from autotest.repositories.implementations.sql_project_repository import SQLProjectRepository
from autotest.repositories.implementations.sql_report_repository import SQLReportRepository
from autotest.repositories.implementations.sql_settings_repository import SQLSettingsRepository
from autotest.repositories.implementations.sql_team_repository import SQLTeamRepository
from autotest.repositories.implementations.sql_test_case_repository import SQLTestCaseRepository
from autotest.repositories.implementations.sql_user_repository import SQLUserRepository

from autotest.services.analytics_service import AnalyticsService
from autotest.services.auth_service import AuthService
from autotest.services.billing_service import BillingService
from autotest.services.execution_service import ExecutionService
from autotest.services.project_service import ProjectService
from autotest.services.report_service import ReportService
from autotest.services.settings_service import SettingsService
from autotest.services.team_service import TeamService
from autotest.services.test_case_service import TestCaseService
from autotest.services.test_generation_service import TestGenerationService
from autotest.services.upload_service import UploadService


class Container:
    """Dependency injection container"""

    def __init__(self):
        self._ai_service = None

    @lru_cache()
    def ai_service(self) -> IAIService:
        """Get AI service instance (singleton), chosen by ``AI_PROVIDER``"""
        if self._ai_service is None:
            if settings.ai_provider.lower() == "openai":
                self._ai_service = OpenAIService()
            else:
                self._ai_service = GeminiService()
        return self._ai_service

    def user_repository(self, db: Session) -> IUserRepository:
        return SQLUserRepository(db)

    def project_repository(self, db: Session) -> IProjectRepository:
        return SQLProjectRepository(db)

    def test_case_repository(self, db: Session) -> ITestCaseRepository:
        return SQLTestCaseRepository(db)

    def execution_repository(self, db: Session) -> IExecutionRepository:
        return SQLExecutionRepository(db)

    def report_repository(self, db: Session) -> IReportRepository:
        return SQLReportRepository(db)

    def billing_repository(self, db: Session) -> IBillingRepository:
        return SQLBillingRepository(db)

    def settings_repository(self, db: Session) -> ISettingsRepository:
        return SQLSettingsRepository(db)

    def team_repository(self, db: Session) -> ITeamRepository:
        return SQLTeamRepository(db)

    def test_case_service(self, db: Session, ai_service: IAIService) -> TestCaseService:
        """Get test case service instance"""
        return TestCaseService(
            test_case_repository=self.test_case_repository(db),
            project_repository=self.project_repository(db),
            user_repository=self.user_repository(db),
            generation_service=TestGenerationService(ai_service),
        )


# Global container instance
container = Container()


# Dependency providers for FastAPI
def get_ai_service() -> IAIService:
    """FastAPI dependency for AI service"""
    return container.ai_service()


def get_auth_service(db: Session = Depends(get_database)) -> AuthService:
    return AuthService(container.user_repository(db))


def get_project_service(db: Session = Depends(get_database)) -> ProjectService:
    return ProjectService(container.project_repository(db))


def get_test_case_service(
    db: Session = Depends(get_database),
    ai_service: IAIService = Depends(get_ai_service),
) -> TestCaseService:
    """FastAPI dependency for test case service"""
    return container.test_case_service(db, ai_service)


def get_execution_service(db: Session = Depends(get_database)) -> ExecutionService:
    return ExecutionService(container.execution_repository(db), container.test_case_repository(db))


def get_analytics_service(db: Session = Depends(get_database)) -> AnalyticsService:
    return AnalyticsService(
        execution_repository=container.execution_repository(db),
        test_case_repository=container.test_case_repository(db),
        project_repository=container.project_repository(db),
        user_repository=container.user_repository(db),
    )


def get_report_service(db: Session = Depends(get_database)) -> ReportService:
    return ReportService(container.report_repository(db))


def get_billing_service(db: Session = Depends(get_database)) -> BillingService:
    return BillingService(
        billing_repository=container.billing_repository(db),
        user_repository=container.user_repository(db),
        test_case_repository=container.test_case_repository(db),
        team_repository=container.team_repository(db),
    )


def get_settings_service(db: Session = Depends(get_database)) -> SettingsService:
    return SettingsService(container.settings_repository(db), container.user_repository(db))


def get_team_service(db: Session = Depends(get_database)) -> TeamService:
    return TeamService(container.team_repository(db), container.user_repository(db))


def get_upload_service() -> UploadService:
    return UploadService()
