from datetime import datetime
from typing import List, Tuple

import structlog

from autotest.core.exceptions import NotFoundError, ValidationError
from autotest.models.schemas import ReportCreate, ReportOut
from autotest.repositories.interfaces.report_repository import IReportRepository
from autotest.services.pdf_renderer import render_pdf

logger = structlog.get_logger()


class ReportService:
    def __init__(self, report_repository: IReportRepository):
        self.report_repository = report_repository

    async def list_reports(self, user_id: int) -> List[ReportOut]:
        return await self.report_repository.list_for_user(user_id)

    async def create_report(self, user_id: int, request: ReportCreate) -> ReportOut:
        if not (request.name and request.type and request.format and request.schedule):
            raise ValidationError("Name, type, format, and schedule are required")
        report = await self.report_repository.create(
            created_by=user_id,
            name=request.name.strip(),
            type=request.type,
            format=request.format,
            schedule=request.schedule,
            description=request.description or "",
            filters=request.filters,
        )
        logger.info("Report created", user_id=user_id, report_id=report.id)
        return report

    async def generate_report(self, user_id: int, report_id: int) -> Tuple[str, bytes]:
        """Stamp ``last_generated`` and render the report; returns (filename, pdf bytes)."""
        if not await self.report_repository.get_for_user(report_id, user_id):
            raise NotFoundError("Report", report_id)
        report = await self.report_repository.mark_generated(report_id)

        filters = report.filters or {}
        pdf = render_pdf(
            [
                f"AutoTest AI - {report.type.upper()} REPORT",
                f"Report: {report.name}",
                f"Generated: {datetime.utcnow().isoformat()}",
                f"Type: {report.type}",
                f"Format: {report.format}",
                f"Time Range: {filters.get('timeRange') or 'N/A'}",
                f"Environment: {filters.get('environment') or 'All'}",
                f"Test Type: {filters.get('testType') or 'All'}",
            ]
        )
        logger.info("Report generated", user_id=user_id, report_id=report_id, size=len(pdf))
        return f"report-{report_id}.pdf", pdf
