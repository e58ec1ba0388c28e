from fastapi import APIRouter, Depends, Response, status

from autotest.models.schemas import ReportCreate, ReportCreateResponse, ReportListResponse, TokenUser
from autotest.services.report_service import ReportService
from autotest.core.dependencies import get_report_service
from autotest.core.security import get_current_user

router = APIRouter(prefix="/reports", tags=["reports"])


def pdf_response(filename: str, content: bytes) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("", response_model=ReportListResponse)
async def list_reports(
    current_user: TokenUser = Depends(get_current_user),
    service: ReportService = Depends(get_report_service)
):
    reports = await service.list_reports(current_user.id)
    return ReportListResponse(reports=reports)


@router.post("", response_model=ReportCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    request: ReportCreate,
    current_user: TokenUser = Depends(get_current_user),
    service: ReportService = Depends(get_report_service)
):
    report = await service.create_report(current_user.id, request)
    return ReportCreateResponse(report=report, message="Report created successfully")


@router.post("/{report_id}/generate")
async def generate_report(
    report_id: int,
    current_user: TokenUser = Depends(get_current_user),
    service: ReportService = Depends(get_report_service)
):
    """Render the report as a PDF attachment"""
    filename, content = await service.generate_report(current_user.id, report_id)
    return pdf_response(filename, content)
