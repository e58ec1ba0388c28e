from fastapi import APIRouter, Depends

from autotest.api.routes.reports import pdf_response
from autotest.models.schemas import BillingResponse, TokenUser, UpgradeRequest, UpgradeResponse
from autotest.services.billing_service import BillingService
from autotest.core.dependencies import get_billing_service
from autotest.core.security import get_current_user

router = APIRouter(prefix="/billing", tags=["billing"])


@router.get("", response_model=BillingResponse)
async def get_billing(
    current_user: TokenUser = Depends(get_current_user),
    service: BillingService = Depends(get_billing_service)
):
    """Current plan, usage against its limits, payment method and recent invoices"""
    billing = await service.get_billing(current_user.id)
    return BillingResponse(billing=billing)


@router.post("/upgrade", response_model=UpgradeResponse)
async def upgrade_plan(
    request: UpgradeRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: BillingService = Depends(get_billing_service)
):
    return await service.upgrade(current_user.id, request.plan)


@router.get("/invoices/{invoice_id}")
async def download_invoice(
    invoice_id: int,
    current_user: TokenUser = Depends(get_current_user),
    service: BillingService = Depends(get_billing_service)
):
    filename, content = await service.invoice_pdf(current_user.id, invoice_id)
    return pdf_response(filename, content)
