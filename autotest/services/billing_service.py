import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

import structlog

from autotest.core.exceptions import NotFoundError, ValidationError
from autotest.core.plans import PLANS, get_plan_limits
from autotest.models.schemas import (
    BillingInfo,
    InvoiceOut,
    PaymentMethodOut,
    PlanUsage,
    UpgradeResponse,
)
from autotest.repositories.interfaces.billing_repository import IBillingRepository
from autotest.repositories.interfaces.team_repository import ITeamRepository
from autotest.repositories.interfaces.test_case_repository import ITestCaseRepository
from autotest.repositories.interfaces.user_repository import IUserRepository
from autotest.services.pdf_renderer import render_pdf

logger = structlog.get_logger()

BYTES_PER_GB = 1024 ** 3
BILLING_PERIOD = timedelta(days=30)
MOCK_INVOICE_AGES_DAYS = (30, 60, 90)
MOCK_CARD_LAST_FOUR = "4242"
CHECKOUT_URL = "https://checkout.stripe.com/pay/mock-session-{session}"


class BillingService:
    """Plan usage, mock payment data and invoices"""

    def __init__(
        self,
        billing_repository: IBillingRepository,
        user_repository: IUserRepository,
        test_case_repository: ITestCaseRepository,
        team_repository: ITeamRepository,
    ):
        self.billing_repository = billing_repository
        self.user_repository = user_repository
        self.test_case_repository = test_case_repository
        self.team_repository = team_repository

    async def _user(self, user_id: int):
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def get_billing(self, user_id: int) -> BillingInfo:
        user = await self._user(user_id)
        limits = get_plan_limits(user.plan)
        billing = await self.billing_repository.get_or_create(user_id, user.plan, limits.price)

        invoices = await self.billing_repository.list_invoices(user_id)
        if not invoices and limits.price > 0:
            now = datetime.utcnow()
            for days_ago in MOCK_INVOICE_AGES_DAYS:
                await self.billing_repository.add_invoice(user_id, billing.amount, now - timedelta(days=days_ago))
            invoices = await self.billing_repository.list_invoices(user_id)

        storage_bytes = await self.test_case_repository.content_bytes_for_user(user_id)
        usage = PlanUsage(
            tests_generated=await self.test_case_repository.count_for_user(user_id),
            tests_limit=limits.tests,
            # The owner occupies a seat too
            team_members=await self.team_repository.count_members(user_id) + 1,
            team_limit=limits.members,
            storage_used=round(storage_bytes / BYTES_PER_GB, 3),
            storage_limit=limits.storage_gb,
        )

        method = await self.billing_repository.default_payment_method(user_id)
        return BillingInfo(
            current_plan=billing.current_plan,
            billing_cycle=billing.billing_cycle,
            next_billing_date=billing.next_billing_date,
            amount=billing.amount,
            usage=usage,
            payment_method=(
                PaymentMethodOut(type=method.type, last_four=method.last_four, expires=method.expires)
                if method
                else None
            ),
            invoices=[
                InvoiceOut(
                    id=i.id,
                    date=i.invoice_date,
                    amount=i.amount,
                    status=i.status,
                    download_url=i.download_url,
                )
                for i in invoices
            ],
        )

    async def upgrade(self, user_id: int, plan: Optional[str]) -> UpgradeResponse:
        plan = (plan or "").strip().lower()
        if plan not in PLANS:
            raise ValidationError("Invalid plan")

        await self._user(user_id)
        limits = PLANS[plan]
        paid = limits.price > 0

        await self.user_repository.update(user_id, plan=plan)
        await self.billing_repository.update_plan(
            user_id, plan, limits.price, datetime.utcnow() + BILLING_PERIOD if paid else None
        )

        checkout_url = None
        if paid:
            if not await self.billing_repository.default_payment_method(user_id):
                expires = (datetime.utcnow() + timedelta(days=3 * 365)).strftime("%Y-%m")
                await self.billing_repository.add_payment_method(user_id, MOCK_CARD_LAST_FOUR, expires)
            checkout_url = CHECKOUT_URL.format(session=secrets.token_hex(8))

        logger.info("Plan changed", user_id=user_id, plan=plan)
        return UpgradeResponse(
            message=f"Successfully upgraded to {plan} plan",
            plan=plan,
            amount=limits.price,
            checkout_url=checkout_url,
        )

    async def invoice_pdf(self, user_id: int, invoice_id: int) -> Tuple[str, bytes]:
        invoice = await self.billing_repository.get_invoice(invoice_id, user_id)
        if not invoice:
            raise NotFoundError("Invoice", invoice_id)
        user = await self._user(user_id)

        pdf = render_pdf(
            [
                "AutoTest AI - INVOICE",
                f"Invoice #: {invoice.id}",
                f"Date: {invoice.invoice_date.strftime('%Y-%m-%d')}",
                f"Bill to: {user.name} <{user.email}>",
                f"Plan: {user.plan}",
                f"Amount: ${invoice.amount:.2f}",
                f"Status: {invoice.status}",
            ]
        )
        return f"invoice-{invoice.id}.pdf", pdf
