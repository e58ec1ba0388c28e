from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from autotest.models.database import InvoiceModel, PaymentMethodModel, UserBillingModel
from autotest.repositories.interfaces.billing_repository import IBillingRepository


class SQLBillingRepository(IBillingRepository):
    """SQLAlchemy implementation of billing repository"""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, user_id: int) -> Optional[UserBillingModel]:
        return self.db.query(UserBillingModel).filter(UserBillingModel.user_id == user_id).first()

    async def get_or_create(self, user_id: int, plan: str, amount: float) -> UserBillingModel:
        billing = self._get(user_id)
        if billing:
            return billing
        billing = UserBillingModel(user_id=user_id, current_plan=plan, amount=amount)
        self.db.add(billing)
        self.db.commit()
        self.db.refresh(billing)
        return billing

    async def update_plan(
        self, user_id: int, plan: str, amount: float, next_billing_date: Optional[datetime]
    ) -> UserBillingModel:
        billing = await self.get_or_create(user_id, plan, amount)
        billing.current_plan = plan
        billing.amount = amount
        billing.next_billing_date = next_billing_date
        self.db.commit()
        self.db.refresh(billing)
        return billing

    async def default_payment_method(self, user_id: int) -> Optional[PaymentMethodModel]:
        return (
            self.db.query(PaymentMethodModel)
            .filter(PaymentMethodModel.user_id == user_id, PaymentMethodModel.is_default.is_(True))
            .first()
        )

    async def add_payment_method(self, user_id: int, last_four: str, expires: str) -> PaymentMethodModel:
        method = PaymentMethodModel(user_id=user_id, type="card", last_four=last_four, expires=expires, is_default=True)
        self.db.add(method)
        self.db.commit()
        self.db.refresh(method)
        return method

    async def list_invoices(self, user_id: int, limit: int = 10) -> List[InvoiceModel]:
        return (
            self.db.query(InvoiceModel)
            .filter(InvoiceModel.user_id == user_id)
            .order_by(InvoiceModel.invoice_date.desc(), InvoiceModel.id.desc())
            .limit(limit)
            .all()
        )

    async def add_invoice(self, user_id: int, amount: float, invoice_date: datetime, status: str = "paid") -> InvoiceModel:
        invoice = InvoiceModel(user_id=user_id, amount=amount, status=status, invoice_date=invoice_date)
        self.db.add(invoice)
        self.db.flush()
        invoice.download_url = f"/api/billing/invoices/{invoice.id}"
        self.db.commit()
        self.db.refresh(invoice)
        return invoice

    async def get_invoice(self, invoice_id: int, user_id: int) -> Optional[InvoiceModel]:
        return (
            self.db.query(InvoiceModel)
            .filter(InvoiceModel.id == invoice_id, InvoiceModel.user_id == user_id)
            .first()
        )
