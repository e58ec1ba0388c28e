from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from autotest.models.database import InvoiceModel, PaymentMethodModel, UserBillingModel


class IBillingRepository(ABC):
    """Interface for billing rows, payment methods and invoices"""

    @abstractmethod
    async def get_or_create(self, user_id: int, plan: str, amount: float) -> UserBillingModel:
        pass

    @abstractmethod
    async def update_plan(
        self, user_id: int, plan: str, amount: float, next_billing_date: Optional[datetime]
    ) -> UserBillingModel:
        pass

    @abstractmethod
    async def default_payment_method(self, user_id: int) -> Optional[PaymentMethodModel]:
        pass

    @abstractmethod
    async def add_payment_method(self, user_id: int, last_four: str, expires: str) -> PaymentMethodModel:
        pass

    @abstractmethod
    async def list_invoices(self, user_id: int, limit: int = 10) -> List[InvoiceModel]:
        """Newest first"""
        pass

    @abstractmethod
    async def add_invoice(self, user_id: int, amount: float, invoice_date: datetime, status: str = "paid") -> InvoiceModel:
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: int, user_id: int) -> Optional[InvoiceModel]:
        pass
