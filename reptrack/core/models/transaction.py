"""
Transaction records for REPTrack.

Transactions are immutable cash facts attached to a property. Amounts are
positive and in the owning property's currency; the direction comes from
``type``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from reptrack.core.constants import ETransactionType, MORTGAGE_CATEGORY
from reptrack.core.models.property import RecordModel
from reptrack.utils.date_utils import to_utc


class Transaction(RecordModel):
    id: str
    property_id: str
    date: datetime
    amount: float = Field(..., gt=0)
    type: ETransactionType
    category: str = ""
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v):
        return to_utc(v)

    @property
    def is_income(self) -> bool:
        return self.type == ETransactionType.INCOME

    @property
    def is_operating_expense(self) -> bool:
        """Expense that counts against NOI (everything except debt service)."""
        return self.type == ETransactionType.EXPENSE and self.category != MORTGAGE_CATEGORY

    @property
    def signed_amount(self) -> float:
        return self.amount if self.is_income else -self.amount
