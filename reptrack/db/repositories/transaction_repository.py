"""
Transaction repository for database operations on the transactions table.
"""

from typing import List

from sqlalchemy.orm import Session

from reptrack.core.models import Transaction
from reptrack.db.models import TransactionRecord
from reptrack.db.repositories.base import BaseRepository


def row_to_transaction(row: TransactionRecord) -> Transaction:
    return Transaction(
        id=row.id,
        property_id=row.property_id,
        date=row.date,
        amount=float(row.amount),
        type=row.transaction_type,
        category=row.category or "",
        notes=row.notes,
    )


class TransactionRepository(BaseRepository[TransactionRecord]):
    """Repository for TransactionRecord CRUD operations."""

    def __init__(self, session: Session):
        super().__init__(TransactionRecord, session)

    def create_from(self, transaction: Transaction) -> TransactionRecord:
        return self.create(
            id=transaction.id,
            property_id=transaction.property_id,
            date=transaction.date,
            amount=transaction.amount,
            transaction_type=transaction.type.value,
            category=transaction.category,
            notes=transaction.notes,
        )

    def get_newest_first(self) -> List[TransactionRecord]:
        return (
            self.session.query(TransactionRecord)
            .order_by(TransactionRecord.date.desc())
            .all()
        )
