"""
In-memory portfolio repository.

Backs the demo mode and the tests. Records are immutable, so handing out the
stored objects is safe; the lists themselves are copied.
"""

import threading
from typing import Iterable, List, Optional

from reptrack.core.engine.ownership import validate_ownership
from reptrack.core.models import Company, Property, Transaction
from reptrack.db.repositories.base import PortfolioRepository
from reptrack.utils.error_utils import RecordNotFoundError


class InMemoryPortfolioRepository(PortfolioRepository):
    def __init__(
        self,
        properties: Optional[Iterable[Property]] = None,
        transactions: Optional[Iterable[Transaction]] = None,
        companies: Optional[Iterable[Company]] = None,
    ):
        self._lock = threading.Lock()
        self._properties: List[Property] = list(properties or [])
        self._transactions: List[Transaction] = list(transactions or [])
        self._companies: List[Company] = list(companies or [])

    @classmethod
    def with_demo_data(cls) -> "InMemoryPortfolioRepository":
        from reptrack.db.demo_data import demo_portfolio

        properties, transactions, companies = demo_portfolio()
        return cls(properties, transactions, companies)

    def list_properties(self) -> List[Property]:
        with self._lock:
            return list(self._properties)

    def list_transactions(self) -> List[Transaction]:
        with self._lock:
            return sorted(self._transactions, key=lambda t: t.date, reverse=True)

    def list_companies(self) -> List[Company]:
        with self._lock:
            return list(self._companies)

    def get_property(self, property_id: str) -> Property:
        with self._lock:
            for p in self._properties:
                if p.id == property_id:
                    return p
        raise RecordNotFoundError(f"Property {property_id} not found", {"property_id": property_id})

    def add_property(self, property: Property) -> Property:
        validate_ownership(property)
        with self._lock:
            self._properties.append(property)
        return property

    def update_property(self, property: Property) -> Property:
        validate_ownership(property)
        with self._lock:
            for index, existing in enumerate(self._properties):
                if existing.id == property.id:
                    self._properties[index] = property
                    return property
        raise RecordNotFoundError(f"Property {property.id} not found", {"property_id": property.id})

    def add_transaction(self, transaction: Transaction) -> Transaction:
        with self._lock:
            self._transactions.append(transaction)
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        with self._lock:
            before = len(self._transactions)
            self._transactions = [t for t in self._transactions if t.id != transaction_id]
            return len(self._transactions) < before

    def add_company(self, company: Company) -> Company:
        with self._lock:
            self._companies.append(company)
        return company
