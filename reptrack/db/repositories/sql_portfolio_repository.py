"""
Database-backed portfolio repository.

Each call runs in its own session and hands back immutable records, so no
ORM object ever leaves this module.
"""

import logging
from typing import Callable, List

from sqlalchemy.orm import Session

from reptrack.core.engine.ownership import validate_ownership
from reptrack.core.models import Company, Property, Transaction
from reptrack.db.connection import session_scope
from reptrack.db.repositories.base import PortfolioRepository
from reptrack.db.repositories.company_repository import CompanyRepository, row_to_company
from reptrack.db.repositories.property_repository import (
    PropertyRepository,
    property_to_row,
    row_to_property,
)
from reptrack.db.repositories.transaction_repository import TransactionRepository, row_to_transaction
from reptrack.utils.error_utils import RecordNotFoundError

logger = logging.getLogger(__name__)


class SqlPortfolioRepository(PortfolioRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _session(self):
        return session_scope(self._session_factory)

    def list_properties(self) -> List[Property]:
        with self._session() as session:
            return [row_to_property(row) for row in PropertyRepository(session).get_all()]

    def list_transactions(self) -> List[Transaction]:
        with self._session() as session:
            return [row_to_transaction(row) for row in TransactionRepository(session).get_newest_first()]

    def list_companies(self) -> List[Company]:
        with self._session() as session:
            return [row_to_company(row) for row in CompanyRepository(session).get_all()]

    def get_property(self, property_id: str) -> Property:
        with self._session() as session:
            row = PropertyRepository(session).get_by_id(property_id)
            if row is None:
                raise RecordNotFoundError(f"Property {property_id} not found", {"property_id": property_id})
            return row_to_property(row)

    def add_property(self, property: Property) -> Property:
        validate_ownership(property)
        with self._session() as session:
            PropertyRepository(session).create(**property_to_row(property))
        logger.info(f"Property {property.id} added")
        return property

    def update_property(self, property: Property) -> Property:
        validate_ownership(property)
        with self._session() as session:
            values = property_to_row(property)
            values.pop("id")
            if PropertyRepository(session).update(property.id, **values) is None:
                raise RecordNotFoundError(f"Property {property.id} not found", {"property_id": property.id})
        return property

    def add_transaction(self, transaction: Transaction) -> Transaction:
        with self._session() as session:
            TransactionRepository(session).create_from(transaction)
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        with self._session() as session:
            return TransactionRepository(session).delete(transaction_id)

    def add_company(self, company: Company) -> Company:
        with self._session() as session:
            CompanyRepository(session).create(
                id=company.id, name=company.name, user_ownership=company.user_ownership
            )
        return company
