"""
Base repository patterns for REPTrack.

Two layers:
- ``BaseRepository``: generic CRUD over one SQLAlchemy model inside a session
- ``PortfolioRepository``: the capability the application consumes, returning
  immutable domain records; implemented by the SQL-backed and the in-memory
  variants and chosen once at the composition root
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from reptrack.core.models import Company, Property, Transaction
from reptrack.db.models import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Generic repository pattern that can be extended for specific models.
    """

    def __init__(self, model: Type[ModelType], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Raises:
            IntegrityError: If unique constraint violation
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def get_by_id(self, id: str) -> Optional[ModelType]:
        return self.session.get(self.model, id)

    def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[ModelType]:
        query = self.session.query(self.model)
        if limit is not None:
            query = query.limit(limit)
        return query.offset(offset).all()

    def update(self, id: str, **kwargs) -> Optional[ModelType]:
        """
        Update record by ID.

        Returns:
            Updated model instance or None if not found
        """
        instance = self.get_by_id(id)
        if not instance:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        self.session.flush()
        return instance

    def delete(self, id: str) -> bool:
        """
        Delete record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = self.get_by_id(id)
        if not instance:
            return False

        self.session.delete(instance)
        self.session.flush()
        return True


class PortfolioRepository(ABC):
    """
    Read/write access to the user's portfolio records.

    The calculation core only ever calls the ``list_*`` methods and receives
    immutable snapshots.
    """

    @abstractmethod
    def list_properties(self) -> List[Property]:
        ...

    @abstractmethod
    def list_transactions(self) -> List[Transaction]:
        """All transactions, newest first."""

    @abstractmethod
    def list_companies(self) -> List[Company]:
        ...

    @abstractmethod
    def get_property(self, property_id: str) -> Property:
        """
        Raises:
            RecordNotFoundError: If no property has this id
        """

    @abstractmethod
    def add_property(self, property: Property) -> Property:
        """
        Store a new property after validating its ownership split.

        Raises:
            OwnershipValidationError: If partner percentages are invalid
        """

    @abstractmethod
    def update_property(self, property: Property) -> Property:
        """
        Raises:
            RecordNotFoundError: If the property does not exist
            OwnershipValidationError: If partner percentages are invalid
        """

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> Transaction:
        ...

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> bool:
        ...

    @abstractmethod
    def add_company(self, company: Company) -> Company:
        ...
