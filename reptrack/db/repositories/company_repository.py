"""
Company repository for database operations on the companies table.
"""

from sqlalchemy.orm import Session

from reptrack.core.models import Company
from reptrack.db.models import CompanyRecord
from reptrack.db.repositories.base import BaseRepository


def row_to_company(row: CompanyRecord) -> Company:
    return Company(id=row.id, name=row.name, user_ownership=float(row.user_ownership))


class CompanyRepository(BaseRepository[CompanyRecord]):
    """Repository for CompanyRecord CRUD operations."""

    def __init__(self, session: Session):
        super().__init__(CompanyRecord, session)
