"""
Seed the configured database with the demo portfolio.

Idempotent: deletes existing demo records and re-seeds from scratch. Lease
and transaction dates are relative to the moment the script runs.

Usage:
    python -m reptrack.scripts.seed_demo_data
"""

import logging

from reptrack.db.connection import get_db_manager
from reptrack.db.demo_data import demo_portfolio
from reptrack.db.models import CompanyRecord, PropertyRecord, TransactionRecord
from reptrack.db.repositories import SqlPortfolioRepository

logger = logging.getLogger(__name__)


def delete_demo_data(session, property_ids, transaction_ids, company_ids):
    """Delete demo records left over from a previous run."""
    session.query(TransactionRecord).filter(TransactionRecord.id.in_(transaction_ids)).delete(
        synchronize_session=False
    )
    session.query(PropertyRecord).filter(PropertyRecord.id.in_(property_ids)).delete(
        synchronize_session=False
    )
    session.query(CompanyRecord).filter(CompanyRecord.id.in_(company_ids)).delete(
        synchronize_session=False
    )


def seed():
    """Full seed: delete existing demo data, then re-seed."""
    db_manager = get_db_manager()
    db_manager.create_all()

    properties, transactions, companies = demo_portfolio()
    with db_manager.session() as session:
        delete_demo_data(
            session,
            [p.id for p in properties],
            [t.id for t in transactions],
            [c.id for c in companies],
        )

    repo = SqlPortfolioRepository(db_manager.session_factory)
    for company in companies:
        repo.add_company(company)
    for p in properties:
        repo.add_property(p)
    for t in transactions:
        repo.add_transaction(t)

    logger.info(
        f"Demo data seeding complete: {len(properties)} properties, "
        f"{len(transactions)} transactions, {len(companies)} companies"
    )


if __name__ == "__main__":
    seed()
