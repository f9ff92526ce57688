"""
Database repository layer.

Provides data access patterns using the Repository Pattern.
"""

from reptrack.db.repositories.base import BaseRepository, PortfolioRepository
from reptrack.db.repositories.property_repository import PropertyRepository
from reptrack.db.repositories.transaction_repository import TransactionRepository
from reptrack.db.repositories.company_repository import CompanyRepository
from reptrack.db.repositories.settings_repository import SettingsRepository, SqlSettingsBackend
from reptrack.db.repositories.sql_portfolio_repository import SqlPortfolioRepository
from reptrack.db.repositories.memory_repository import InMemoryPortfolioRepository

__all__ = [
    "BaseRepository",
    "PortfolioRepository",
    "PropertyRepository",
    "TransactionRepository",
    "CompanyRepository",
    "SettingsRepository",
    "SqlSettingsBackend",
    "SqlPortfolioRepository",
    "InMemoryPortfolioRepository",
]
