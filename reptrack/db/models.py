"""
SQLAlchemy ORM models for the REPTrack schema.

Nested record parts (partners, lease, units, mortgage mix) are kept in JSON
columns, the way the hosted backend stores them. Column types are portable so
the schema runs on PostgreSQL and SQLite alike.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    JSON,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CompanyRecord(Base):
    __tablename__ = "companies"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    user_ownership = Column(Numeric(5, 2), nullable=False, default=100)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("user_ownership >= 0 AND user_ownership <= 100", name="ck_company_ownership"),
    )

    def __repr__(self):
        return f"<CompanyRecord(id={self.id}, name='{self.name}', user_ownership={self.user_ownership})>"


class PropertyRecord(Base):
    __tablename__ = "properties"

    id = Column(String(64), primary_key=True)
    address = Column(Text, nullable=False, default="")
    country = Column(Text, nullable=False)
    property_type = Column(Text, nullable=False, default="Residential")
    currency = Column(String(3), nullable=False, default="NIS")
    purchase_price = Column(Numeric(15, 2), nullable=False, default=0)
    purchase_price_base = Column(Numeric(15, 2))
    market_value = Column(Numeric(15, 2), nullable=False)
    income_tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    property_tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    holding_company = Column(Text)

    monthly_mortgage = Column(Numeric(15, 2))
    mortgage_interest_rate = Column(Numeric(5, 2))
    loan_balance = Column(Numeric(15, 2))
    bank_name = Column(Text)
    mortgage_mix = Column(JSON)

    partners = Column(JSON, nullable=False, default=list)
    owner_partner_id = Column(String(64))
    lease = Column(JSON)
    units = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("market_value >= 0", name="ck_property_market_value"),
        CheckConstraint("currency IN ('NIS', 'USD', 'EUR')", name="ck_property_currency"),
        Index("idx_properties_country", "country"),
    )

    def __repr__(self):
        return f"<PropertyRecord(id={self.id}, address='{self.address}', value={self.market_value} {self.currency})>"


class TransactionRecord(Base):
    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True)
    # Not enforced: orphaned transactions are valid input to the engine
    property_id = Column(String(64), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    transaction_type = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="")
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount"),
        CheckConstraint("transaction_type IN ('income', 'expense')", name="ck_transaction_type"),
        Index("idx_transactions_property_id", "property_id"),
        Index("idx_transactions_date", "date"),
    )

    def __repr__(self):
        return f"<TransactionRecord(id={self.id}, type='{self.transaction_type}', amount={self.amount})>"


class SettingRecord(Base):
    """Key-value user settings (exchange-rate table, provider API key)."""

    __tablename__ = "settings"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SettingRecord(key='{self.key}')>"
