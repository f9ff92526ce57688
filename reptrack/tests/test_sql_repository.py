"""
Database repository tests using in-memory SQLite.

Run: python -m pytest reptrack/tests/test_sql_repository.py -v
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reptrack.core.constants import DEFAULT_RATES, ECurrency
from reptrack.core.fx import ExchangeRateStore
from reptrack.db.demo_data import demo_portfolio
from reptrack.db.models import Base
from reptrack.db.repositories import InMemoryPortfolioRepository, SqlPortfolioRepository, SqlSettingsBackend
from reptrack.utils.error_utils import OwnershipValidationError, RecordNotFoundError

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Test database setup
# ---------------------------------------------------------------------------


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def seeded_repo(session_factory):
    repo = SqlPortfolioRepository(session_factory)
    properties, transactions, companies = demo_portfolio(NOW)
    for company in companies:
        repo.add_company(company)
    for p in properties:
        repo.add_property(p)
    for t in transactions:
        repo.add_transaction(t)
    return repo


@pytest.fixture(params=["sql", "memory"])
def repo(request, seeded_repo):
    """The same contract checked against both portfolio repositories."""
    if request.param == "sql":
        return seeded_repo
    return InMemoryPortfolioRepository(*demo_portfolio(NOW))


# ---------------------------------------------------------------------------
# Portfolio repository contract
# ---------------------------------------------------------------------------


def test_properties_round_trip(repo):
    originals = {p.id: p.model_dump() for p in demo_portfolio(NOW)[0]}
    loaded = {p.id: p.model_dump() for p in repo.list_properties()}

    assert loaded == originals


def test_nested_records_survive(repo):
    split = repo.get_property("p3")

    assert split.is_split
    assert split.units[0].lease.tenant_name == "Tech Startup Ltd"
    assert split.units[0].lease.expiration_date.tzinfo is not None
    assert split.mortgage_mix.prime_percent == 34
    assert repo.get_property("p1").partners[0].has_access is True


def test_transactions_newest_first(repo):
    transactions = repo.list_transactions()

    assert [t.id for t in transactions] == ["t1", "t2", "t3", "t4", "t5", "t6"]
    assert all(t.date.tzinfo is not None for t in transactions)


def test_companies(repo):
    assert [c.name for c in repo.list_companies()] == ["Rothschild Holdings Ltd"]


def test_missing_property(repo):
    with pytest.raises(RecordNotFoundError):
        repo.get_property("nope")


def test_update_property(repo):
    p = repo.get_property("p2").model_copy(update={"market_value": 250000.0})

    repo.update_property(p)

    assert repo.get_property("p2").market_value == 250000


def test_update_unknown_property(repo):
    ghost = repo.get_property("p2").model_copy(update={"id": "ghost"})
    with pytest.raises(RecordNotFoundError):
        repo.update_property(ghost)


def test_add_property_rejects_over_allocation(repo):
    p = repo.get_property("p1")
    bad = p.model_copy(update={
        "id": "p9",
        "partners": [
            p.partners[0].model_copy(update={"percentage": 80}),
            p.partners[1],
        ],
    })

    with pytest.raises(OwnershipValidationError):
        repo.add_property(bad)
    assert len(repo.list_properties()) == 3


def test_delete_transaction(repo):
    assert repo.delete_transaction("t6") is True
    assert repo.delete_transaction("t6") is False
    assert "t6" not in [t.id for t in repo.list_transactions()]


def test_orphan_transaction_is_kept(repo):
    orphan = repo.list_transactions()[0].model_copy(update={"id": "t7", "property_id": "sold"})

    repo.add_transaction(orphan)

    assert "sold" in [t.property_id for t in repo.list_transactions()]


# ---------------------------------------------------------------------------
# Settings backend
# ---------------------------------------------------------------------------


def test_rates_persist_in_settings_table(session_factory):
    backend = SqlSettingsBackend(session_factory)
    ExchangeRateStore(backend).set_rate("USD", 3.6)

    assert ExchangeRateStore(backend).get_rate(ECurrency.USD) == 3.6


def test_reset_removes_settings_row(session_factory):
    backend = SqlSettingsBackend(session_factory)
    store = ExchangeRateStore(backend)
    store.set_rate("EUR", 4.4)
    store.set_rate("EUR", 4.3)

    store.reset_rates()

    assert ExchangeRateStore(backend).get_rates() == DEFAULT_RATES


def test_api_key_persists(session_factory):
    backend = SqlSettingsBackend(session_factory)
    ExchangeRateStore(backend).set_api_key("secret")

    assert ExchangeRateStore(backend).get_api_key() == "secret"
