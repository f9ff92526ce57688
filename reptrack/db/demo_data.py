"""
Demo portfolio for REPTrack.

Three properties in three currencies, a holding company, and a handful of
transactions. Lease and transaction dates are relative to ``now`` so the
dashboard always has something to show.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from reptrack.core.models import Company, Property, Transaction
from reptrack.utils.date_utils import utc_now


def demo_companies() -> List[Company]:
    return [
        Company(id="c1", name="Rothschild Holdings Ltd", user_ownership=60),
    ]


def demo_properties(now: Optional[datetime] = None) -> List[Property]:
    now = now or utc_now()
    return [
        Property.model_validate({
            "id": "p1",
            "address": "123 Main St",
            "country": "USA",
            "type": "Residential",
            "currency": "USD",
            "purchase_price": 250000,
            "purchase_price_base": 850000,
            "market_value": 320000,
            "income_tax_rate": 25,
            "property_tax_rate": 1.2,
            "monthly_mortgage": 1200,
            "mortgage_interest_rate": 4.5,
            "loan_balance": 200000,
            "bank_name": "Chase Bank",
            "mortgage_mix": {"fixed_percent": 60, "variable_percent": 40, "prime_percent": 0},
            "partners": [
                {"id": "me", "name": "Me", "percentage": 50, "has_access": True},
                {"id": "john", "name": "John Doe", "percentage": 50, "has_access": False},
            ],
            "owner_partner_id": "me",
            "lease": {
                "expiration_date": now + timedelta(days=45),
                "tenant_name": "Alice Smith",
                "monthly_rent": 2000,
            },
        }),
        Property.model_validate({
            "id": "p2",
            "address": "45 High St",
            "country": "UK",
            "type": "Shop",
            "currency": "EUR",
            "purchase_price": 180000,
            "purchase_price_base": 700000,
            "market_value": 210000,
            "income_tax_rate": 40,
            "property_tax_rate": 0,
            "monthly_mortgage": 850,
            "mortgage_interest_rate": 3.8,
            "loan_balance": 140000,
            "bank_name": "HSBC",
            "mortgage_mix": {"fixed_percent": 100, "variable_percent": 0, "prime_percent": 0},
            "lease": {
                "expiration_date": now + timedelta(days=200),
                "tenant_name": "Bob Jones",
                "monthly_rent": 1400,
            },
        }),
        Property.model_validate({
            "id": "p3",
            "address": "77 Rothschild Blvd",
            "country": "Israel",
            "type": "Commercial",
            "currency": "NIS",
            "purchase_price": 1500000,
            "purchase_price_base": 1500000,
            "market_value": 1950000,
            "income_tax_rate": 30,
            "property_tax_rate": 2.5,
            "monthly_mortgage": 6500,
            "mortgage_interest_rate": 5.0,
            "loan_balance": 1200000,
            "bank_name": "Leumi",
            "mortgage_mix": {"fixed_percent": 33, "variable_percent": 33, "prime_percent": 34},
            "holding_company": "Rothschild Holdings Ltd",
            "units": [
                {
                    "id": "u1",
                    "name": "Floor 1",
                    "size": 220,
                    "lease": {
                        "expiration_date": now + timedelta(days=30),
                        "tenant_name": "Tech Startup Ltd",
                        "monthly_rent": 9000,
                    },
                },
                {"id": "u2", "name": "Floor 2", "size": 220},
            ],
        }),
    ]


def demo_transactions(now: Optional[datetime] = None) -> List[Transaction]:
    now = now or utc_now()

    def days_ago(days: int) -> datetime:
        return now - timedelta(days=days)

    return [
        Transaction(id="t1", property_id="p1", date=days_ago(2), amount=2000, type="income", category="Rent"),
        Transaction(id="t2", property_id="p1", date=days_ago(5), amount=150, type="expense", category="Maintenance"),
        Transaction(id="t3", property_id="p2", date=days_ago(10), amount=1400, type="income", category="Rent"),
        Transaction(id="t4", property_id="p3", date=days_ago(12), amount=9000, type="income", category="Rent"),
        Transaction(id="t5", property_id="p3", date=days_ago(15), amount=3500, type="expense", category="Mortgage"),
        Transaction(id="t6", property_id="p1", date=days_ago(45), amount=2000, type="income", category="Rent"),
    ]


def demo_portfolio(now: Optional[datetime] = None) -> Tuple[List[Property], List[Transaction], List[Company]]:
    now = now or utc_now()
    return demo_properties(now), demo_transactions(now), demo_companies()
