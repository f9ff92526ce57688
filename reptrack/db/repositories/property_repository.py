"""
Property repository for database operations on the properties table.

Also holds the row <-> record mapping used by the SQL portfolio repository.
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from reptrack.core.models import Property
from reptrack.db.models import PropertyRecord
from reptrack.db.repositories.base import BaseRepository


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def property_to_row(property: Property) -> Dict[str, Any]:
    """Column values for a property record."""
    data = property.model_dump(mode="json")
    return {
        "id": data["id"],
        "address": data["address"],
        "country": data["country"],
        "property_type": data["type"],
        "currency": data["currency"],
        "purchase_price": data["purchase_price"],
        "purchase_price_base": data["purchase_price_base"],
        "market_value": data["market_value"],
        "income_tax_rate": data["income_tax_rate"],
        "property_tax_rate": data["property_tax_rate"],
        "holding_company": data["holding_company"],
        "monthly_mortgage": data["monthly_mortgage"],
        "mortgage_interest_rate": data["mortgage_interest_rate"],
        "loan_balance": data["loan_balance"],
        "bank_name": data["bank_name"],
        "mortgage_mix": data["mortgage_mix"],
        "partners": data["partners"],
        "owner_partner_id": data["owner_partner_id"],
        "lease": data["lease"],
        "units": data["units"],
    }


def row_to_property(row: PropertyRecord) -> Property:
    return Property.model_validate({
        "id": row.id,
        "address": row.address or "",
        "country": row.country,
        "type": row.property_type,
        "currency": row.currency,
        "purchase_price": float(row.purchase_price or 0),
        "purchase_price_base": _optional_float(row.purchase_price_base),
        "market_value": float(row.market_value),
        "income_tax_rate": float(row.income_tax_rate or 0),
        "property_tax_rate": float(row.property_tax_rate or 0),
        "holding_company": row.holding_company,
        "monthly_mortgage": _optional_float(row.monthly_mortgage),
        "mortgage_interest_rate": _optional_float(row.mortgage_interest_rate),
        "loan_balance": _optional_float(row.loan_balance),
        "bank_name": row.bank_name,
        "mortgage_mix": row.mortgage_mix,
        "partners": row.partners or [],
        "owner_partner_id": row.owner_partner_id,
        "lease": row.lease,
        "units": row.units or [],
    })


class PropertyRepository(BaseRepository[PropertyRecord]):
    """Repository for PropertyRecord CRUD operations."""

    def __init__(self, session: Session):
        super().__init__(PropertyRecord, session)
