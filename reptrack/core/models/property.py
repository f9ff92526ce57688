"""
Property records for REPTrack.

Immutable snapshots of the records the valuation engine reads. They are owned
by the persistence layer; the engine only ever receives them and never
mutates them.

Classes:
    Partner: Co-owner of a property
    Company: Holding company through which the user owns properties
    Lease: Tenant lease with a monthly rent in the property's currency
    PropertyUnit: Independently leased sub-division of a split property
    MortgageMix: Informational split of the mortgage tracks
    Property: Aggregate root
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from reptrack.core.constants import ECurrency, EPropertyType
from reptrack.utils.date_utils import to_utc


class RecordModel(BaseModel):
    """Base record with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
    )


class Partner(RecordModel):
    id: str
    name: str
    percentage: float = Field(..., description="Share of the property, 0-100")
    has_access: bool = False


class Company(RecordModel):
    id: str
    name: str
    user_ownership: float = Field(..., ge=0, le=100, description="User's share of the company, 0-100")


class Lease(RecordModel):
    expiration_date: datetime
    tenant_name: str
    monthly_rent: float = Field(..., ge=0)

    @field_validator("expiration_date", mode="before")
    @classmethod
    def _normalize_expiration(cls, v):
        return to_utc(v)


class PropertyUnit(RecordModel):
    id: str
    name: str
    size: Optional[float] = None
    lease: Optional[Lease] = None


class MortgageMix(RecordModel):
    fixed_percent: float = 0
    variable_percent: float = 0
    prime_percent: float = 0


class Property(RecordModel):
    """
    A real-estate holding.

    Monetary fields are in the property's own ``currency``; rates are
    percentages in the 0-100 range. A property is either simple (one optional
    ``lease``) or split into ``units`` that are leased independently.
    """

    id: str
    address: str = ""
    country: str
    type: EPropertyType = EPropertyType.RESIDENTIAL
    currency: ECurrency
    purchase_price: float = Field(0, ge=0)
    purchase_price_base: Optional[float] = Field(None, ge=0)
    market_value: float = Field(..., ge=0)
    income_tax_rate: float = 0
    property_tax_rate: float = 0

    holding_company: Optional[str] = None

    monthly_mortgage: Optional[float] = None
    mortgage_interest_rate: Optional[float] = None
    loan_balance: Optional[float] = None
    bank_name: Optional[str] = None
    mortgage_mix: Optional[MortgageMix] = None

    partners: List[Partner] = Field(default_factory=list)
    owner_partner_id: Optional[str] = None
    lease: Optional[Lease] = None
    units: List[PropertyUnit] = Field(default_factory=list)

    @field_validator("partners", "units", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or []

    @model_validator(mode="after")
    def _lease_or_units(self):
        if self.lease is not None and self.units:
            raise ValueError(f"Property {self.id} cannot have both a main lease and units")
        return self

    @property
    def is_split(self) -> bool:
        return bool(self.units)
