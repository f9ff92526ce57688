"""
Record models for REPTrack.

Immutable snapshots of properties, transactions and companies consumed by the
valuation engine.
"""

from reptrack.core.models.property import (
    RecordModel,
    Partner,
    Company,
    Lease,
    PropertyUnit,
    MortgageMix,
    Property,
)
from reptrack.core.models.transaction import Transaction

__all__ = [
    "RecordModel",
    "Partner",
    "Company",
    "Lease",
    "PropertyUnit",
    "MortgageMix",
    "Property",
    "Transaction",
]
