"""
Lease expiry alerts for REPTrack.

Scans main leases and unit leases and lists the ones ending soon. "Now" is an
explicit argument so the scan is reproducible.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from reptrack.core.constants import ECurrency, LEASE_ALERT_THRESHOLD_DAYS
from reptrack.core.models import Lease, Property
from reptrack.utils.date_utils import DateInput, days_until
from reptrack.utils.error_utils import error_handler


@dataclass
class ExpiringLease:
    property_id: str
    address: str
    tenant_name: str
    expiry_date: datetime
    days_remaining: int
    monthly_rent: float
    currency: ECurrency
    unit_name: Optional[str] = None


def _check(
    property: Property,
    lease: Optional[Lease],
    as_of: DateInput,
    threshold_days: int,
    unit_name: Optional[str] = None,
) -> Optional[ExpiringLease]:
    if lease is None:
        return None
    remaining = days_until(lease.expiration_date, as_of)
    # already-expired leases are not surfaced as overdue
    if not 0 <= remaining <= threshold_days:
        return None
    return ExpiringLease(
        property_id=property.id,
        address=property.address,
        tenant_name=lease.tenant_name,
        expiry_date=lease.expiration_date,
        days_remaining=remaining,
        monthly_rent=lease.monthly_rent,
        currency=property.currency,
        unit_name=unit_name,
    )


@error_handler
def expiring_leases(
    properties: Iterable[Property],
    as_of: DateInput,
    threshold_days: int = LEASE_ALERT_THRESHOLD_DAYS,
) -> List[ExpiringLease]:
    """
    Leases ending within ``threshold_days`` of ``as_of``, soonest first.

    ``days_remaining`` is rounded up to whole days. A lease ending exactly
    ``threshold_days`` out is included; one that already ended is not. Ties
    keep input order.
    """
    found = []
    for p in properties:
        main = _check(p, p.lease, as_of, threshold_days)
        if main is not None:
            found.append(main)
        for unit in p.units:
            hit = _check(p, unit.lease, as_of, threshold_days, unit_name=unit.name)
            if hit is not None:
                found.append(hit)

    return sorted(found, key=lambda lease: lease.days_remaining)
