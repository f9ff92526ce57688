"""
Ownership resolution for REPTrack.

Works out the user's effective stake in a property, from the partner list or
from a holding company.
"""

import logging
from typing import Iterable, Optional

from reptrack.core.models import Company, Property
from reptrack.utils.error_utils import OwnershipValidationError

logger = logging.getLogger(__name__)

SOLE_OWNERSHIP_PCT = 100.0


def find_my_partner(property: Property, acting_partner_id: Optional[str] = None):
    """
    Partner record that represents the user, or None.

    An explicit id (passed in, or ``owner_partner_id`` on the property) is
    preferred; otherwise the first partner flagged ``has_access`` is used.
    """
    explicit_id = acting_partner_id or property.owner_partner_id
    if explicit_id:
        for partner in property.partners:
            if partner.id == explicit_id:
                return partner
        logger.debug(f"Partner {explicit_id} not found on property {property.id}")

    for partner in property.partners:
        if partner.has_access:
            return partner
    return None


def resolve_my_share(
    property: Property,
    companies: Iterable[Company] = (),
    acting_partner_id: Optional[str] = None,
) -> float:
    """
    User's effective percentage (0-100) in ``property``.

    Precedence: the user's partner record, then (only when the property has
    no partners) the holding company's ``user_ownership``, then sole
    ownership. The value is returned as recorded; it is never clamped.

    Examples:
        partner "me" at 40% and holding company at 70%  -> 40
        no partners, holding company at 70%              -> 70
        no partners, no company                          -> 100
    """
    partner = find_my_partner(property, acting_partner_id)
    if partner is not None:
        return partner.percentage

    if not property.partners and property.holding_company:
        for company in companies:
            if company.name == property.holding_company:
                return company.user_ownership

    return SOLE_OWNERSHIP_PCT


def validate_ownership(property: Property) -> None:
    """
    Reject partner percentages that cannot be right.

    Called by repositories at data-entry time.

    Raises:
        OwnershipValidationError: If a percentage is outside 0-100 or the
            partner percentages add up to more than 100
    """
    for partner in property.partners:
        if not 0 <= partner.percentage <= 100:
            raise OwnershipValidationError(
                f"Partner '{partner.name}' has invalid ownership {partner.percentage}%",
                {"property_id": property.id, "partner_id": partner.id},
            )

    total = sum(partner.percentage for partner in property.partners)
    if total > 100:
        raise OwnershipValidationError(
            f"Total ownership cannot exceed 100% (currently: {total:g}%)",
            {"property_id": property.id, "total": total},
        )
