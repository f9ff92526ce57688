"""
Lease expiry API endpoint.
"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from reptrack.api.dependencies import get_app_config, get_as_of, get_repository
from reptrack.api.schemas import ExpiringLeaseResponse
from reptrack.config import AppConfig
from reptrack.core.engine import expiring_leases
from reptrack.db.repositories import PortfolioRepository


router = APIRouter()


@router.get("/expiring", response_model=List[ExpiringLeaseResponse])
def list_expiring_leases(
    threshold_days: Optional[int] = Query(None, ge=0),
    repo: PortfolioRepository = Depends(get_repository),
    config: AppConfig = Depends(get_app_config),
    as_of: datetime = Depends(get_as_of),
):
    if threshold_days is None:
        threshold_days = config.lease_alert_days
    return [asdict(lease) for lease in expiring_leases(repo.list_properties(), as_of, threshold_days)]
