"""API route modules."""

from reptrack.api.routes import rates, portfolio, tax, leases

__all__ = ["rates", "portfolio", "tax", "leases"]
