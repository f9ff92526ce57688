"""
REPTrack - Real-Estate Portfolio Tracker

Multi-currency valuation and tax estimation for a personal property
portfolio:
- Exchange-rate table with live refresh and keyless fallback
- Equity, cap rate and country allocation in any display currency
- Estimated tax per property and across the portfolio
- Lease expiry alerts
"""

__version__ = "1.0.0"
__author__ = "REPTrack Contributors"
