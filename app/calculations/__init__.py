"""
ROI Calculation Engine

Pure calculation modules for rental property investment analysis.
"""

from app.calculations import amortization, roi

__all__ = ["amortization", "roi"]
