"""API route modules for the clinic compliance service.

Routers:
- compliance: compliance runs, CSV export and the rule catalog
- analytics: monthly series, forecasts, anomalies and top-N groupings
"""

from .analytics import router as analytics_router
from .compliance import router as compliance_router

__all__ = ["analytics_router", "compliance_router"]
