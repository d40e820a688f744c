"""FastAPI backend for the clinic compliance dashboard."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic_compliance import __version__
from clinic_compliance.config import CORS_ORIGINS, LOG_LEVEL
from clinic_compliance.routes import analytics_router, compliance_router
from clinic_compliance.rules import RULE_IDS

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clinic Compliance",
    description="Cross-dataset compliance checks and analytics for outpatient billing uploads",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(compliance_router)
app.include_router(analytics_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rules": len(RULE_IDS),
    }
