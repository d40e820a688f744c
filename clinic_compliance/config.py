"""Shared configuration for the clinic compliance service.

This module centralizes environment variable access and default values
to prevent drift between modules.
"""

import os

# Optional YAML file with severity weights, risk bands and disabled rules
COMPLIANCE_CONFIG_PATH = os.getenv("COMPLIANCE_CONFIG_PATH", "")

# Upload row limit (1 lakh rows), enforced at the HTTP boundary
MAX_UPLOAD_ROWS = int(os.getenv("MAX_UPLOAD_ROWS", "100000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Comma-separated list of allowed dashboard origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]
