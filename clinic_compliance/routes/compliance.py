"""Compliance run, export and rule catalog routes.

The handlers are stateless: each request carries both uploads and gets a
fresh ``ComplianceResult``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query, Response

from clinic_compliance.rules import (
    ComplianceInputError,
    ComplianceResult,
    get_compliance_config,
    rule_catalog,
    run_compliance,
)
from clinic_compliance.schemas import ComplianceRunRequest
from clinic_compliance.utils import records_to_csv, violations_to_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/compliance", tags=["compliance"])


def _evaluate(request: ComplianceRunRequest) -> ComplianceResult:
    try:
        return run_compliance(
            request.billing_rows,
            request.doctor_rows,
            now=request.now,
            config=get_compliance_config(),
        )
    except ComplianceInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Compliance run failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Compliance run failed: {str(e)[:200]}"
        )


@router.post("/run")
async def run_compliance_check(request: ComplianceRunRequest):
    """Evaluate R1-R10 over a billing upload and its doctor roster.

    Returns violations, the risk score and level, the analysis view and
    summary aggregates.
    """
    return _evaluate(request).to_dict()


@router.post("/export")
async def export_compliance(
    request: ComplianceRunRequest,
    dataset: str = Query(default="violations", pattern="^(violations|analysis)$"),
):
    """Run the compliance check and download the result as CSV.

    ``dataset=violations`` (default) exports ``Dataset,Row,Rule,Severity,Reason``;
    ``dataset=analysis`` exports the joined analysis view.
    """
    result = _evaluate(request)
    if dataset == "analysis":
        content = records_to_csv(result.analysis_view)
    else:
        content = violations_to_csv(result.violations)

    filename = (
        f"compliance_{dataset}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.csv"
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/rules")
async def get_rule_catalog():
    """List every compliance rule with its severity and description."""
    rules = rule_catalog()
    return {"rules": rules, "total": len(rules)}
