"""
Main MCP tool handler for cohort_status_breakdown.

Tallies tracking statuses per cohort year (the dashboard's cohort heat map).
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from engine.funnel_aggregator import cohort_breakdown
from models.errors import ToolError, create_internal_error
from schemas.cohort_status_breakdown import (
    CohortBreakdownItem,
    CohortStatusBreakdownRequest,
    CohortStatusBreakdownResponse,
)
from utils.catalog_loader import load_catalog_file
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.validation import resolve_reference_time

logger = logging.getLogger(__name__)


def cohort_status_breakdown(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Break down tracking statuses by cohort year, newest cohort first.

    Args:
        args: Dictionary containing parameters:
            - records (list): Alumni progress records
            - now (str, optional): ISO 8601 reference time (default: current UTC)
            - catalog_path (str, optional): Stage catalog YAML override

    Returns:
        Dictionary with structure:
        {
            "now": str,
            "cohorts": [
                {
                    "cohort_year": int,
                    "total": int,
                    "counts": {status: int},
                    "percentages": {status: int}   # Sums to 100
                }
            ]
        }

        On error, returns:
        {
            "error": {"code": str, "message": str, "retryable": bool}
        }
    """
    try:
        request = CohortStatusBreakdownRequest.model_validate(args)

        loaded = load_catalog_file(request.catalog_path)
        now = resolve_reference_time(request.now)

        cohorts = [
            CohortBreakdownItem(
                cohort_year=entry.cohort_year,
                total=entry.distribution.total,
                counts=entry.distribution.counts(),
                percentages=entry.distribution.percentages(),
            )
            for entry in cohort_breakdown(request.records, loaded.catalog, now)
        ]

        return CohortStatusBreakdownResponse(now=now.isoformat(), cohorts=cohorts).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        # Unexpected errors - wrap in INTERNAL_ERROR
        logger.exception("cohort_status_breakdown failed")
        internal_error = create_internal_error(message=str(e), original_error=e)
        return internal_error.to_dict()
