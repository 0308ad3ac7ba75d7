"""
Main MCP tool handler for compute_cohort_funnel.

Aggregates a population of alumni records into a success funnel, a
cohort-eligibility windowed attrition funnel, and an overall tracking
status distribution.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from engine.funnel_aggregator import aggregate_funnel
from models.errors import ToolError, create_internal_error
from schemas.compute_cohort_funnel import ComputeCohortFunnelRequest, ComputeCohortFunnelResponse
from utils.catalog_loader import load_catalog_file
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.validation import (
    filter_by_cohort,
    resolve_median_income,
    resolve_milestones,
    resolve_reference_time,
)

logger = logging.getLogger(__name__)


def compute_cohort_funnel(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compute success/attrition funnels for a population of alumni records.

    Args:
        args: Dictionary containing parameters:
            - records (list): Alumni progress records
            - cohort_year (int, optional): Restrict to one cohort year
            - now (str, optional): ISO 8601 reference time (default: current UTC)
            - milestones (list, optional): Milestone sequence override
            - catalog_path (str, optional): Stage catalog YAML override
            - national_median_income (float, optional): Salary threshold override

    Returns:
        Dictionary with structure:
        {
            "now": str,
            "cohort_year": int|None,
            "total_records": int,
            "never_started": int,           # Records not successfully at the first milestone
            "success": [{"milestone": str, "count": int}],
            "attrition": [
                {
                    "transition": str,      # "<from>-><to>"
                    "from_milestone": str,
                    "to_milestone": str,
                    "years_required": int,
                    "eligible_count": int,
                    "reached_count": int,
                    "advanced_count": int,
                    "dropped_count": int,   # Never negative
                    "negative_clamped": bool
                }
            ],
            "distribution": {status: int},
            "distribution_percentages": {status: int},  # Sums to 100 when non-empty
            "warnings": [str]
        }

        On error, returns:
        {
            "error": {
                "code": str,         # VALIDATION_ERROR, FILE_NOT_FOUND, CATALOG_ERROR, INTERNAL_ERROR
                "message": str,
                "retryable": bool
            }
        }
    """
    try:
        request = ComputeCohortFunnelRequest.model_validate(args)

        loaded = load_catalog_file(request.catalog_path)
        milestones = resolve_milestones(request.milestones, loaded.milestones)
        now = resolve_reference_time(request.now)
        median = resolve_median_income(request.national_median_income)
        records = filter_by_cohort(request.records, request.cohort_year)

        result = aggregate_funnel(records, milestones, loaded.catalog, now, median)

        # Negative dropout signals inconsistent manual overrides; it is
        # floored to zero by the engine and surfaced here.
        warnings = []
        for step in result.attrition:
            if step.negative_clamped:
                message = (
                    f"Transition '{step.transition}': {step.advanced_count} eligible records "
                    f"reached '{step.to_milestone}' but only {step.reached_count} reached "
                    f"'{step.from_milestone}'; dropout floored to 0"
                )
                logger.warning(message)
                warnings.append(message)

        return ComputeCohortFunnelResponse(
            now=now.isoformat(),
            cohort_year=request.cohort_year,
            total_records=result.total_records,
            never_started=result.never_started,
            success=result.success,
            attrition=result.attrition,
            distribution=result.distribution.counts(),
            distribution_percentages=result.distribution.percentages(),
            warnings=warnings,
        ).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        # Unexpected errors - wrap in INTERNAL_ERROR
        logger.exception("compute_cohort_funnel failed")
        internal_error = create_internal_error(message=str(e), original_error=e)
        return internal_error.to_dict()
