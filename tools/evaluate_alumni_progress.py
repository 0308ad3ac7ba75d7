"""
Main MCP tool handler for evaluate_alumni_progress.

Resolves each record's stage, classifies its tracking status, and derives
its per-milestone statuses. Read-only: whether to persist a recomputed
stage or status is left to the caller.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from engine.funnel_aggregator import evaluate_records
from models.errors import ToolError, create_internal_error
from schemas.evaluate_alumni_progress import (
    EvaluateAlumniProgressRequest,
    EvaluateAlumniProgressResponse,
    RecordProgressItem,
)
from utils.catalog_loader import load_catalog_file
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.validation import resolve_median_income, resolve_milestones, resolve_reference_time

logger = logging.getLogger(__name__)


def evaluate_alumni_progress(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate progress for a batch of alumni records.

    Args:
        args: Dictionary containing parameters:
            - records (list): Alumni progress records (snake_case or camelCase)
            - now (str, optional): ISO 8601 reference time (default: current UTC)
            - milestones (list, optional): Milestone sequence override
            - catalog_path (str, optional): Stage catalog YAML override
            - national_median_income (float, optional): Salary threshold override

    Returns:
        Dictionary with structure:
        {
            "now": str,
            "count": int,
            "records": [
                {
                    "index": int,                  # Position in the input list
                    "alumni_id": int|str|None,
                    "cohort_year": int,
                    "path_type": str,
                    "stage": str|None,
                    "stage_index": int,            # -1 for undefined path
                    "stage_clamped": bool,
                    "expected_stage_index": int,
                    "progress_percentage": float,  # 0..1
                    "tracking_status": str,
                    "stage_differs_from_stored": bool,
                    "status_differs_from_stored": bool,
                    "milestones": {name: status}
                }
            ]
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
        request = EvaluateAlumniProgressRequest.model_validate(args)

        loaded = load_catalog_file(request.catalog_path)
        milestones = resolve_milestones(request.milestones, loaded.milestones)
        now = resolve_reference_time(request.now)
        median = resolve_median_income(request.national_median_income)

        logger.debug(
            f"Evaluating {len(request.records)} records against {len(milestones)} milestones"
        )

        evaluated = evaluate_records(request.records, milestones, loaded.catalog, now, median)

        items = []
        for index, entry in enumerate(evaluated):
            progress = entry.progress
            items.append(
                RecordProgressItem(
                    index=index,
                    alumni_id=progress.alumni_id,
                    cohort_year=progress.cohort_year,
                    path_type=progress.resolved.path_type.value,
                    stage=progress.resolved.stage,
                    stage_index=progress.resolved.stage_index,
                    stage_clamped=progress.resolved.clamped,
                    expected_stage_index=progress.expected_stage_index,
                    progress_percentage=progress.progress_percentage,
                    tracking_status=progress.tracking_status.value,
                    stage_differs_from_stored=progress.stage_differs_from_stored,
                    status_differs_from_stored=progress.status_differs_from_stored,
                    milestones={
                        milestone.name: status.value
                        for milestone, status in zip(milestones, entry.statuses)
                    },
                )
            )

        return EvaluateAlumniProgressResponse(
            now=now.isoformat(),
            count=len(items),
            records=items,
        ).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        # Unexpected errors - wrap in INTERNAL_ERROR
        logger.exception("evaluate_alumni_progress failed")
        internal_error = create_internal_error(message=str(e), original_error=e)
        return internal_error.to_dict()
