"""
Main MCP tool handler for list_attrition_members.

Drill-down companion to compute_cohort_funnel: lists the eligible records
counted as dropouts at one transition.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from engine.funnel_aggregator import attrition_members, transition_name
from models.errors import ToolError, create_internal_error
from schemas.list_attrition_members import (
    AttritionMember,
    ListAttritionMembersRequest,
    ListAttritionMembersResponse,
)
from utils.catalog_loader import load_catalog_file
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.validation import (
    filter_by_cohort,
    resolve_median_income,
    resolve_milestones,
    resolve_reference_time,
    resolve_transition_index,
)

logger = logging.getLogger(__name__)


def list_attrition_members(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    List records that dropped out at a funnel transition.

    Args:
        args: Dictionary containing parameters:
            - records (list): Alumni progress records
            - transition (str): "<from>-><to>" or the source milestone name
            - cohort_year (int, optional): Restrict to one cohort year
            - now (str, optional): ISO 8601 reference time (default: current UTC)
            - milestones (list, optional): Milestone sequence override
            - catalog_path (str, optional): Stage catalog YAML override
            - national_median_income (float, optional): Salary threshold override

    Returns:
        Dictionary with structure:
        {
            "now": str,
            "transition": str,
            "years_required": int,
            "count": int,
            "members": [{"index": int, "alumni_id": int|str|None, "cohort_year": int}]
        }

        ``index`` is the record's position in the (cohort-filtered) input list.

        On error, returns:
        {
            "error": {"code": str, "message": str, "retryable": bool}
        }
    """
    try:
        request = ListAttritionMembersRequest.model_validate(args)

        loaded = load_catalog_file(request.catalog_path)
        milestones = resolve_milestones(request.milestones, loaded.milestones)
        transition_index = resolve_transition_index(milestones, request.transition)
        now = resolve_reference_time(request.now)
        median = resolve_median_income(request.national_median_income)
        records = filter_by_cohort(request.records, request.cohort_year)

        members = [
            AttritionMember(index=index, alumni_id=record.alumni_id, cohort_year=record.cohort_year)
            for index, record in attrition_members(
                records, milestones, transition_index, loaded.catalog, now, median
            )
        ]

        return ListAttritionMembersResponse(
            now=now.isoformat(),
            transition=transition_name(
                milestones[transition_index], milestones[transition_index + 1]
            ),
            years_required=milestones[transition_index + 1].years_required,
            count=len(members),
            members=members,
        ).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        # Unexpected errors - wrap in INTERNAL_ERROR
        logger.exception("list_attrition_members failed")
        internal_error = create_internal_error(message=str(e), original_error=e)
        return internal_error.to_dict()
