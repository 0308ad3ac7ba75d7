#!/usr/bin/env python3
"""
MCP Server entry point for the GradRadar progress engine.

This server exposes the alumni Progress State Engine (stage resolution,
tracking-status classification, milestone statuses and cohort funnels) as
read-only MCP tools. Callers supply alumni records; nothing is persisted.

The server uses the FastMCP framework to expose the tools to LLM agents
via the Model Context Protocol.

Usage:
    python server.py

The server runs in stdio mode by default, which is the standard transport
for MCP servers that are invoked by LLM agents.
"""

import logging

from mcp.server.fastmcp import FastMCP

from config import get_config
from tools.cohort_status_breakdown import cohort_status_breakdown
from tools.compute_cohort_funnel import compute_cohort_funnel
from tools.evaluate_alumni_progress import evaluate_alumni_progress
from tools.list_attrition_members import list_attrition_members

# Create FastMCP server instance
config = get_config()
mcp = FastMCP(
    name=config.server_name,
    instructions=(
        "This server computes alumni progress analytics from records supplied by the caller. "
        "All tools are read-only: they never store records or recomputed values."
        "\n\n"
        "Use evaluate_alumni_progress to resolve each record's current stage, its tracking status "
        "(on-track, near-track, off-track, unknown) and per-milestone statuses. "
        "Use compute_cohort_funnel to aggregate records into a success funnel, an attrition funnel "
        "that only counts cohorts old enough to have reached each milestone, and a tracking status "
        "distribution. "
        "Use list_attrition_members to list the records counted as dropouts at one funnel transition. "
        "Use cohort_status_breakdown to compare tracking status distributions across cohort years."
    ),
)


def _engine_args(records: list[dict], **optional) -> dict:
    """Build a tool args dict, dropping parameters the caller left unset."""
    args = {"records": records}
    for key, value in optional.items():
        if value is not None:
            args[key] = value
    return args


@mcp.tool(
    name="evaluate_alumni_progress",
    description=(
        "Resolve stage, tracking status, progress percentage and milestone statuses "
        "for a batch of alumni records."
    ),
)
def evaluate_alumni_progress_tool(
    records: list[dict],
    now: str | None = None,
    milestones: list[dict] | None = None,
    catalog_path: str | None = None,
    national_median_income: float | None = None,
) -> dict:
    """
    Evaluate progress for a batch of alumni records.

    Args:
        records: Alumni records with cohortYear, pathType, storedStage, stageManuallySet,
            storedTrackingStatus, trackingStatusManuallySet, employed, currentIncome,
            incomeLiberationOverride, incomeConsentGiven (snake_case also accepted).
        now: ISO 8601 reference time (default: current UTC time).
        milestones: Milestone sequence override (default: catalog milestones).
        catalog_path: Stage catalog YAML path (default: data/stage_catalog.yaml).
        national_median_income: Salary threshold (default: configured median).

    Returns:
        Dictionary with per-record snapshots, or an error object
        {"error": {"code", "message", "retryable"}}.
    """
    return evaluate_alumni_progress(
        _engine_args(
            records,
            now=now,
            milestones=milestones,
            catalog_path=catalog_path,
            national_median_income=national_median_income,
        )
    )


@mcp.tool(
    name="compute_cohort_funnel",
    description=(
        "Aggregate alumni records into success and cohort-windowed attrition funnels "
        "plus a tracking status distribution."
    ),
)
def compute_cohort_funnel_tool(
    records: list[dict],
    cohort_year: int | None = None,
    now: str | None = None,
    milestones: list[dict] | None = None,
    catalog_path: str | None = None,
    national_median_income: float | None = None,
) -> dict:
    """
    Compute success/attrition funnels.

    Args:
        records: Alumni records (see evaluate_alumni_progress).
        cohort_year: Restrict to one cohort year (default: all records).
        now: ISO 8601 reference time (default: current UTC time).
        milestones: Milestone sequence override (default: catalog milestones).
        catalog_path: Stage catalog YAML path (default: data/stage_catalog.yaml).
        national_median_income: Salary threshold (default: configured median).

    Returns:
        Dictionary with success, attrition, distribution and warnings, or an
        error object.
    """
    return compute_cohort_funnel(
        _engine_args(
            records,
            cohort_year=cohort_year,
            now=now,
            milestones=milestones,
            catalog_path=catalog_path,
            national_median_income=national_median_income,
        )
    )


@mcp.tool(
    name="list_attrition_members",
    description="List the alumni records counted as dropouts at one funnel transition.",
)
def list_attrition_members_tool(
    records: list[dict],
    transition: str,
    cohort_year: int | None = None,
    now: str | None = None,
    milestones: list[dict] | None = None,
    catalog_path: str | None = None,
    national_median_income: float | None = None,
) -> dict:
    """
    List dropouts at a transition.

    Args:
        records: Alumni records (see evaluate_alumni_progress).
        transition: "<from>-><to>" (e.g. "year1->year2") or the source milestone name.
        cohort_year: Restrict to one cohort year (default: all records).
        now: ISO 8601 reference time (default: current UTC time).
        milestones: Milestone sequence override (default: catalog milestones).
        catalog_path: Stage catalog YAML path (default: data/stage_catalog.yaml).
        national_median_income: Salary threshold (default: configured median).

    Returns:
        Dictionary with the dropped records' positions and ids, or an error object.
    """
    return list_attrition_members(
        _engine_args(
            records,
            transition=transition,
            cohort_year=cohort_year,
            now=now,
            milestones=milestones,
            catalog_path=catalog_path,
            national_median_income=national_median_income,
        )
    )


@mcp.tool(
    name="cohort_status_breakdown",
    description="Tally tracking statuses per cohort year with percentages.",
)
def cohort_status_breakdown_tool(
    records: list[dict],
    now: str | None = None,
    catalog_path: str | None = None,
) -> dict:
    """
    Break down tracking statuses by cohort year.

    Args:
        records: Alumni records (see evaluate_alumni_progress).
        now: ISO 8601 reference time (default: current UTC time).
        catalog_path: Stage catalog YAML path (default: data/stage_catalog.yaml).

    Returns:
        Dictionary with per-cohort counts and percentages, or an error object.
    """
    return cohort_status_breakdown(_engine_args(records, now=now, catalog_path=catalog_path))


def main():
    """
    Main entry point for the MCP server.

    Runs the server in stdio mode, which is the standard transport
    for MCP servers that are invoked by LLM agents.
    """
    # Load and setup configuration
    config.setup_logging()

    # Log startup information
    logger = logging.getLogger(__name__)
    logger.info("Starting GradRadar progress MCP Server")
    logger.info(f"Server name: {config.server_name}")
    logger.info(f"National median income: {config.national_median_income}")

    # Validate configuration and log warnings
    warnings = config.validate()
    for warning in warnings:
        logger.warning(warning)

    # Start the server
    logger.info("Server starting in stdio mode")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
