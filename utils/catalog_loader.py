"""
Stage catalog loader for the progress engine tools.

This module reads the YAML stage catalog (per-path stage lists, the cohort
reference month, and the default funnel milestone sequence) and validates
it into engine value types. The engine itself never touches files.

Expected document shape:

    reference_month: 6
    paths:
      college:
        stages: [yr1-enrolled, yr2, ...]
        employment_stage: employed
      ...
    milestones:
      - {name: year1, kind: stage, stage: yr1-enrolled, years_required: 0}
      - {name: employment, kind: employment, years_required: 5}
      ...

``milestones`` may be omitted; tools that need a funnel then require one in
the request.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

import yaml
from pydantic import ValidationError

from models.catalog import StageCatalog
from models.errors import create_catalog_error, create_file_not_found_error
from models.milestone import MilestoneDefinition, milestone_list_adapter, validate_milestone_sequence
from utils.path_resolution import resolve_catalog_path
from utils.pydantic_error_mapper import describe_validation_error


class LoadedCatalog(NamedTuple):
    """Stage catalog plus the default milestone sequence that ships with it."""

    catalog: StageCatalog
    milestones: list[MilestoneDefinition]


def parse_catalog_document(data: Dict[str, Any]) -> LoadedCatalog:
    """
    Validate a parsed catalog document.

    Args:
        data: Mapping parsed from YAML

    Returns:
        LoadedCatalog with a validated catalog and milestone sequence;
        the sequence is empty when the document defines none

    Raises:
        ToolError: With CATALOG_ERROR code if the document is invalid
    """
    if not isinstance(data, dict):
        raise create_catalog_error("document must be a mapping")

    catalog_fields = {key: value for key, value in data.items() if key != "milestones"}
    try:
        catalog = StageCatalog.model_validate(catalog_fields)
        milestones = milestone_list_adapter.validate_python(data.get("milestones") or [])
    except ValidationError as e:
        raise create_catalog_error(describe_validation_error(e), original_error=e) from e

    if milestones:
        try:
            validate_milestone_sequence(milestones)
        except ValueError as e:
            raise create_catalog_error(str(e), original_error=e) from e

    return LoadedCatalog(catalog=catalog, milestones=milestones)


def load_catalog_file(catalog_path: Optional[str] = None) -> LoadedCatalog:
    """
    Load and validate the stage catalog YAML file.

    Args:
        catalog_path: Optional path override (absolute or repo-relative);
            defaults to the configured catalog

    Returns:
        LoadedCatalog

    Raises:
        ToolError: FILE_NOT_FOUND if the file is missing, CATALOG_ERROR if it
            cannot be parsed or fails validation
    """
    path: Path = resolve_catalog_path(catalog_path)
    if not path.is_file():
        raise create_file_not_found_error(str(path), "Stage catalog")

    try:
        content = path.read_text(encoding="utf-8")
    except (IOError, OSError) as e:
        raise create_catalog_error(f"cannot read {path.name}: {e}", original_error=e) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise create_catalog_error(f"malformed YAML in {path.name}: {e}", original_error=e) from e

    return parse_catalog_document(data)
