"""
Stage catalog: per-path ordered stage lists.

The catalog is configuration, not logic. Callers build it in code or load
it from YAML (see ``utils.catalog_loader``) and pass it into every engine
call; the engine only reads it.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.status import PathType

# Default cohort reference date is June 1st (academic-year cutoff)
DEFAULT_REFERENCE_MONTH = 6


class PathCatalog(BaseModel):
    """Ordered progression for one path type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    stages: tuple[str, ...]
    employment_stage: Optional[str] = None

    @field_validator("stages")
    @classmethod
    def validate_stages(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("stage list cannot be empty")
        for stage in value:
            if not stage.strip():
                raise ValueError("stage identifiers cannot be empty")
        if len(set(value)) != len(value):
            raise ValueError("stage list contains duplicate identifiers")
        return value

    @model_validator(mode="after")
    def employment_stage_in_list(self) -> "PathCatalog":
        if self.employment_stage is not None and self.employment_stage not in self.stages:
            raise ValueError(
                f"employment_stage '{self.employment_stage}' is not one of the path's stages"
            )
        return self

    def index_of(self, stage: str) -> int:
        """Return the stage's position in this path, or -1 if absent."""
        try:
            return self.stages.index(stage)
        except ValueError:
            return -1

    @property
    def employment_stage_index(self) -> Optional[int]:
        if self.employment_stage is None:
            return None
        return self.stages.index(self.employment_stage)


class StageCatalog(BaseModel):
    """Mapping of every defined path type to its ordered stage list.

    ``reference_month`` is the month (1st day) of the cohort year from which
    elapsed whole years are counted for stage resolution.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    paths: dict[PathType, PathCatalog]
    reference_month: int = Field(default=DEFAULT_REFERENCE_MONTH, ge=1, le=12)

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, value: dict[PathType, PathCatalog]) -> dict[PathType, PathCatalog]:
        if PathType.UNDEFINED in value:
            raise ValueError("'undefined' path type cannot have a stage list")
        missing = [p.value for p in PathType if p != PathType.UNDEFINED and p not in value]
        if missing:
            raise ValueError(f"missing stage lists for path types: {', '.join(missing)}")
        return value

    def path(self, path_type: PathType) -> Optional[PathCatalog]:
        """Return the path's catalog, or None for ``undefined``."""
        return self.paths.get(path_type)

    def ordinal_elsewhere(self, stage: str, exclude: PathType) -> Optional[int]:
        """
        Find a stage's ordinal position in another path's catalog.

        Paths are searched in PathType declaration order so the answer is
        deterministic; the first path that defines the stage wins.

        Args:
            stage: Stage identifier to look up
            exclude: Path type to skip (the record's current path)

        Returns:
            Ordinal index in the first other path defining the stage, or None
        """
        for path_type in PathType:
            if path_type == exclude or path_type not in self.paths:
                continue
            index = self.paths[path_type].index_of(stage)
            if index >= 0:
                return index
        return None
