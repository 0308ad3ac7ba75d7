"""
Centralized, type-safe status definitions for the progress engine.

This module is the single source of truth for the closed value sets used
across the application:

- ``PathType``: the post-program trajectory an alumni record follows.
- ``TrackingStatus``: progress relative to the time-based expectation.
- ``MilestoneStatus``: per-milestone outcome reported by the funnel.

All Enums inherit from ``(str, Enum)`` so that members are directly
comparable to plain strings and serialize naturally to JSON at tool
boundaries.
"""

from enum import Enum


class PathType(str, Enum):
    """Enum for the path a record progresses along.

    ``UNDEFINED`` means no path has been chosen and disables progression.
    """

    COLLEGE = "college"
    WORK = "work"
    TRAINING = "training"
    MILITARY = "military"
    OTHER = "other"
    UNDEFINED = "undefined"


class TrackingStatus(str, Enum):
    """Enum for the overall tracking classification of a record."""

    ON_TRACK = "on-track"
    NEAR_TRACK = "near-track"
    OFF_TRACK = "off-track"
    UNKNOWN = "unknown"


class MilestoneStatus(str, Enum):
    """Enum for per-milestone outcomes.

    ``NOT_REACHED`` is the only value that does not count as "reached".
    """

    NOT_REACHED = "not-reached"
    ON_TRACK = "on-track"
    NEAR_TRACK = "near-track"
    OFF_TRACK = "off-track"


# Milestone outcomes counted as "successfully progressing" by the funnel
SUCCESS_STATUSES = {MilestoneStatus.ON_TRACK, MilestoneStatus.NEAR_TRACK}
