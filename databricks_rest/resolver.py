"""
Name-to-ID resolution for Databricks jobs.

Job names are not unique in a workspace, so every operation that lets the
caller address a job by name goes through :func:`resolve`. The resolver only
answers the question "which single job does this name denote?"; fetching the
job directory and deciding what to do with a missing or ambiguous name is
left to the caller.
"""

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from databricks_rest.utils import epoch_millis_to_datetime


@dataclass(frozen=True)
class JobSummary:
    """One entry of a job directory."""

    job_id: int
    name: str
    created_time: Optional[datetime.datetime] = None
    creator: Optional[str] = None

    @classmethod
    def from_api(cls, job: Dict[str, Any]) -> "JobSummary":
        """
        Build a summary from an element of the ``2.0/jobs/list`` response.

        Args:
            job: Job object as returned by the Jobs API

        Returns:
            JobSummary with the creation time converted to a UTC datetime
        """
        created = job.get("created_time")
        return cls(
            job_id=int(job["job_id"]),
            name=job.get("settings", {}).get("name", ""),
            created_time=epoch_millis_to_datetime(created) if created is not None else None,
            creator=job.get("creator_user_name"),
        )


@dataclass(frozen=True)
class Found:
    job_id: int


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Ambiguous:
    candidates: Tuple[JobSummary, ...]


ResolutionResult = Union[Found, NotFound, Ambiguous]


def resolve(name: str, directory: Iterable[JobSummary]) -> ResolutionResult:
    """
    Resolve a job name to a single job ID.

    Matching is literal, case-sensitive equality on the whole name. The
    directory is scanned once and every match is kept in directory order.

    Args:
        name: Job name to look up, must be non-empty
        directory: Snapshot of the workspace's jobs

    Returns:
        Found with the job ID when exactly one job matches, NotFound when none
        does, Ambiguous with every matching job when more than one does
    """
    if not isinstance(name, str) or not name:
        raise ValueError("Job name must be a non-empty string")

    matches = tuple(job for job in directory if job.name == name)

    if not matches:
        return NotFound()
    if len(matches) == 1:
        return Found(matches[0].job_id)
    return Ambiguous(matches)
