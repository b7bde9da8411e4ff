"""
Exceptions raised by the Databricks REST toolkit.
"""

from typing import Sequence

from tabulate import tabulate


class DatabricksRestError(Exception):
    """Base class for toolkit errors."""


class JobNotFoundError(DatabricksRestError):
    """No job in the workspace carries the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'No job with name "{name}" found. Please try a different name.'
        )


class AmbiguousJobNameError(DatabricksRestError):
    """More than one job in the workspace carries the requested name."""

    def __init__(self, name: str, candidates: Sequence):
        self.name = name
        self.candidates = tuple(candidates)

        rows = [
            [job.job_id, job.name, job.created_time, job.creator]
            for job in self.candidates
        ]
        table = tabulate(rows, headers=["job_id", "name", "created_time", "creator"],
                         tablefmt="psql")

        super().__init__(
            f'Found multiple jobs with name "{name}":\n{table}\n'
            "Please use a job ID or give the job a unique name."
        )
