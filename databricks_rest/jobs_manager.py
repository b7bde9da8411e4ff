"""
Job and run management through the Databricks Jobs API.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from databricks_rest.errors import AmbiguousJobNameError, JobNotFoundError
from databricks_rest.resolver import Ambiguous, Found, JobSummary, resolve
from databricks_rest.utils import load_json_config

logger = logging.getLogger("databricks-rest.jobs_manager")

DEFAULT_SPARK_VERSION = "7.3.x-scala2.12"
DEFAULT_NODE_TYPE = "i3.xlarge"
DEFAULT_NUM_WORKERS = 2
MAX_RUNS_LIMIT = 150


class JobsManager:
    """Creates, runs, resets and deletes jobs, addressed by ID or by name."""

    def __init__(self, api_client, workspace_manager=None):
        """
        Initialize the jobs manager.

        Args:
            api_client: Instance of DatabricksApiClient for making API requests
            workspace_manager: Instance of WorkspaceManager, needed only to
                import local files when creating jobs
        """
        self.api_client = api_client
        self.workspace_manager = workspace_manager

    def list_jobs(self) -> List[Dict]:
        """Get the raw job objects defined in the workspace."""
        jobs = self.api_client.get_job_list()
        logger.info(f"Number of jobs: {len(jobs)}")
        return jobs

    def fetch_all_jobs(self) -> List[JobSummary]:
        """
        Fetch the job directory of the workspace.

        Returns:
            Job summaries in the order returned by the API, without
            duplicate job IDs
        """
        directory = []
        seen = set()
        for job in self.api_client.get_job_list():
            summary = JobSummary.from_api(job)
            if summary.job_id in seen:
                continue
            seen.add(summary.job_id)
            directory.append(summary)
        return directory

    @staticmethod
    def jobs_to_dataframe(directory: Sequence[JobSummary]) -> pd.DataFrame:
        """Tidy view of a job directory: ID, name, creation time and creator."""
        return pd.DataFrame(
            [[job.job_id, job.name, job.created_time, job.creator] for job in directory],
            columns=["job_id", "name", "created_time", "creator"],
        )

    def resolve_job_id(self, name: str) -> int:
        """
        Find the ID of the only job called ``name``.

        Raises:
            JobNotFoundError: if no job has that name
            AmbiguousJobNameError: if several jobs share that name
        """
        result = resolve(name, self.fetch_all_jobs())

        if isinstance(result, Found):
            logger.info(f'Job "{name}" found with ID {result.job_id}.')
            return result.job_id
        if isinstance(result, Ambiguous):
            raise AmbiguousJobNameError(name, result.candidates)
        raise JobNotFoundError(name)

    def _job_id(self, job_id: Optional[int], name: Optional[str]) -> int:
        if name is not None:
            return self.resolve_job_id(name)
        if job_id is None:
            raise ValueError("Either job_id or name must be given")
        return job_id

    def create_job(self, name: str = "Python Job", notebook_path: Optional[str] = None,
                   job_config: Union[str, Dict] = "default", file: Optional[str] = None,
                   overwrite: bool = False) -> int:
        """
        Create a new job.

        Args:
            name: Name of the job, used by the default configuration
            notebook_path: Workspace path of the notebook to run
            job_config: "default" for a small notebook job, or a dict, JSON
                string or JSON file with the full job settings
            file: Local file to import to ``notebook_path`` first
            overwrite: Overwrite an existing notebook when importing

        Returns:
            ID of the new job
        """
        if file is not None:
            if self.workspace_manager is None:
                raise ValueError("A workspace manager is required to import files")
            if notebook_path is None:
                raise ValueError("notebook_path is required to import a file")
            self.workspace_manager.import_file(file, notebook_path, overwrite=overwrite)

        if job_config == "default":
            if notebook_path is None:
                raise ValueError("notebook_path is required for the default job configuration")
            settings = {
                "name": name,
                "new_cluster": {
                    "spark_version": DEFAULT_SPARK_VERSION,
                    "node_type_id": DEFAULT_NODE_TYPE,
                    "num_workers": DEFAULT_NUM_WORKERS,
                },
                "email_notifications": {
                    "on_start": [],
                    "on_success": [],
                    "on_failure": [],
                },
                "notebook_task": {"notebook_path": notebook_path},
            }
        else:
            settings = load_json_config(job_config)

        response = self.api_client.make_api_request("post", "2.0/jobs/create", data=settings,
                                                    error_message=f'Failed to create job "{name}"')
        job_id = response["job_id"]
        logger.info(f'Job "{settings.get("name", name)}" created with ID {job_id}.')
        return job_id

    def reset_job(self, new_config: Union[str, Dict], job_id: Optional[int] = None,
                  name: Optional[str] = None) -> Dict:
        """
        Overwrite the settings of an existing job.

        Args:
            new_config: Dict, JSON string or JSON file holding ``new_settings``
            job_id: ID of the job to reset
            name: Name of the job to reset, resolved to a unique ID

        Returns:
            API response
        """
        target_id = self._job_id(job_id, name)

        config = load_json_config(new_config)
        config["job_id"] = target_id
        if name is not None:
            # Keep the name in the new settings consistent with the one used to find the job
            config.setdefault("new_settings", {})["name"] = name

        response = self.api_client.make_api_request("post", "2.0/jobs/reset", data=config,
                                                    error_message=f"Failed to reset job {target_id}")
        logger.info(f"Job {target_id} settings updated.")
        return response

    def delete_job(self, job_id: Optional[int] = None, name: Optional[str] = None) -> Dict:
        """
        Delete a job. Active runs of the job are terminated asynchronously.

        Args:
            job_id: ID of the job to delete
            name: Name of the job to delete, resolved to a unique ID

        Returns:
            API response
        """
        target_id = self._job_id(job_id, name)
        response = self.api_client.make_api_request("post", "2.0/jobs/delete",
                                                    data={"job_id": target_id},
                                                    error_message=f"Failed to delete job {target_id}")
        logger.info(f"Job {target_id} has been deleted.")
        return response

    def run_job(self, job_id: Optional[int] = None, name: Optional[str] = None,
                notebook_params: Optional[Dict[str, str]] = None) -> Dict:
        """Trigger a run of a job now. The response carries the new ``run_id``."""
        target_id = self._job_id(job_id, name)

        payload: Dict[str, Any] = {"job_id": target_id}
        if notebook_params:
            payload["notebook_params"] = notebook_params

        response = self.api_client.make_api_request("post", "2.0/jobs/run-now", data=payload,
                                                    error_message=f"Failed to run job {target_id}")
        logger.info(f"Run {response.get('run_id')} launched for job {target_id}.")
        return response

    def list_runs(self, job_id: Optional[int] = None, name: Optional[str] = None,
                  offset: int = 0, limit: int = 20, active_only: bool = False,
                  completed_only: bool = False) -> Dict:
        """
        List runs of a job, most recent first.

        Args:
            job_id: ID of the job
            name: Name of the job, resolved to a unique ID
            offset: Index of the first run to return, relative to the most recent run
            limit: Number of runs to return, 0 for the service maximum
            active_only: Only include active runs
            completed_only: Only include completed runs

        Returns:
            API response with ``runs`` and ``has_more``
        """
        if active_only and completed_only:
            raise ValueError("active_only and completed_only cannot both be true")
        if not 0 <= limit <= MAX_RUNS_LIMIT:
            raise ValueError(f"limit must be between 0 and {MAX_RUNS_LIMIT}")

        target_id = self._job_id(job_id, name)
        params = {
            "job_id": target_id,
            "active_only": str(active_only).lower(),
            "completed_only": str(completed_only).lower(),
            "offset": offset,
            "limit": limit,
        }
        response = self.api_client.make_api_request("get", "2.0/jobs/runs/list", params=params,
                                                    error_message=f"Failed to list runs of job {target_id}")
        logger.info(f"Job {target_id}: {len(response.get('runs', []))} runs, "
                    f"more to list: {response.get('has_more', False)}")
        return response

    @staticmethod
    def runs_to_dataframe(response: Dict) -> pd.DataFrame:
        """Flatten the ``runs`` of a runs/list response into a dataframe."""
        return pd.json_normalize(response.get("runs", []))

    def get_run_status(self, run_id: int) -> Dict:
        """Get the metadata and state of a run."""
        response = self.api_client.make_api_request("get", "2.0/jobs/runs/get",
                                                    params={"run_id": run_id},
                                                    error_message=f"Failed to get status of run {run_id}")
        logger.info(f"Run {run_id} (number {response.get('number_in_job')} in job): "
                    f"{response.get('run_page_url')}")
        return response

    def create_and_run_job(self, name: str = "Python Job", notebook_path: Optional[str] = None,
                           job_config: Union[str, Dict] = "default", file: Optional[str] = None,
                           overwrite: bool = False) -> Dict[str, Any]:
        """
        Create a job, launch a run of it and fetch the run's status.

        Returns:
            Dictionary with the job ID, run ID and run page URL
        """
        job_id = self.create_job(name=name, notebook_path=notebook_path, job_config=job_config,
                                 file=file, overwrite=overwrite)
        run_id = self.run_job(job_id=job_id)["run_id"]
        status = self.get_run_status(run_id)

        return {
            "job_id": job_id,
            "run_id": run_id,
            "run_page_url": status.get("run_page_url"),
        }
