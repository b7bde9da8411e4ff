"""
Databricks REST Toolkit - A thin client for the Databricks REST API.
"""

from databricks_rest.api_client import DatabricksApiClient
from databricks_rest.jobs_manager import JobsManager
from databricks_rest.cluster_manager import ClusterManager
from databricks_rest.library_manager import LibraryManager
from databricks_rest.dbfs_manager import DbfsManager
from databricks_rest.workspace_manager import WorkspaceManager
from databricks_rest.execution_context import ExecutionContextManager
from databricks_rest.resolver import JobSummary, Found, NotFound, Ambiguous, resolve
from databricks_rest.errors import DatabricksRestError, JobNotFoundError, AmbiguousJobNameError

__version__ = "0.1.0"


class DatabricksClient:
    """
    Entry point to the Databricks REST API.

    Each API area is served by a specialised manager; the most common
    operations are also available directly on the client.
    """

    def __init__(self, workspace_url: str, token: str = None, timeout: int = 30):
        """
        Initialize the Databricks client.

        Args:
            workspace_url: The URL of your Databricks workspace
            token: Your Databricks personal access token, ~/.netrc is used if omitted
            timeout: Request timeout in seconds
        """
        self.api_client = DatabricksApiClient(workspace_url, token, timeout)
        self.workspace = WorkspaceManager(self.api_client)
        self.jobs = JobsManager(self.api_client, self.workspace)
        self.clusters = ClusterManager(self.api_client)
        self.libraries = LibraryManager(self.api_client)
        self.dbfs = DbfsManager(self.api_client)
        self.contexts = ExecutionContextManager(self.api_client)

    def list_jobs(self):
        """Get the raw job objects defined in the workspace."""
        return self.jobs.list_jobs()

    def fetch_all_jobs(self):
        """Fetch the job directory (ID, name, creation time, creator) of the workspace."""
        return self.jobs.fetch_all_jobs()

    def resolve_job_id(self, name):
        """Find the ID of the only job with the given name."""
        return self.jobs.resolve_job_id(name)

    def create_job(self, *args, **kwargs):
        """Create a job and return its ID."""
        return self.jobs.create_job(*args, **kwargs)

    def reset_job(self, new_config, job_id=None, name=None):
        """Overwrite the settings of a job addressed by ID or name."""
        return self.jobs.reset_job(new_config, job_id=job_id, name=name)

    def delete_job(self, job_id=None, name=None):
        """Delete a job addressed by ID or name."""
        return self.jobs.delete_job(job_id=job_id, name=name)

    def run_job(self, job_id=None, name=None, notebook_params=None):
        """Trigger a run of a job addressed by ID or name."""
        return self.jobs.run_job(job_id=job_id, name=name, notebook_params=notebook_params)

    def list_runs(self, job_id=None, name=None, **kwargs):
        """List the runs of a job addressed by ID or name."""
        return self.jobs.list_runs(job_id=job_id, name=name, **kwargs)

    def get_run_status(self, run_id):
        """Get the state of a run."""
        return self.jobs.get_run_status(run_id)

    def get_cluster_list(self):
        """Get a list of all clusters in the workspace."""
        return self.clusters.list_clusters()

    def get_cluster_status(self, cluster_id):
        """Get the details and state of a cluster."""
        return self.clusters.get_cluster_status(cluster_id)
