"""
Library management for Databricks clusters.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger("databricks-rest.library_manager")

DEFAULT_CRAN_REPO = "https://packagemanager.rstudio.com/all/__linux__/xenial/latest"


class LibraryManager:
    """Manages libraries installed on Databricks clusters."""

    def __init__(self, api_client):
        """
        Initialize the library manager.

        Args:
            api_client: Instance of DatabricksApiClient for making API requests
        """
        self.api_client = api_client

    def get_library_statuses(self, cluster_id: Optional[str] = None) -> Dict:
        """
        Get the status of libraries on a cluster.

        Args:
            cluster_id: ID of the cluster, or None for every cluster in the workspace

        Returns:
            API response
        """
        response = self.api_client.get_libraries_status(cluster_id)
        logger.info("Library statuses retrieved.")
        return response

    def get_installed_libraries(self, cluster_id: str) -> List[Dict]:
        """Get a list of libraries installed on a given cluster."""
        response = self.api_client.get_libraries_status(cluster_id)
        return response.get("library_statuses", [])

    def install_libraries(self, cluster_id: str, libraries: List[Dict]) -> Dict:
        """
        Install libraries on a cluster.

        Installation is asynchronous; poll get_library_statuses to follow it.

        Args:
            cluster_id: ID of the cluster
            libraries: Library specifications, e.g. ``{"pypi": {"package": "numpy"}}``

        Returns:
            API response
        """
        response = self.api_client.make_api_request(
            "post", "2.0/libraries/install",
            data={"cluster_id": cluster_id, "libraries": libraries},
            error_message=f"Failed to install libraries on cluster {cluster_id}")
        logger.info(f"Installing {len(libraries)} libraries on cluster {cluster_id}")
        return response

    def uninstall_libraries(self, cluster_id: str, libraries: List[Dict]) -> Dict:
        """
        Mark libraries for removal from a cluster.

        Libraries are only removed when the cluster restarts.
        """
        response = self.api_client.make_api_request(
            "post", "2.0/libraries/uninstall",
            data={"cluster_id": cluster_id, "libraries": libraries},
            error_message=f"Failed to uninstall libraries from cluster {cluster_id}")
        logger.info(f"{len(libraries)} libraries on cluster {cluster_id} will be removed on restart")
        return response

    def install_cran_package(self, cluster_id: str, package: str,
                             repo: str = DEFAULT_CRAN_REPO) -> Dict:
        """Install a CRAN package on a cluster."""
        return self.install_libraries(cluster_id, [{"cran": {"package": package, "repo": repo}}])

    def uninstall_cran_package(self, cluster_id: str, package: str,
                               repo: str = DEFAULT_CRAN_REPO) -> Dict:
        """Uninstall a CRAN package from a cluster."""
        return self.uninstall_libraries(cluster_id, [{"cran": {"package": package, "repo": repo}}])
