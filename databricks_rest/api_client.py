"""
API client for interacting with the Databricks REST API.
"""

import requests
import logging
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger("databricks-rest.api_client")


class DatabricksApiClient:
    """Client for making authenticated requests to the Databricks API."""

    def __init__(self, workspace_url: str, token: Optional[str] = None, timeout: int = 30):
        """
        Initialize the Databricks API client.

        Args:
            workspace_url: The URL of your Databricks workspace
            token: Your Databricks personal access token. If omitted, no
                Authorization header is sent and requests falls back to the
                credentials stored in ~/.netrc for the workspace host.
            timeout: Request timeout in seconds
        """
        self.workspace_url = workspace_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.debug(f"No token given for {self.workspace_url}, relying on ~/.netrc")

    def make_api_request(self, method: str, endpoint: str, data: Optional[Dict] = None,
                         params: Optional[Dict] = None, files: Optional[Dict] = None,
                         error_message: str = "API request failed",
                         parse_json: bool = True) -> Union[Dict, bytes]:
        """
        Make a single API request to Databricks.

        Args:
            method: HTTP method (get, post, put, delete)
            endpoint: Versioned API endpoint, e.g. "2.0/jobs/list"
            data: Request payload, sent as JSON (or as form fields with files)
            params: Query string parameters
            files: Files for a multipart upload
            error_message: Custom error message
            parse_json: Decode the body as JSON; otherwise return raw bytes

        Returns:
            JSON response, or the raw response body when parse_json is False
        """
        url = f"{self.workspace_url}/api/{endpoint}"
        method = method.lower()

        try:
            if method == "get":
                response = requests.get(url, headers=self.headers, params=params,
                                        timeout=self.timeout)
            elif method == "post":
                if files is not None:
                    # Let requests set the multipart boundary
                    headers = {k: v for k, v in self.headers.items() if k != "Content-Type"}
                    response = requests.post(url, headers=headers, data=data, files=files,
                                             timeout=self.timeout)
                else:
                    response = requests.post(url, headers=self.headers, json=data,
                                             timeout=self.timeout)
            elif method == "put":
                response = requests.put(url, headers=self.headers, json=data, timeout=self.timeout)
            elif method == "delete":
                response = requests.delete(url, headers=self.headers, json=data,
                                           timeout=self.timeout)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except requests.exceptions.RequestException as e:
            logger.error(f"{error_message}: {str(e)}")
            raise

        if response.status_code >= 400:
            logger.warning(f"{error_message}: {response.status_code}, {response.text}")
            response.raise_for_status()

        logger.debug(f"{method.upper()} {endpoint}: {response.status_code}")

        if not parse_json:
            return response.content
        return response.json() if response.text else {}

    def get_job_list(self) -> List[Dict]:
        """Get the jobs defined in the workspace (a single page)."""
        response = self.make_api_request("get", "2.0/jobs/list",
                                         error_message="Failed to retrieve jobs")
        return response.get("jobs", [])

    def get_cluster_list(self) -> List[Dict]:
        """Get a list of all clusters in the workspace."""
        response = self.make_api_request("get", "2.0/clusters/list",
                                         error_message="Failed to retrieve clusters")
        return response.get("clusters", [])

    def get_libraries_status(self, cluster_id: Optional[str] = None) -> Dict:
        """Get the library statuses of one cluster, or of every cluster if none is given."""
        if cluster_id is None:
            return self.make_api_request("get", "2.0/libraries/all-cluster-statuses",
                                         error_message="Failed to retrieve library statuses")
        return self.make_api_request("get", "2.0/libraries/cluster-status",
                                     params={"cluster_id": cluster_id},
                                     error_message=f"Failed to retrieve libraries for cluster {cluster_id}")
