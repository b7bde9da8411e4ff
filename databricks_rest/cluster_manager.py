"""
Cluster lifecycle management for Databricks.
"""

import logging
from typing import Dict, List

logger = logging.getLogger("databricks-rest.cluster_manager")


class ClusterManager:
    """Lists clusters and starts or terminates them."""

    def __init__(self, api_client):
        """
        Initialize the cluster manager.

        Args:
            api_client: Instance of DatabricksApiClient for making API requests
        """
        self.api_client = api_client

    def list_clusters(self) -> List[Dict]:
        """Get a list of all clusters in the workspace."""
        clusters = self.api_client.get_cluster_list()
        logger.info(f"Number of clusters: {len(clusters)}")
        return clusters

    def get_cluster_status(self, cluster_id: str) -> Dict:
        """Get the details and state of a cluster."""
        response = self.api_client.make_api_request("get", "2.0/clusters/get",
                                                    params={"cluster_id": cluster_id},
                                                    error_message=f"Failed to get cluster {cluster_id}")
        logger.info(f"Cluster {cluster_id} is {response.get('state')}")
        return response

    def start_cluster(self, cluster_id: str) -> Dict:
        """Start a terminated cluster."""
        response = self.api_client.make_api_request("post", "2.0/clusters/start",
                                                    data={"cluster_id": cluster_id},
                                                    error_message=f"Failed to start cluster {cluster_id}")
        logger.info(f"Cluster {cluster_id} is starting")
        return response

    def terminate_cluster(self, cluster_id: str) -> Dict:
        """Terminate a cluster. Its configuration is kept and it can be started again."""
        response = self.api_client.make_api_request("post", "2.0/clusters/delete",
                                                    data={"cluster_id": cluster_id},
                                                    error_message=f"Failed to terminate cluster {cluster_id}")
        logger.info(f"Cluster {cluster_id} is terminating")
        return response
