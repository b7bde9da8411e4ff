"""
Execution contexts for running commands on a cluster (API 1.2).
"""

import logging
from typing import Dict

logger = logging.getLogger("databricks-rest.execution_context")

CONTEXT_LANGUAGES = ("python", "r", "scala", "sql")


class ExecutionContextManager:
    """Creates execution contexts on running clusters."""

    def __init__(self, api_client):
        self.api_client = api_client

    def create_execution_context(self, cluster_id: str, language: str = "python") -> Dict:
        """
        Create an execution context on a cluster.

        Args:
            cluster_id: ID of a running cluster
            language: python, r, scala or sql

        Returns:
            Dictionary with the language, cluster ID and context ID needed to
            execute commands in the context
        """
        language = language.lower()
        if language not in CONTEXT_LANGUAGES:
            raise ValueError(f"Unsupported context language: {language}")

        response = self.api_client.make_api_request(
            "post", "1.2/contexts/create",
            data={"language": language, "clusterId": cluster_id},
            error_message=f"Failed to create execution context on cluster {cluster_id}")

        context_id = response.get("id")
        logger.info(f"Execution context {context_id} created on cluster {cluster_id}")

        return {
            "language": language,
            "cluster_id": cluster_id,
            "context_id": context_id,
        }
