"""
DBFS (Databricks File System) operations.
"""

import os
import base64
import logging
from typing import Dict, List, Optional

logger = logging.getLogger("databricks-rest.dbfs_manager")


class DbfsManager:
    """Lists, moves, uploads, reads and removes files on DBFS."""

    def __init__(self, api_client):
        """
        Initialize the DBFS manager.

        Args:
            api_client: Instance of DatabricksApiClient for making API requests
        """
        self.api_client = api_client

    def ls(self, path: str) -> List[Dict]:
        """
        List the contents of a DBFS directory.

        Args:
            path: Absolute DBFS path, e.g. "/FileStore"

        Returns:
            File infos with path, is_dir and file_size
        """
        response = self.api_client.make_api_request("get", "2.0/dbfs/list", params={"path": path},
                                                    error_message=f"Failed to list {path}")
        return response.get("files", [])

    def mkdirs(self, path: str) -> Dict:
        """Create a directory and any missing parents."""
        response = self.api_client.make_api_request("post", "2.0/dbfs/mkdirs", data={"path": path},
                                                    error_message=f"Failed to create {path}")
        logger.info(f"Directory {path} created")
        return response

    def mv(self, source_path: str, destination_path: str) -> Dict:
        """Move a file or directory within DBFS."""
        response = self.api_client.make_api_request(
            "post", "2.0/dbfs/move",
            data={"source_path": source_path, "destination_path": destination_path},
            error_message=f"Failed to move {source_path}")
        logger.info(f"{source_path} moved to {destination_path}")
        return response

    def rm(self, path: str, recursive: bool = False) -> Dict:
        """Delete a file, or a directory when recursive is true."""
        response = self.api_client.make_api_request("post", "2.0/dbfs/delete",
                                                    data={"path": path, "recursive": recursive},
                                                    error_message=f"Failed to delete {path}")
        logger.info(f"{path} deleted")
        return response

    def put(self, local_file: str, destination_path: str, overwrite: bool = False) -> Dict:
        """
        Upload a local file to DBFS.

        Args:
            local_file: Path of the file to upload
            destination_path: DBFS path to write to
            overwrite: Replace an existing file at the destination

        Returns:
            API response
        """
        if not os.path.isfile(local_file):
            raise FileNotFoundError(local_file)

        with open(local_file, 'rb') as f:
            response = self.api_client.make_api_request(
                "post", "2.0/dbfs/put",
                data={"path": destination_path, "overwrite": str(overwrite).lower()},
                files={"contents": f},
                error_message=f"Failed to upload {local_file}")

        logger.info(f'File "{local_file}" uploaded to "{destination_path}"')
        return response

    def read(self, path: str, offset: Optional[int] = None, length: Optional[int] = None) -> bytes:
        """
        Read the contents of a DBFS file.

        The API returns at most 1 MB per call; use offset and length to read larger files.

        Returns:
            Decoded file contents
        """
        params = {"path": path}
        if offset is not None:
            params["offset"] = offset
        if length is not None:
            params["length"] = length

        response = self.api_client.make_api_request("get", "2.0/dbfs/read", params=params,
                                                    error_message=f"Failed to read {path}")
        logger.info(f"Read {response.get('bytes_read', 0)} bytes from {path}")
        return base64.b64decode(response.get("data", ""))
