"""
Import and export of workspace objects (notebooks and source files).
"""

import base64
import logging
from typing import Dict, Optional

from databricks_rest.utils import infer_language

logger = logging.getLogger("databricks-rest.workspace_manager")

EXPORT_FORMATS = ("SOURCE", "HTML", "JUPYTER", "DBC")


class WorkspaceManager:
    """Moves notebooks between the local filesystem and the workspace."""

    def __init__(self, api_client):
        """
        Initialize the workspace manager.

        Args:
            api_client: Instance of DatabricksApiClient for making API requests
        """
        self.api_client = api_client

    def import_file(self, file: str, notebook_path: str, overwrite: bool = False,
                    language: Optional[str] = None) -> Dict:
        """
        Import a local source file as a notebook.

        Args:
            file: Path of the local file
            notebook_path: Absolute workspace path of the notebook
            overwrite: Replace an existing notebook
            language: PYTHON, R, SQL or SCALA; inferred from the extension if omitted

        Returns:
            API response
        """
        language = language or infer_language(file)
        if language is None:
            raise ValueError(f"Cannot infer the notebook language of {file}, pass language explicitly")

        with open(file, 'rb') as f:
            content = base64.b64encode(f.read()).decode("ascii")

        payload = {
            "path": notebook_path,
            "format": "SOURCE",
            "language": language.upper(),
            "content": content,
            "overwrite": overwrite,
        }
        response = self.api_client.make_api_request("post", "2.0/workspace/import", data=payload,
                                                    error_message=f"Unable to import {file}")
        logger.info(f"{file} imported to {notebook_path}")
        return response

    def export(self, workspace_path: str, format: str = "SOURCE", direct_download: bool = False,
               filename: Optional[str] = None) -> bytes:
        """
        Export a workspace object.

        Args:
            workspace_path: Absolute workspace path of the object
            format: SOURCE, HTML, JUPYTER or DBC
            direct_download: Ask the API for the raw file instead of base64 JSON
            filename: Local file to write the exported content to

        Returns:
            Exported content
        """
        format = format.upper()
        if format not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {format}")

        params = {
            "path": workspace_path,
            "format": format,
            "direct_download": str(direct_download).lower(),
        }
        error_message = f"Unable to export {workspace_path}"

        if direct_download:
            content = self.api_client.make_api_request("get", "2.0/workspace/export", params=params,
                                                       error_message=error_message, parse_json=False)
        else:
            response = self.api_client.make_api_request("get", "2.0/workspace/export", params=params,
                                                        error_message=error_message)
            content = base64.b64decode(response.get("content", ""))

        logger.info(f"Workspace object {workspace_path} was exported")

        if filename is not None:
            with open(filename, 'wb') as f:
                f.write(content)
            logger.info(f"File downloaded here: {filename}")

        return content
