"""
Tests for the LibraryManager class.
"""

import unittest
from unittest.mock import MagicMock
import os
import sys

# Add parent directory to path to import module under test
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from databricks_rest.library_manager import LibraryManager, DEFAULT_CRAN_REPO


class TestLibraryManager(unittest.TestCase):
    """Tests for the LibraryManager class."""

    def setUp(self):
        """Set up test fixtures."""
        self.api_client = MagicMock()
        self.library_manager = LibraryManager(self.api_client)

    def test_get_installed_libraries(self):
        """Test getting installed libraries for a cluster."""
        # Set up API client to return sample data
        self.api_client.get_libraries_status.return_value = {
            "cluster_id": "cluster123",
            "library_statuses": [
                {
                    "library": {"cran": {"package": "forecast"}},
                    "status": "INSTALLED"
                },
                {
                    "library": {"pypi": {"package": "pandas"}},
                    "status": "PENDING"
                }
            ]
        }

        # Call method
        libraries = self.library_manager.get_installed_libraries("cluster123")

        # Verify
        self.api_client.get_libraries_status.assert_called_once_with("cluster123")
        self.assertEqual(len(libraries), 2)
        self.assertEqual(libraries[0]["library"]["cran"]["package"], "forecast")
        self.assertEqual(libraries[1]["status"], "PENDING")

    def test_get_library_statuses_all_clusters(self):
        """Without a cluster ID the statuses of every cluster are requested."""
        self.api_client.get_libraries_status.return_value = {"statuses": []}

        response = self.library_manager.get_library_statuses()

        self.api_client.get_libraries_status.assert_called_once_with(None)
        self.assertEqual(response, {"statuses": []})

    def test_install_cran_package(self):
        """Test installing a CRAN package."""
        self.library_manager.install_cran_package("cluster123", "forecast")

        args, kwargs = self.api_client.make_api_request.call_args
        self.assertEqual(args, ("post", "2.0/libraries/install"))
        self.assertEqual(kwargs["data"], {
            "cluster_id": "cluster123",
            "libraries": [{"cran": {"package": "forecast", "repo": DEFAULT_CRAN_REPO}}],
        })

    def test_uninstall_libraries(self):
        """Test uninstalling libraries."""
        libraries = [{"pypi": {"package": "numpy"}}]

        self.library_manager.uninstall_libraries("cluster123", libraries)

        args, kwargs = self.api_client.make_api_request.call_args
        self.assertEqual(args, ("post", "2.0/libraries/uninstall"))
        self.assertEqual(kwargs["data"], {"cluster_id": "cluster123", "libraries": libraries})

    def test_uninstall_cran_package_custom_repo(self):
        """The CRAN repository can be overridden."""
        self.library_manager.uninstall_cran_package("cluster123", "dplyr", repo="https://cran.example")

        data = self.api_client.make_api_request.call_args[1]["data"]
        self.assertEqual(data["libraries"], [{"cran": {"package": "dplyr", "repo": "https://cran.example"}}])


if __name__ == '__main__':
    unittest.main()
