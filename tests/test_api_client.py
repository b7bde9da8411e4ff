"""
Tests for the DatabricksApiClient class.
"""

import unittest
from unittest.mock import patch, MagicMock
import json
import os
import sys
import requests

# Add parent directory to path to import module under test
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from databricks_rest.api_client import DatabricksApiClient


def make_response(status_code=200, text='{}', content=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = content if content is not None else text.encode()
    response.json.side_effect = lambda: json.loads(text)
    return response


class TestDatabricksApiClient(unittest.TestCase):
    """Tests for the DatabricksApiClient class."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = DatabricksApiClient("https://test-workspace.cloud.databricks.com/", "dummy-token")

    def test_init(self):
        """Test initialization of the client."""
        self.assertEqual(self.client.workspace_url, "https://test-workspace.cloud.databricks.com")
        self.assertEqual(self.client.token, "dummy-token")
        self.assertEqual(self.client.timeout, 30)
        self.assertEqual(self.client.headers["Authorization"], "Bearer dummy-token")
        self.assertEqual(self.client.headers["Content-Type"], "application/json")

    def test_init_without_token(self):
        """Without a token no Authorization header is sent, so ~/.netrc applies."""
        client = DatabricksApiClient("https://test-workspace.cloud.databricks.com")
        self.assertNotIn("Authorization", client.headers)

    @patch('requests.get')
    def test_make_api_request_get(self, mock_get):
        """Test making a GET API request."""
        mock_get.return_value = make_response(text='{"key": "value"}')

        result = self.client.make_api_request("get", "2.0/endpoint", params={"a": 1},
                                              error_message="Test error")

        mock_get.assert_called_once_with(
            "https://test-workspace.cloud.databricks.com/api/2.0/endpoint",
            headers=self.client.headers,
            params={"a": 1},
            timeout=30
        )
        self.assertEqual(result, {"key": "value"})

    @patch('requests.post')
    def test_make_api_request_post(self, mock_post):
        """Test making a POST API request."""
        mock_post.return_value = make_response(text='{"success": true}')

        data = {"param": "value"}
        result = self.client.make_api_request("post", "2.0/endpoint", data=data)

        mock_post.assert_called_once_with(
            "https://test-workspace.cloud.databricks.com/api/2.0/endpoint",
            headers=self.client.headers,
            json=data,
            timeout=30
        )
        self.assertEqual(result, {"success": True})

    @patch('requests.post')
    def test_make_api_request_multipart(self, mock_post):
        """Multipart uploads drop the JSON content type and send form fields."""
        mock_post.return_value = make_response(text='')

        files = {"contents": MagicMock()}
        result = self.client.make_api_request("post", "2.0/dbfs/put", data={"path": "/x"}, files=files)

        _, kwargs = mock_post.call_args
        self.assertNotIn("Content-Type", kwargs["headers"])
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer dummy-token")
        self.assertEqual(kwargs["data"], {"path": "/x"})
        self.assertIs(kwargs["files"], files)
        self.assertEqual(result, {})

    @patch('requests.get')
    def test_make_api_request_raw(self, mock_get):
        """Raw bodies are returned untouched."""
        mock_get.return_value = make_response(text='print(1)', content=b'print(1)')

        result = self.client.make_api_request("get", "2.0/workspace/export", parse_json=False)

        self.assertEqual(result, b'print(1)')

    @patch('requests.get')
    def test_make_api_request_error(self, mock_get):
        """HTTP errors are raised after a single attempt."""
        mock_response = make_response(status_code=404, text='{"error": "Not Found"}')
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Not Found")
        mock_get.return_value = mock_response

        with self.assertRaises(requests.exceptions.HTTPError):
            self.client.make_api_request("get", "2.0/endpoint")

        mock_get.assert_called_once()
        mock_response.raise_for_status.assert_called_once()

    @patch('requests.get')
    def test_make_api_request_connection_error(self, mock_get):
        """Transport failures propagate without retrying."""
        mock_get.side_effect = requests.exceptions.ConnectionError("unreachable")

        with self.assertRaises(requests.exceptions.ConnectionError):
            self.client.make_api_request("get", "2.0/endpoint")

        mock_get.assert_called_once()

    def test_make_api_request_unsupported_method(self):
        """Unknown HTTP methods are rejected."""
        with self.assertRaises(ValueError):
            self.client.make_api_request("patch", "2.0/endpoint")

    @patch('requests.get')
    def test_get_job_list(self, mock_get):
        """Test getting the job list."""
        mock_get.return_value = make_response(
            text='{"jobs": [{"job_id": 1, "settings": {"name": "Test Job"}}]}')

        jobs = self.client.get_job_list()

        self.assertEqual(mock_get.call_args[0][0],
                         "https://test-workspace.cloud.databricks.com/api/2.0/jobs/list")
        self.assertEqual(jobs, [{"job_id": 1, "settings": {"name": "Test Job"}}])

    @patch('requests.get')
    def test_get_job_list_empty_workspace(self, mock_get):
        """A workspace without jobs returns no jobs key."""
        mock_get.return_value = make_response(text='{}')
        self.assertEqual(self.client.get_job_list(), [])

    @patch('requests.get')
    def test_get_cluster_list(self, mock_get):
        """Test getting the cluster list."""
        mock_get.return_value = make_response(
            text='{"clusters": [{"cluster_id": "123", "cluster_name": "Test Cluster"}]}')

        clusters = self.client.get_cluster_list()

        mock_get.assert_called_once()
        self.assertEqual(clusters, [{"cluster_id": "123", "cluster_name": "Test Cluster"}])

    @patch('requests.get')
    def test_get_libraries_status(self, mock_get):
        """One cluster or all clusters, depending on the cluster ID."""
        mock_get.return_value = make_response(text='{"statuses": []}')

        self.client.get_libraries_status()
        self.assertTrue(mock_get.call_args[0][0].endswith("2.0/libraries/all-cluster-statuses"))

        self.client.get_libraries_status("abc")
        self.assertTrue(mock_get.call_args[0][0].endswith("2.0/libraries/cluster-status"))
        self.assertEqual(mock_get.call_args[1]["params"], {"cluster_id": "abc"})


if __name__ == '__main__':
    unittest.main()
