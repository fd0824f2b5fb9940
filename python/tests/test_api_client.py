"""
Tests for translator/api_client.py - requests-based /api/convert client.
"""
import pytest
import requests
from unittest.mock import patch, MagicMock

from translator.api_client import ConversionFailed, ConvertApiClient


def make_response(status_code, body):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


class TestConvertApiClientConvert:
    """Tests for ConvertApiClient.convert."""

    @patch('translator.api_client.requests.post')
    def test_success(self, mock_post):
        mock_post.return_value = make_response(200, {"success": True, "output": "x := 1"})

        client = ConvertApiClient("http://localhost:8000/", timeout=5)
        output = client.convert("x = 1", "Python", "Go")

        assert output == "x := 1"
        mock_post.assert_called_once_with(
            "http://localhost:8000/api/convert",
            json={"inputCode": "x = 1", "inputLang": "Python", "outputLang": "Go"},
            timeout=5,
        )

    @patch('translator.api_client.requests.post')
    def test_error_status(self, mock_post):
        mock_post.return_value = make_response(429, {"error": "External API failure."})

        with pytest.raises(ConversionFailed, match="External API failure."):
            ConvertApiClient().convert("x", "Python", "Go")

    @patch('translator.api_client.requests.post')
    def test_success_flag_false(self, mock_post):
        mock_post.return_value = make_response(200, {"success": False})

        with pytest.raises(ConversionFailed, match="Conversion failed."):
            ConvertApiClient().convert("x", "Python", "Go")

    @patch('translator.api_client.requests.post')
    def test_network_exception(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ConversionFailed):
            ConvertApiClient().convert("x", "Python", "Go")

    @patch('translator.api_client.requests.post')
    def test_non_json_body(self, mock_post):
        mock_post.return_value = make_response(502, ValueError("no json"))

        with pytest.raises(ConversionFailed):
            ConvertApiClient().convert("x", "Python", "Go")


class TestConvertApiClientHealth:
    """Tests for ConvertApiClient.health."""

    @patch('translator.api_client.requests.get')
    def test_healthy(self, mock_get):
        mock_get.return_value = make_response(200, {"status": "ok"})
        assert ConvertApiClient().health() is True

    @patch('translator.api_client.requests.get')
    def test_unreachable(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        assert ConvertApiClient().health() is False
