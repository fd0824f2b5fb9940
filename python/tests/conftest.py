"""
Pytest configuration and shared fixtures for Code Translator tests.
"""
import os
import sys
import json
import pytest
import httpx

# Add python directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from translator.config import Settings


GEMINI_URL = "https://generativelanguage.example.com/v1beta/models/gemini:generateContent"


def gemini_result(text):
    """Build a generateContent response body with a single candidate."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class StubUpstream:
    """Records every outbound request and replies with a canned response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else gemini_result("")
        self.requests = []

    @property
    def call_count(self):
        return len(self.requests)

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    """Return settings with a fake upstream URL and key."""
    return Settings(api_url=GEMINI_URL, api_key="test-key", temperature=0.1, timeout=5.0)


@pytest.fixture
def stub_upstream():
    return StubUpstream()


@pytest.fixture
def test_client(settings, stub_upstream):
    """Create a test client whose upstream calls go to stub_upstream."""
    from fastapi.testclient import TestClient
    from translator.api_server import create_app

    app = create_app(settings, transport=stub_upstream.transport)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def temp_config_file(tmp_path):
    """Write a config.json with a code_translator section."""
    def _create(section):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"code_translator": section}), encoding="utf-8")
        return str(path)
    return _create
