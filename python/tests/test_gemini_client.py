"""
Tests for translator/gemini_client.py - Upstream generateContent client.
"""
import pytest
import httpx

from conftest import StubUpstream, gemini_result
from translator.config import Settings
from translator.errors import ConfigurationError, UpstreamError
from translator.gemini_client import GeminiClient


class TestGeminiClientGenerate:
    """Tests for GeminiClient.generate."""

    @pytest.mark.asyncio
    async def test_returns_parsed_json(self, settings):
        stub = StubUpstream(body=gemini_result("fn main() {}"))
        client = GeminiClient(settings, transport=stub.transport)

        result = await client.generate({"contents": []})

        assert result == gemini_result("fn main() {}")
        assert stub.call_count == 1
        assert stub.last_payload == {"contents": []}

    @pytest.mark.asyncio
    async def test_key_sent_as_header(self, settings):
        stub = StubUpstream()
        client = GeminiClient(settings, transport=stub.transport)

        await client.generate({})

        assert stub.requests[0].headers["x-goog-api-key"] == "test-key"
        assert "key" not in stub.requests[0].url.params

    @pytest.mark.asyncio
    async def test_non_success_raises_upstream_error(self, settings):
        stub = StubUpstream(status_code=503, body="backend unavailable")
        client = GeminiClient(settings, transport=stub.transport)

        with pytest.raises(UpstreamError) as exc_info:
            await client.generate({})

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "backend unavailable"
        assert exc_info.value.message == "External API failure."
        assert stub.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [{"api_url": None}, {"api_key": None}, {"api_key": ""}])
    async def test_missing_configuration(self, settings, overrides):
        stub = StubUpstream()
        client = GeminiClient(settings.model_copy(update=overrides), transport=stub.transport)

        with pytest.raises(ConfigurationError):
            await client.generate({})

        assert stub.call_count == 0

    @pytest.mark.asyncio
    async def test_network_errors_propagate(self, settings):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        client = GeminiClient(settings, transport=httpx.MockTransport(refuse))

        with pytest.raises(httpx.ConnectError):
            await client.generate({})
