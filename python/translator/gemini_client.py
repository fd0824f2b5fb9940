import logging
from typing import Optional

import httpx

from translator.config import Settings
from translator.errors import ConfigurationError, UpstreamError

logger = logging.getLogger("CodeTranslator.Upstream")


class GeminiClient:
    """
    Gemini generateContent 엔드포인트에 대한 단일 요청 클라이언트.
    요청마다 한 번만 호출하며 재시도하지 않습니다.
    """
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # 테스트에서 httpx.MockTransport 주입
        self.transport = transport

    def _headers(self):
        if not self.settings.has_credentials:
            raise ConfigurationError("GEMINI_API_URL / GEMINI_API_KEY not configured")
        # 키는 URL에 넣지 않음
        return {"Content-Type": "application/json", "x-goog-api-key": self.settings.api_key}

    async def generate(self, payload: dict) -> dict:
        headers = self._headers()

        async with httpx.AsyncClient(transport=self.transport, timeout=self.settings.timeout) as client:
            resp = await client.post(self.settings.api_url, json=payload, headers=headers)

        if not resp.is_success:
            logger.error(f"Gemini API Error [{resp.status_code}]: {resp.text}")
            raise UpstreamError(resp.status_code, resp.text)

        return resp.json()
