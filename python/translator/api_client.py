import logging
import requests

logger = logging.getLogger("CodeTranslator.Client")


class ConversionFailed(Exception):
    pass


class ConvertApiClient:
    """로컬/원격 Code Translator 서버의 /api/convert 호출"""

    def __init__(self, base_url: str = "http://127.0.0.1:8000", timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def convert(self, input_code: str, input_lang: str, output_lang: str) -> str:
        payload = {"inputCode": input_code, "inputLang": input_lang, "outputLang": output_lang}
        try:
            resp = requests.post(f"{self.base_url}/api/convert", json=payload, timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ConversionFailed(f"Request failed: {e}") from e

        if not resp.ok or not isinstance(data, dict) or not data.get("success"):
            message = data.get("error") if isinstance(data, dict) else None
            raise ConversionFailed(message or "Conversion failed.")

        return data.get("output") or ""

    def health(self) -> bool:
        try:
            return requests.get(f"{self.base_url}/health", timeout=1).status_code == 200
        except requests.RequestException:
            return False
