"""
Error taxonomy for the conversion endpoint.
Route handlers convert these to JSON bodies; public messages never carry internal detail.
"""


class ConversionError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: str = None):
        super().__init__(detail or self.message)
        self.detail = detail


class BadRequestError(ConversionError):
    """필수 필드 누락 (클라이언트 오류)"""
    status_code = 400
    message = "Missing required fields."


class UpstreamError(ConversionError):
    """외부 LLM API가 2xx 이외의 상태를 반환"""
    message = "External API failure."

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Upstream returned {status_code}")
        self.status_code = status_code
        # 진단용으로만 보관하며 호출자에게 전달하지 않음
        self.body = body


class InternalError(ConversionError):
    status_code = 500
    message = "Internal server error"


class ConfigurationError(InternalError):
    """API URL 또는 키가 설정되지 않음"""
