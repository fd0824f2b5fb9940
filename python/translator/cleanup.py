import re

# ``` 뒤에 바로 붙은 언어 태그까지 (```javascript, ```c++, ```c#)
_TAGGED_FENCE = re.compile(r"```[A-Za-z0-9_+#-]*")
_BARE_FENCE = re.compile(r"```")


def strip_code_fences(text: str) -> str:
    """
    모델 출력에서 코드 펜스를 제거합니다.
    펜스가 없는 입력에도 안전하며 여러 번 적용해도 결과가 같습니다.
    """
    if not text:
        return ""
    cleaned = _TAGGED_FENCE.sub("", text)
    cleaned = _BARE_FENCE.sub("", cleaned)
    return cleaned.strip()


def extract_candidate_text(result) -> str:
    """첫 번째 candidate의 첫 번째 part 텍스트. 없으면 빈 문자열."""
    if not isinstance(result, dict):
        return ""
    candidates = result.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    return parts[0].get("text") or ""
