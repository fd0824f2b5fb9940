from typing import List, Optional
from pydantic import BaseModel, Field

# -------------------------------------------------------------------------
# [Endpoint Schemas]
# -------------------------------------------------------------------------

class ConversionRequest(BaseModel):
    """UI -> Server: 변환 요청 (JSON 키는 camelCase 유지)"""
    inputCode: str
    inputLang: str
    outputLang: str

    @classmethod
    def from_payload(cls, payload) -> Optional["ConversionRequest"]:
        """세 필드 중 하나라도 없거나 비어 있으면 None"""
        if not isinstance(payload, dict):
            raise TypeError("Request body must be a JSON object")
        fields = {key: payload.get(key) for key in ("inputCode", "inputLang", "outputLang")}
        if not all(fields.values()):
            return None
        return cls(**{k: str(v) for k, v in fields.items()})

class ConversionResponse(BaseModel):
    success: bool = True
    output: str = ""

class ErrorResponse(BaseModel):
    error: str

class LanguagesResponse(BaseModel):
    languages: List[str]
    default_input: str
    default_output: str

# -------------------------------------------------------------------------
# [Upstream (Gemini generateContent) Schemas]
# -------------------------------------------------------------------------

class Part(BaseModel):
    text: str

class Content(BaseModel):
    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)

class GenerationConfig(BaseModel):
    temperature: float = 0.1

class GenerateContentRequest(BaseModel):
    contents: List[Content]
    systemInstruction: Content
    generationConfig: GenerationConfig = Field(default_factory=GenerationConfig)
