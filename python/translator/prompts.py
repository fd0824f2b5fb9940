from translator.schemas import Content, GenerateContentRequest, GenerationConfig, Part

SYSTEM_PROMPT = (
    "You are an expert code translator. Your task is to accurately and idiomatically convert "
    "the provided source code into the requested target language. Ensure the converted code is "
    "functional and follows the conventions of the target language. ONLY output the code block. "
    "Do not include any extra explanations, markdown fences (like ``` language) or commentary "
    "outside the main code block."
)


def build_user_query(input_code: str, input_lang: str, output_lang: str) -> str:
    return f"Convert the following {input_lang} code into {output_lang}: \n\n```{input_lang}\n{input_code}\n```"


def build_payload(input_code: str, input_lang: str, output_lang: str, temperature: float = 0.1) -> dict:
    """Gemini generateContent 요청 본문 생성 (시스템 지시문과 사용자 쿼리는 별도 필드)"""
    request = GenerateContentRequest(
        contents=[Content(role="user", parts=[Part(text=build_user_query(input_code, input_lang, output_lang))])],
        systemInstruction=Content(parts=[Part(text=SYSTEM_PROMPT)]),
        generationConfig=GenerationConfig(temperature=temperature),
    )
    return request.model_dump(exclude_none=True)
