import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from translator.cleanup import extract_candidate_text, strip_code_fences
from translator.errors import BadRequestError, ConversionError, InternalError
from translator.languages import DEFAULT_INPUT_LANG, DEFAULT_OUTPUT_LANG, LANGUAGES
from translator.prompts import build_payload
from translator.schemas import ConversionRequest, ConversionResponse, ErrorResponse, LanguagesResponse

logger = logging.getLogger("CodeTranslator.Router")

router = APIRouter()


def error_response(exc: ConversionError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


async def run_conversion(upstream, conversion: ConversionRequest, temperature: float) -> ConversionResponse:
    payload = build_payload(conversion.inputCode, conversion.inputLang, conversion.outputLang, temperature)
    result = await upstream.generate(payload)
    raw_text = extract_candidate_text(result)
    return ConversionResponse(success=True, output=strip_code_fences(raw_text))


@router.get("/api/languages", response_model=LanguagesResponse)
async def languages_endpoint():
    return LanguagesResponse(
        languages=LANGUAGES,
        default_input=DEFAULT_INPUT_LANG,
        default_output=DEFAULT_OUTPUT_LANG,
    )


@router.post("/api/convert")
async def convert_endpoint(request: Request):
    """
    입력 검증 -> 프롬프트 생성 -> 외부 LLM 호출 -> 코드 펜스 제거.
    모든 예외는 이 경계에서 JSON 오류 응답으로 변환됩니다.
    """
    try:
        payload = await request.json()
        conversion = ConversionRequest.from_payload(payload)
        if conversion is None:
            raise BadRequestError()

        logger.info(
            f"[*] Convert Request: {conversion.inputLang} -> {conversion.outputLang} "
            f"({len(conversion.inputCode)} chars)"
        )

        settings = request.app.state.settings
        upstream = request.app.state.upstream
        response = await run_conversion(upstream, conversion, settings.temperature)

        logger.info(f"[*] Convert Result: {len(response.output)} chars")
        return response.model_dump()

    except ConversionError as e:
        if isinstance(e, InternalError):
            logger.error(f"[*] Convert Failed: {e}")
        elif not isinstance(e, BadRequestError):
            logger.warning(f"[*] Upstream Failure: status={e.status_code}")
        return error_response(e)
    except Exception:
        logger.exception("API Route execution error")
        return error_response(InternalError())
