"""
Client-side conversion state machine.

One immutable ``ConverterState`` is replaced on every transition
(idle -> loading -> succeeded | failed), so the loading flag and the
status message can never disagree.
"""
import time
import logging
from contextlib import contextmanager
from typing import Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict

from translator.api_client import ConversionFailed
from translator.keybindings import KeyBindings
from translator.languages import DEFAULT_INPUT_LANG, DEFAULT_OUTPUT_LANG

logger = logging.getLogger("CodeTranslator.Session")

CONVERT_SHORTCUT = "ctrl+enter"
COPIED_INDICATOR_SECONDS = 2.0

MSG_EMPTY_INPUT = "⚠️ Please enter source code to convert."
MSG_SAME_LANGUAGE = "⚠️ Source and Target languages are the same."
MSG_CONVERTING = "Converting your code..."
MSG_SUCCESS = "✅ Conversion successful!"
MSG_FAILURE = "❌ Conversion failed. Please try again."
FAILURE_PLACEHOLDER = "// ❌ Conversion failed. Please try again."

Phase = Literal["idle", "loading", "succeeded", "failed"]


class ConverterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_code: str = ""
    output_code: str = ""
    input_lang: str = DEFAULT_INPUT_LANG
    output_lang: str = DEFAULT_OUTPUT_LANG
    phase: Phase = "idle"
    status_message: str = ""

    @property
    def is_loading(self) -> bool:
        return self.phase == "loading"


class UserInputWarning(Exception):
    """네트워크 호출 전에 잡히는 입력 경고 (서버로 전송되지 않음)"""


class ConverterSession:
    def __init__(self, api, clipboard: Optional[Callable[[str], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.api = api
        self.clipboard = clipboard
        self.clock = clock
        self.state = ConverterState()
        self._copied_at: Optional[float] = None

    def _update(self, **changes):
        self.state = self.state.model_copy(update=changes)
        return self.state

    # --- Edits (local state only) ---------------------------------------

    def set_input_code(self, code: str):
        return self._update(input_code=code)

    def set_input_lang(self, lang: str):
        return self._update(input_lang=lang)

    def set_output_lang(self, lang: str):
        return self._update(output_lang=lang)

    def clear_input(self):
        return self._update(input_code="")

    # --- Conversion -----------------------------------------------------

    @property
    def can_convert(self) -> bool:
        """버튼 비활성화 조건과 동일"""
        return not self.state.is_loading and bool(self.state.input_code.strip())

    def _check_input(self):
        if not self.state.input_code.strip():
            raise UserInputWarning(MSG_EMPTY_INPUT)
        if self.state.input_lang == self.state.output_lang:
            raise UserInputWarning(MSG_SAME_LANGUAGE)

    def convert(self) -> ConverterState:
        if self.state.is_loading:
            logger.debug("Conversion already in flight; ignoring trigger")
            return self.state

        try:
            self._check_input()
        except UserInputWarning as warning:
            return self._update(status_message=str(warning))

        current = self._update(phase="loading", output_code="", status_message=MSG_CONVERTING)

        try:
            output = self.api.convert(current.input_code, current.input_lang, current.output_lang)
        except Exception as e:
            if not isinstance(e, ConversionFailed):
                logger.exception("Conversion failed unexpectedly")
            else:
                logger.error(f"Conversion failed: {e}")
            return self._update(phase="failed", output_code=FAILURE_PLACEHOLDER, status_message=MSG_FAILURE)

        return self._update(phase="succeeded", output_code=output or "", status_message=MSG_SUCCESS)

    # --- Swap / Copy ----------------------------------------------------

    def swap(self) -> ConverterState:
        """언어와 코드를 한 번의 상태 교체로 맞바꿈"""
        s = self.state
        return self._update(
            input_lang=s.output_lang,
            output_lang=s.input_lang,
            input_code=s.output_code,
            output_code=s.input_code,
        )

    @property
    def is_copied(self) -> bool:
        if self._copied_at is None:
            return False
        return self.clock() - self._copied_at < COPIED_INDICATOR_SECONDS

    def copy_output(self) -> bool:
        if self.clipboard is None:
            logger.error("Clipboard copy failed: no clipboard available")
            return False
        try:
            self.clipboard(self.state.output_code)
        except Exception as e:
            logger.error(f"Clipboard copy failed: {e}")
            return False
        self._copied_at = self.clock()
        return True

    # --- Shortcut lifecycle ----------------------------------------------

    def _on_shortcut(self):
        self.convert()

    @contextmanager
    def mount(self, bindings: KeyBindings):
        bindings.bind(CONVERT_SHORTCUT, self._on_shortcut)
        try:
            yield self
        finally:
            bindings.unbind(CONVERT_SHORTCUT, self._on_shortcut)
