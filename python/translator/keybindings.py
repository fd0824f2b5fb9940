import logging
from typing import Callable, Dict, List

logger = logging.getLogger("CodeTranslator.Keys")


class KeyBindings:
    """
    전역 단축키 레지스트리.
    핸들러는 mount 시 등록하고 unmount 시 반드시 해제해야 합니다.
    """
    def __init__(self):
        self._handlers: Dict[str, List[Callable[[], None]]] = {}

    @staticmethod
    def _normalize(chord: str) -> str:
        return "+".join(part.strip().lower() for part in chord.split("+"))

    def bind(self, chord: str, handler: Callable[[], None]):
        self._handlers.setdefault(self._normalize(chord), []).append(handler)

    def unbind(self, chord: str, handler: Callable[[], None]):
        key = self._normalize(chord)
        handlers = self._handlers.get(key)
        if not handlers or handler not in handlers:
            return
        handlers.remove(handler)
        if not handlers:
            del self._handlers[key]

    def active(self, chord: str) -> List[Callable[[], None]]:
        return list(self._handlers.get(self._normalize(chord), []))

    def dispatch(self, chord: str) -> bool:
        """등록된 핸들러를 모두 호출. 하나라도 있으면 True."""
        handlers = self.active(chord)
        for handler in handlers:
            handler()
        return bool(handlers)
