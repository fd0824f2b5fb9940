import logging
import shutil
import subprocess
import sys


class ClipboardUnavailable(RuntimeError):
    pass


class SystemClipboard:
    """
    OS 클립보드 명령어 래퍼 (pbcopy / clip / wl-copy / xclip / xsel).
    ConverterSession의 clipboard 콜백으로 사용됩니다.
    """
    LINUX_COMMANDS = [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]

    def __init__(self):
        self.logger = logging.getLogger("CodeTranslator.Clipboard")
        self.os_type = sys.platform

    def _command(self):
        if self.os_type == "darwin":
            return ["pbcopy"]
        if self.os_type == "win32":
            return ["clip"]
        for cmd in self.LINUX_COMMANDS:
            if shutil.which(cmd[0]):
                return cmd
        return None

    def __call__(self, text: str):
        cmd = self._command()
        if not cmd:
            raise ClipboardUnavailable("No clipboard command found (install wl-clipboard, xclip or xsel)")
        # clip.exe는 UTF-16LE를 기대함
        encoding = "utf-16-le" if self.os_type == "win32" else "utf-8"
        subprocess.run(cmd, input=text.encode(encoding), check=True)
        self.logger.debug(f"Copied {len(text)} chars via {cmd[0]}")
