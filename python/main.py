import argparse
import sys
import os
import logging
import socket
import subprocess
import time
import atexit
import requests

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from translator.api_client import ConvertApiClient
from translator.config import configure_logging, load_settings
from translator.keybindings import KeyBindings
from translator.languages import LANGUAGES, find_language
from translator.session import CONVERT_SHORTCUT, ConverterSession
from utils.clipboard import SystemClipboard

logger = logging.getLogger("CodeTranslator.Main")

API_PROCESS = None

# REPL 명령어 -> 단축키 (터미널에서는 Ctrl+Enter를 구분할 수 없음)
COMMAND_CHORDS = {":convert": CONVERT_SHORTCUT}
REPL_COMMANDS = set(COMMAND_CHORDS) | {":swap", ":copy", ":from", ":to", ":clear", ":show", ":langs", ":quit"}

REPL_HELP = """Type or paste code, then use a command:
  :convert        translate the buffered code (Ctrl+Enter)
  :swap           swap languages and code
  :copy           copy the output to the clipboard
  :from LANG      set the source language
  :to LANG        set the target language
  :clear          clear the input buffer
  :show           print the current state
  :langs          list the supported languages
  :quit           exit"""


def get_free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('', 0))
        return s.getsockname()[1]

def wait_for_api_server(port, timeout=10):
    url = f"http://127.0.0.1:{port}/health"
    start = time.time()
    while time.time() - start < timeout:
        try:
            resp = requests.get(url, timeout=1)
            if resp.status_code == 200:
                return True
        except requests.RequestException:
            pass
        time.sleep(0.5)
    return False

def cleanup_process():
    global API_PROCESS
    if API_PROCESS:
        logger.info("Terminating Code Translator API Server...")
        API_PROCESS.terminate()
        try:
            API_PROCESS.wait(timeout=2)
        except Exception:
            API_PROCESS.kill()
        API_PROCESS = None

atexit.register(cleanup_process)

def spawn_api_server(config_path=None):
    """로컬 API 서버를 서브프로세스로 띄우고 base URL을 반환"""
    global API_PROCESS

    port = get_free_port()
    logger.info(f"Allocated API Port: {port}")

    cmd = [sys.executable, "-m", "translator.api_server", "--port", str(port)]
    if config_path:
        cmd += ["--config", config_path]
    logger.info(f"Launching: {' '.join(cmd)}")

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [os.path.dirname(os.path.abspath(__file__)), env.get("PYTHONPATH")]))

    API_PROCESS = subprocess.Popen(cmd, env=env, stdout=sys.stderr, stderr=sys.stderr)

    if not wait_for_api_server(port):
        cleanup_process()
        raise RuntimeError("Failed to start Code Translator API Server")

    logger.info("Code Translator API Server Online")
    return f"http://127.0.0.1:{port}"

def resolve_language(name, parser=None):
    lang = find_language(name)
    if lang is None:
        message = f"Unsupported language '{name}'. Choose from: {', '.join(LANGUAGES)}"
        if parser:
            parser.error(message)
        raise ValueError(message)
    return lang

def _server_url(args):
    if args.spawn_server:
        return spawn_api_server(args.config)
    return args.server

def _print_state(session, out):
    s = session.state
    out.write(f"[{s.input_lang} -> {s.output_lang}] {s.status_message}\n")
    if s.output_code:
        out.write(s.output_code + "\n")

# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_serve(args):
    from translator.api_server import run_api_server

    settings = load_settings(args.config)
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    run_api_server(settings)
    return 0

def cmd_convert(args, parser=None):
    input_lang = resolve_language(args.source, parser)
    output_lang = resolve_language(args.target, parser)

    if args.file and args.file != "-":
        with open(args.file, "r", encoding="utf-8") as f:
            code = f.read()
    else:
        code = sys.stdin.read()

    session = ConverterSession(ConvertApiClient(_server_url(args), timeout=args.timeout))
    session.set_input_lang(input_lang)
    session.set_output_lang(output_lang)
    session.set_input_code(code)

    state = session.convert()
    if state.phase != "succeeded":
        sys.stderr.write(state.status_message + "\n")
        return 1

    sys.stdout.write(state.output_code + "\n")
    return 0

def run_repl(session, lines, out=sys.stdout):
    """
    터미널 대화 세션. lines는 입력 줄의 iterable (테스트에서 리스트 주입).
    """
    bindings = KeyBindings()
    buffer = []

    with session.mount(bindings):
        out.write(REPL_HELP + "\n")
        for raw in lines:
            line = raw.rstrip("\n")
            command, _, arg = line.strip().partition(" ")

            # 알 수 없는 ":" 줄은 코드로 취급 (:param, Ruby 심볼 등)
            if command not in REPL_COMMANDS:
                buffer.append(line)
                session.set_input_code("\n".join(buffer))
                continue

            if command in COMMAND_CHORDS:
                bindings.dispatch(COMMAND_CHORDS[command])
                _print_state(session, out)
            elif command == ":swap":
                session.swap()
                buffer = session.state.input_code.splitlines()
                _print_state(session, out)
            elif command == ":copy":
                if session.copy_output():
                    out.write("Copied!\n")
            elif command in (":from", ":to"):
                lang = find_language(arg)
                if lang is None:
                    out.write(f"Unsupported language '{arg}'\n")
                elif command == ":from":
                    session.set_input_lang(lang)
                else:
                    session.set_output_lang(lang)
            elif command == ":clear":
                buffer = []
                session.clear_input()
            elif command == ":show":
                out.write(session.state.input_code + "\n")
                _print_state(session, out)
            elif command == ":langs":
                out.write(", ".join(LANGUAGES) + "\n")
            elif command == ":quit":
                break
    return 0

def cmd_repl(args, parser=None):
    session = ConverterSession(ConvertApiClient(_server_url(args), timeout=args.timeout), clipboard=SystemClipboard())
    session.set_input_lang(resolve_language(args.source, parser))
    session.set_output_lang(resolve_language(args.target, parser))
    return run_repl(session, sys.stdin)

def build_parser():
    parser = argparse.ArgumentParser(description="AI code translator")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server and web UI")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=cmd_serve)

    for name, handler in (("convert", cmd_convert), ("repl", cmd_repl)):
        p = sub.add_parser(name)
        p.add_argument("--from", dest="source", default="JavaScript")
        p.add_argument("--to", dest="target", default="Python")
        p.add_argument("--server", default="http://127.0.0.1:8000")
        p.add_argument("--spawn-server", action="store_true", help="Start a local API server subprocess")
        p.add_argument("--timeout", type=float, default=60.0)
        p.set_defaults(handler=handler)
        if name == "convert":
            p.add_argument("file", nargs="?", default="-")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or load_settings(args.config).log_level)

    try:
        if args.handler is cmd_serve:
            return cmd_serve(args)
        return args.handler(args, parser)
    except KeyboardInterrupt:
        logger.info("User interrupted.")
        return 130
    except (RuntimeError, OSError) as e:
        logger.error(f"Critical Error: {e}")
        return 1
    finally:
        cleanup_process()

if __name__ == "__main__":
    sys.exit(main())
