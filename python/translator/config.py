import os
import json
import logging
from typing import Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

logger = logging.getLogger("CodeTranslator.Config")

DEFAULT_CONFIG_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../config/config.json'))

# 환경변수 -> Settings 필드
ENV_OVERRIDES = {
    "GEMINI_API_URL": "api_url",
    "GEMINI_API_KEY": "api_key",
    "TRANSLATOR_TEMPERATURE": "temperature",
    "TRANSLATOR_TIMEOUT": "timeout",
    "TRANSLATOR_HOST": "host",
    "TRANSLATOR_PORT": "port",
    "TRANSLATOR_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """프로세스 전역 설정. 앱 생성 시 주입되며 핸들러는 os.environ을 읽지 않음."""
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    timeout: float = Field(default=30.0, gt=0)
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_url and self.api_key)


def _read_config_file(config_path: str) -> dict:
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return data.get('code_translator', {}) or {}
    except FileNotFoundError:
        return {}
    except (OSError, ValueError, AttributeError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}


def load_settings(config_path: Optional[str] = None, environ=None) -> Settings:
    """
    config.json -> .env -> 환경변수 순으로 병합합니다. (뒤쪽이 우선)
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    config_data = _read_config_file(config_path or DEFAULT_CONFIG_PATH)

    for env_key, field in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value:
            config_data[field] = value

    return Settings(**config_data)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s - %(message)s'
    )
