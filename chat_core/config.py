import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


DEFAULT_CONFIG_PATH = 'config.json'


@dataclass
class Settings:
    config_path: str
    log_level_str: str
    log_file: Optional[str]
    locale_override: Optional[str]
    request_timeout: Optional[float]


def setup_logging(log_level_str: str, log_file: Optional[str] = None) -> None:
    level = getattr(logging, log_level_str.upper(), logging.WARNING)
    handlers = [logging.FileHandler(log_file, encoding='utf-8')] if log_file else None
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _parse_float_env(name: str) -> Optional[float]:
    try:
        value = os.getenv(name)
        if value is None or not value.strip():
            return None
        return float(value.strip())
    except ValueError:
        return None


def load_settings() -> Settings:
    load_dotenv()

    log_level_str = os.getenv('LOGGING_LEVEL', 'WARNING').upper()
    if log_level_str.startswith('LOGGING.'):
        log_level_str = log_level_str.replace('LOGGING.', '')

    config_path = os.getenv('CHAT_CONFIG_PATH') or DEFAULT_CONFIG_PATH
    log_file = os.getenv('LOG_FILE') or None
    locale_override = os.getenv('CHAT_LOCALE') or None

    return Settings(
        config_path=config_path,
        log_level_str=log_level_str,
        log_file=log_file,
        locale_override=locale_override,
        request_timeout=_parse_float_env('OLLAMA_TIMEOUT'),
    )
