import logging

import pytest

from chat_core import config as settings_module
from chat_core.config import load_settings, setup_logging


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module, 'load_dotenv', lambda: False)
    for name in ('CHAT_CONFIG_PATH', 'LOGGING_LEVEL', 'LOG_FILE', 'CHAT_LOCALE', 'OLLAMA_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings()
    assert settings.config_path == 'config.json'
    assert settings.log_level_str == 'WARNING'
    assert settings.log_file is None
    assert settings.locale_override is None
    assert settings.request_timeout is None


def test_environment_overrides(clean_env):
    clean_env.setenv('CHAT_CONFIG_PATH', '/tmp/chat.json')
    clean_env.setenv('LOGGING_LEVEL', 'logging.debug')
    clean_env.setenv('CHAT_LOCALE', 'zh_CN')
    clean_env.setenv('OLLAMA_TIMEOUT', ' 30 ')
    settings = load_settings()
    assert settings.config_path == '/tmp/chat.json'
    assert settings.log_level_str == 'DEBUG'
    assert settings.locale_override == 'zh_CN'
    assert settings.request_timeout == 30.0


def test_bad_timeout_is_ignored(clean_env):
    clean_env.setenv('OLLAMA_TIMEOUT', 'soon')
    assert load_settings().request_timeout is None


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / 'chat.log'
    setup_logging('INFO', str(log_file))
    logging.getLogger('chat_core.test').info('hello from the test')
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert 'hello from the test' in log_file.read_text(encoding='utf-8')
    setup_logging('WARNING')
