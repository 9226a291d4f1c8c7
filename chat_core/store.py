"""
JSON config persistence.
The config file is the single source of truth between runs and is always
rewritten as a whole.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

AUTO_ON = 'on'
AUTO_OFF = 'off'

_KNOWN_KEYS = ('apiLink', 'model', 'systemPrompt', 'autoInChat')


class ConfigNotFound(Exception):
    """No usable config yet: the file is missing, unreadable or has no apiLink."""


@dataclass
class ChatConfig:
    api_link: str
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    auto_in_chat: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def auto_chat_enabled(self) -> bool:
        return self.auto_in_chat == AUTO_ON

    def toggle_auto_chat(self) -> str:
        self.auto_in_chat = AUTO_OFF if self.auto_in_chat == AUTO_ON else AUTO_ON
        return self.auto_in_chat

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'apiLink': self.api_link}
        if self.model is not None:
            data['model'] = self.model
        if self.system_prompt is not None:
            data['systemPrompt'] = self.system_prompt
        if self.auto_in_chat is not None:
            data['autoInChat'] = self.auto_in_chat
        for key, value in self.extra.items():
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChatConfig':
        api_link = data.get('apiLink')
        if not isinstance(api_link, str) or not api_link.strip():
            raise ConfigNotFound("config has no apiLink")
        return cls(
            api_link=api_link,
            model=data.get('model'),
            system_prompt=data.get('systemPrompt'),
            auto_in_chat=data.get('autoInChat'),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )


class ConfigStore:
    """Loads and saves a ChatConfig as one flat JSON document."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> ChatConfig:
        """
        Read the config file.

        Raises:
            ConfigNotFound: file absent, unparsable, not an object, or missing apiLink
        """
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise ConfigNotFound(f"{self.path} does not exist")
        except OSError as e:
            logger.warning(f"Could not read {self.path}: {e}")
            raise ConfigNotFound(str(e)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unparsable config {self.path}: {e}")
            raise ConfigNotFound(str(e)) from e

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {self.path}: top level is not an object")
            raise ConfigNotFound("config is not a JSON object")

        return ChatConfig.from_dict(data)

    def save(self, config: ChatConfig) -> None:
        """Overwrite the whole file. OSError propagates to the caller."""
        payload = json.dumps(config.to_dict(), ensure_ascii=False, separators=(',', ':'))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding='utf-8')
        logger.info(f"Config written to {self.path}")
