"""
Console message catalogs.
English is the default; Simplified Chinese is picked for mainland-China locales.
"""

import os
import locale
import logging
from typing import Dict, Optional


logger = logging.getLogger(__name__)

MessageMap = Dict[str, str]

EN: MessageMap = {
    'choose_question': (
        "\nWhat would you like to do?\n"
        "1: Choose a model\n"
        "2: Set the API link\n"
        "3: Set the system prompt\n"
        "4: Start chatting\n"
        "5: Other settings\n"
        "/exit: Quit\n"
    ),
    'set_api': "Enter the Ollama API link (e.g. http://localhost:11434): ",
    'set_api_success': "API link saved.",
    'choose_model': "Choose a model by number:",
    'set_model_success': "Model saved.",
    'set_system_prompt': "Enter the system prompt (leave empty to clear): ",
    'set_system_prompt_success': "System prompt saved.",
    'invalid_input': "Invalid input, please try again.",
    'unknown_command': "Unrecognized command.",
    'no_models': "No models are available on the server.",
    'start_chat': "Chat started, type /back to return to the menu or /exit to quit",
    'model': "model: ",
    'system': "System: ",
    'you': "You: ",
    'bot': "Bot: ",
    'other_settings': "1: Enter chat automatically on startup ",
    'auto_enter_chat': "Enter chat automatically: ",
    'on': "on",
    'off': "off",
    'config_error': "Could not write the config file: ",
    'remote_error': "Request to the Ollama server failed: ",
    'interrupted': "Response interrupted.",
    'goodbye': "Goodbye!",
}

ZH_HANS: MessageMap = {
    'choose_question': (
        "\n请选择操作：\n"
        "1: 选择模型\n"
        "2: 设置 API 地址\n"
        "3: 设置系统提示词\n"
        "4: 开始聊天\n"
        "5: 其他设置\n"
        "/exit: 退出\n"
    ),
    'set_api': "请输入 Ollama API 地址（例如 http://localhost:11434）：",
    'set_api_success': "API 地址已保存。",
    'choose_model': "请输入模型编号：",
    'set_model_success': "模型已保存。",
    'set_system_prompt': "请输入系统提示词（留空则清除）：",
    'set_system_prompt_success': "系统提示词已保存。",
    'invalid_input': "输入无效，请重试。",
    'unknown_command': "无法识别的命令。",
    'no_models': "服务器上没有可用的模型。",
    'start_chat': "开始聊天，输入 /back 返回菜单，输入 /exit 退出",
    'model': "模型：",
    'system': "系统：",
    'you': "你：",
    'bot': "机器人：",
    'other_settings': "1: 启动时自动进入聊天 ",
    'auto_enter_chat': "自动进入聊天：",
    'on': "开",
    'off': "关",
    'config_error': "无法写入配置文件：",
    'remote_error': "请求 Ollama 服务器失败：",
    'interrupted': "已中断回复。",
    'goodbye': "再见！",
}

_LOCALE_ENV_VARS = ('LC_ALL', 'LC_MESSAGES', 'LANG')


def normalize_locale(tag: str) -> str:
    """'zh_CN.UTF-8' -> 'zh-cn', 'Chinese (Simplified)_China.936' -> 'chinese (simplified)-china'"""
    tag = tag.split('.')[0].split('@')[0]
    return tag.replace('_', '-').strip().lower()


def is_mainland_chinese(tag: Optional[str]) -> bool:
    if not tag:
        return False
    return normalize_locale(tag) in ('zh-cn', 'zh-hans-cn', 'chinese (simplified)-china')


def detect_locale() -> Optional[str]:
    """Return the OS locale tag, checking the environment before the C library."""
    for name in _LOCALE_ENV_VARS:
        value = os.environ.get(name)
        if value and value not in ('C', 'POSIX'):
            return value
    try:
        tag, _encoding = locale.getlocale()
    except ValueError:
        tag = None
    return tag


def resolve(override: Optional[str] = None) -> MessageMap:
    tag = override or detect_locale()
    logger.debug(f"Detected locale: {tag}")
    if is_mainland_chinese(tag):
        return ZH_HANS
    return EN
