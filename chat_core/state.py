from enum import Enum


class State(Enum):
    MENU = 'menu'
    SET_MODEL = 'set_model'
    SET_API = 'set_api'
    SET_SYSTEM_PROMPT = 'set_system_prompt'
    SETTINGS = 'settings'
    CHAT = 'chat'
    EXIT = 'exit'
