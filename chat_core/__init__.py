"""
Core application package for the Ollama terminal chat.
Provides runtime settings, the JSON config store, localized messages,
console utilities, the menu state machine and the chat session loop.
"""

__all__ = [
    "config",
    "store",
    "i18n",
    "console",
    "state",
    "menu",
    "session",
]
