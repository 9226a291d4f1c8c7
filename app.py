#!/usr/bin/env python3
"""
Ollama Terminal Chat - Main Application
A menu-driven streaming chat client for a local Ollama server.
"""

import logging
import sys

from remote.llm import LLMClient

from chat_core import i18n
from chat_core.config import load_settings, setup_logging
from chat_core.console import print_banner, print_colored, Colors
from chat_core.menu import Menu
from chat_core.store import ConfigStore


def main():
    """Application entrypoint that wires up dependencies and runs the menu loop."""
    settings = load_settings()

    # Configure logging
    setup_logging(settings.log_level_str, settings.log_file)
    logger = logging.getLogger(__name__)
    logger.info(f"Logging level set to: {settings.log_level_str}")
    logger.info(f"Config file: {settings.config_path}")

    messages = i18n.resolve(settings.locale_override)
    store = ConfigStore(settings.config_path)

    def client_factory(api_link: str) -> LLMClient:
        return LLMClient(api_link, timeout=settings.request_timeout)

    print_banner()
    menu = Menu(store=store, messages=messages, client_factory=client_factory)
    try:
        menu.run()
    except KeyboardInterrupt:
        print_colored(f"\n\n{messages['goodbye']}", Colors.CYAN)
    sys.exit(0)


if __name__ == "__main__":
    main()
