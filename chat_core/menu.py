"""
Menu state machine.
Every handler returns the next State; invalid input loops inside the handler.
"""

import logging
from typing import Callable, Dict, Optional

from remote.llm import LLMClient, RemoteCallError
from .console import Colors, print_colored, read_line
from .i18n import MessageMap
from .session import BACK_COMMANDS, ChatSession
from .state import State
from .store import AUTO_OFF, AUTO_ON, ChatConfig, ConfigNotFound, ConfigStore


logger = logging.getLogger(__name__)

MENU_COMMANDS: Dict[str, State] = {
    '1': State.SET_MODEL,
    '2': State.SET_API,
    '3': State.SET_SYSTEM_PROMPT,
    '4': State.CHAT,
    '5': State.SETTINGS,
    '/exit': State.EXIT,
}


def dispatch(answer: str) -> Optional[State]:
    """Map a menu answer to its state, None when the command is not recognized."""
    return MENU_COMMANDS.get(answer.strip().lower())


def parse_index(answer: str, count: int) -> Optional[int]:
    """Turn a 1-based answer into a 0-based index, None when invalid."""
    answer = answer.strip()
    if not answer.isdigit():
        return None
    number = int(answer)
    if 1 <= number <= count:
        return number - 1
    return None


class Menu:
    def __init__(self, store: ConfigStore, messages: MessageMap,
                 client_factory: Callable[[str], LLMClient]) -> None:
        self.store = store
        self.messages = messages
        self.client_factory = client_factory
        self.llm: Optional[LLMClient] = None
        self.session: Optional[ChatSession] = None
        self.handlers: Dict[State, Callable[[], State]] = {
            State.MENU: self.choose,
            State.SET_MODEL: self.set_model,
            State.SET_API: self.set_api,
            State.SET_SYSTEM_PROMPT: self.set_system_prompt,
            State.SETTINGS: self.settings,
            State.CHAT: self.enter_chat,
        }

    def connect(self, api_link: str) -> None:
        """Replace the client handle (and its chat session) for a new endpoint."""
        self._attach(self.client_factory(api_link))

    def _attach(self, llm: LLMClient) -> None:
        self.llm = llm
        self.session = ChatSession(llm, self.store, self.messages)

    def _require_client(self) -> LLMClient:
        if self.llm is None:
            self.connect(self.store.load().api_link)
        return self.llm

    def start(self) -> State:
        """Pick the first state: setup on first run, chat when auto-chat is on, else the menu."""
        try:
            config = self.store.load()
        except ConfigNotFound:
            logger.info("No usable config, starting API setup")
            return State.SET_API
        try:
            self.connect(config.api_link)
        except RemoteCallError as e:
            logger.warning(f"Saved API link {config.api_link!r} is unusable: {e}")
            return State.SET_API
        if config.auto_chat_enabled:
            return State.CHAT
        return State.MENU

    def run(self, state: Optional[State] = None) -> None:
        if state is None:
            state = self.start()
        while state is not State.EXIT:
            logger.debug(f"State: {state.value}")
            try:
                state = self.handlers[state]()
            except EOFError:
                state = State.EXIT
            except ConfigNotFound:
                state = State.SET_API
            except RemoteCallError as e:
                print_colored(f"{self.messages['remote_error']}{e}", Colors.RED)
                state = State.MENU
            except OSError as e:
                logger.error(f"Config write failed: {e}")
                print_colored(f"{self.messages['config_error']}{e}", Colors.RED)
                state = State.MENU
        print_colored(self.messages['goodbye'], Colors.CYAN)

    def choose(self) -> State:
        answer = read_line(self.messages['choose_question'])
        state = dispatch(answer)
        if state is None:
            print_colored(self.messages['unknown_command'], Colors.YELLOW)
            return State.MENU
        return state

    def set_model(self) -> State:
        config = self.store.load()
        models = self._require_client().list_models()
        if not models:
            print_colored(self.messages['no_models'], Colors.RED)
            return State.MENU

        listing = '\n'.join(f"{i}: {name}" for i, name in enumerate(models, 1))
        while True:
            answer = read_line(f"{self.messages['choose_model']}\n{listing}\n")
            index = parse_index(answer, len(models))
            if index is not None:
                break
            print_colored(self.messages['invalid_input'], Colors.YELLOW)

        config.model = models[index]
        self.store.save(config)
        logger.info(f"Model set to {config.model}")
        print_colored(self.messages['set_model_success'], Colors.GREEN)
        return State.MENU

    def set_api(self) -> State:
        while True:
            api_link = read_line(self.messages['set_api']).strip()
            if api_link:
                try:
                    llm = self.client_factory(api_link)
                    break
                except RemoteCallError:
                    pass
            print_colored(self.messages['invalid_input'], Colors.YELLOW)

        try:
            config = self.store.load()
            config.api_link = api_link
        except ConfigNotFound:
            config = ChatConfig(api_link=api_link)
        self.store.save(config)
        print_colored(self.messages['set_api_success'], Colors.GREEN)
        self._attach(llm)
        return State.MENU

    def set_system_prompt(self) -> State:
        system_prompt = read_line(self.messages['set_system_prompt']).strip()
        config = self.store.load()
        config.system_prompt = system_prompt
        self.store.save(config)
        print_colored(self.messages['set_system_prompt_success'], Colors.GREEN)
        return State.MENU

    def settings(self) -> State:
        config = self.store.load()
        current = self.messages[AUTO_ON if config.auto_chat_enabled else AUTO_OFF]
        while True:
            answer = read_line(f"{self.messages['other_settings']}({current})\n").strip()
            if answer == '1':
                value = config.toggle_auto_chat()
                self.store.save(config)
                print_colored(f"{self.messages['auto_enter_chat']}{self.messages[value]}", Colors.GREEN)
                return State.MENU
            if answer.lower() in BACK_COMMANDS:
                return State.MENU
            print_colored(self.messages['invalid_input'], Colors.YELLOW)

    def enter_chat(self) -> State:
        self._require_client()
        return self.session.start()
