import logging
from typing import List, Dict, Optional

from remote.llm import LLMClient, RemoteCallError
from .console import Colors, print_colored, read_line, write_token
from .i18n import MessageMap
from .state import State
from .store import ConfigStore


logger = logging.getLogger(__name__)

EXIT_COMMANDS = ('/exit',)
BACK_COMMANDS = ('/back', '/choose')


class ChatSession:
    def __init__(self, llm: LLMClient, store: ConfigStore, messages: MessageMap) -> None:
        self.llm = llm
        self.store = store
        self.messages = messages
        self.transcript: List[Dict[str, str]] = []

    def reset(self) -> None:
        self.transcript = []

    def build_messages(self, system_prompt: Optional[str]) -> List[Dict[str, str]]:
        return [{'role': 'system', 'content': system_prompt or ''}] + list(self.transcript)

    def start(self) -> State:
        """Load config and the model list once, print the chat header and run the loop."""
        config = self.store.load()
        models = self.llm.list_models()
        model = config.model or (models[0] if models else None)
        if not model:
            print_colored(self.messages['no_models'], Colors.RED)
            return State.MENU

        logger.info(f"Starting chat with model {model}")
        print_colored(f"\n{self.messages['start_chat']} ({self.messages['model']}{model})", Colors.CYAN)
        if config.system_prompt:
            print_colored(f"\n{self.messages['system']}{config.system_prompt}", Colors.GRAY)
        return self.run(model, config.system_prompt)

    def run(self, model: str, system_prompt: Optional[str]) -> State:
        while True:
            try:
                user_input = read_line(self.messages['you'], Colors.GREEN)
            except EOFError:
                return State.EXIT

            command = user_input.strip().lower()
            if command in EXIT_COMMANDS:
                return State.EXIT
            if command in BACK_COMMANDS:
                self.reset()
                return State.MENU
            if not command:
                continue

            self.transcript.append({'role': 'user', 'content': user_input})
            try:
                reply = self._stream_reply(model, system_prompt)
            except RemoteCallError as e:
                # unanswered turns are not kept
                self.transcript.pop()
                print_colored(f"\n{self.messages['remote_error']}{e}", Colors.RED)
                continue

            self.transcript.append({'role': 'assistant', 'content': reply})
            print('\n')

    def _stream_reply(self, model: str, system_prompt: Optional[str]) -> str:
        print_colored(self.messages['bot'], Colors.BLUE)
        stream = self.llm.stream_chat(model, self.build_messages(system_prompt))
        parts: List[str] = []
        try:
            for token in stream:
                write_token(token)
                parts.append(token)
        except KeyboardInterrupt:
            stream.cancel()
            print_colored(f"\n{self.messages['interrupted']}", Colors.YELLOW)
        reply = ''.join(parts)
        logger.debug(f"Reply length: {len(reply)}")
        return reply
