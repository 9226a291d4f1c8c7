"""
Shared fixtures: a scripted stdin, a temp config store and a fake Ollama handle.
"""

import json

import pytest

from chat_core import i18n
from chat_core.menu import Menu
from chat_core.store import ConfigStore
from remote.llm import ChatStream, RemoteCallError


class FakeLLM:
    """Stands in for LLMClient; replies are token lists, exceptions, or generator factories."""

    def __init__(self, models=None, replies=None, list_error=None):
        self.models = list(models or [])
        self.replies = list(replies or [])
        self.list_error = list_error
        self.calls = []
        self.list_calls = 0

    def list_models(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.models)

    def stream_chat(self, model, messages):
        self.calls.append({'model': model, 'messages': [dict(m) for m in messages]})
        reply = self.replies.pop(0) if self.replies else ['ok']
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return ChatStream(reply())
        return ChatStream({'message': {'content': token}} for token in reply)


class ClientFactory:
    """Records every endpoint it is asked for; links in bad_links fail like an unparsable host."""

    def __init__(self, llm, bad_links=()):
        self.llm = llm
        self.bad_links = set(bad_links)
        self.links = []

    def __call__(self, api_link):
        self.links.append(api_link)
        if api_link in self.bad_links:
            raise RemoteCallError(f"Port could not be cast to integer value in {api_link!r}")
        return self.llm


@pytest.fixture
def messages():
    return i18n.EN


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / 'config.json'


@pytest.fixture
def store(config_path):
    return ConfigStore(str(config_path))


@pytest.fixture
def write_config(config_path):
    def _write(data):
        config_path.write_text(json.dumps(data), encoding='utf-8')
    return _write


@pytest.fixture
def read_config(config_path):
    def _read():
        return json.loads(config_path.read_text(encoding='utf-8'))
    return _read


@pytest.fixture
def feed_input(monkeypatch):
    """Script the answers typed at each prompt; EOFError once they run out.

    Each call starts a fresh list of the prompts shown.
    """

    def _feed(*answers):
        queue = list(answers)
        prompts = []

        def fake_input(prompt=''):
            prompts.append(prompt)
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr('builtins.input', fake_input)
        return prompts

    return _feed


@pytest.fixture
def fake_llm():
    return FakeLLM(models=['llama3', 'mistral'])


@pytest.fixture
def factory(fake_llm):
    return ClientFactory(fake_llm)


@pytest.fixture
def menu(store, messages, factory):
    return Menu(store=store, messages=messages, client_factory=factory)


@pytest.fixture
def make_llm():
    return FakeLLM


@pytest.fixture
def make_menu(store, messages):
    """Build a Menu around a fresh FakeLLM; returns (menu, llm)."""
    def _make(bad_links=(), **llm_kwargs):
        llm = FakeLLM(**llm_kwargs)
        return Menu(store=store, messages=messages, client_factory=ClientFactory(llm, bad_links)), llm
    return _make
