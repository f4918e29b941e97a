import asyncio
from types import SimpleNamespace

import openai
import pytest

from mockinterview import llm
from mockinterview.config import Settings
from mockinterview.schemas import ModelRequest


def _request(**overrides):
    data = {"system_prompt": "sys", "user_prompt": "user", "response_schema": {}}
    data.update(overrides)
    return ModelRequest(**data)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_openai(monkeypatch):
    """Replace AsyncOpenAI with a stub; returns the completions recorder."""
    completions = FakeCompletions()

    class FakeClient:
        def __init__(self, api_key=None, timeout=None):
            self.api_key = api_key
            self.timeout = timeout
            self.chat = SimpleNamespace(completions=completions)

    monkeypatch.setattr(llm, "AsyncOpenAI", FakeClient)
    monkeypatch.setattr(llm, "get_settings", lambda: Settings(openai_api_key="sk-test", openai_model="gpt-4o-mini"))
    return completions


def test_returns_parsed_json(fake_openai):
    fake_openai.content = '{"questions": [{"id": "q1"}]}'
    result = asyncio.run(llm.complete_json(_request(temperature=0.2)))
    assert result == {"questions": [{"id": "q1"}]}

    [call] = fake_openai.calls
    assert call["model"] == "gpt-4o-mini"
    assert call["temperature"] == 0.2
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][0] == {"role": "system", "content": "sys"}


def test_default_temperature_from_settings(fake_openai):
    fake_openai.content = "{}"
    asyncio.run(llm.complete_json(_request()))
    assert fake_openai.calls[0]["temperature"] == 0.4


def test_invalid_json_becomes_empty(fake_openai):
    fake_openai.content = "Sure! Here are your questions: ..."
    assert asyncio.run(llm.complete_json(_request())) == {}


def test_non_object_json_becomes_empty(fake_openai):
    fake_openai.content = '[{"id": "q1"}]'
    assert asyncio.run(llm.complete_json(_request())) == {}


def test_empty_content_becomes_empty(fake_openai):
    fake_openai.content = None
    assert asyncio.run(llm.complete_json(_request())) == {}


def test_api_error_is_wrapped(fake_openai):
    fake_openai.error = openai.OpenAIError("You exceeded your current quota")
    with pytest.raises(llm.ModelInvocationError) as excinfo:
        asyncio.run(llm.complete_json(_request()))
    assert "quota" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, openai.OpenAIError)


def test_timeout_is_wrapped(fake_openai):
    fake_openai.error = asyncio.TimeoutError()
    with pytest.raises(llm.ModelInvocationError):
        asyncio.run(llm.complete_json(_request()))


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(llm, "get_settings", lambda: Settings(openai_api_key=None))
    with pytest.raises(llm.ModelInvocationError):
        asyncio.run(llm.complete_json(_request()))


def test_no_choices_becomes_empty(monkeypatch):
    class EmptyCompletions:
        async def create(self, **kwargs):
            return SimpleNamespace(choices=[])

    class FakeClient:
        def __init__(self, api_key=None, timeout=None):
            self.chat = SimpleNamespace(completions=EmptyCompletions())

    monkeypatch.setattr(llm, "AsyncOpenAI", FakeClient)
    monkeypatch.setattr(llm, "get_settings", lambda: Settings(openai_api_key="sk-test"))
    assert asyncio.run(llm.complete_json(_request())) == {}
