"""Unit tests for the completion client's retry, deadline and response handling."""

import asyncio

import httpx
import openai
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from llm.chat_client import ChatCompletionClient
from utils.errors import CompletionError

REQUEST = httpx.Request("POST", "https://api.deepseek.com/chat/completions")


class StubChat:
    """Stands in for ChatOpenAI; plays back a list of outcomes."""

    def __init__(self, *outcomes, delay=0.0):
        self.outcomes = list(outcomes)
        self.delay = delay
        self.calls = []

    async def ainvoke(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def make_client(chat, **kwargs):
    kwargs.setdefault("retry_base_delay", 0)
    return ChatCompletionClient(api_key="test-key", chat_model=chat, **kwargs)


@pytest.mark.unit
def test_complete_sends_system_and_user_messages():
    chat = StubChat(AIMessage(content="tailored"))
    client = make_client(chat)

    text = asyncio.run(client.complete("system text", "user text", 1024))

    assert text == "tailored"
    messages, kwargs = chat.calls[0]
    assert isinstance(messages[0], SystemMessage) and messages[0].content == "system text"
    assert isinstance(messages[1], HumanMessage) and messages[1].content == "user text"
    assert kwargs == {"max_tokens": 1024}


@pytest.mark.unit
def test_transient_failure_is_retried():
    chat = StubChat(openai.APIConnectionError(request=REQUEST), AIMessage(content="ok"))
    client = make_client(chat, max_retries=2)

    assert asyncio.run(client.complete("s", "u", 10)) == "ok"
    assert len(chat.calls) == 2


@pytest.mark.unit
def test_retries_are_bounded():
    chat = StubChat(openai.APIConnectionError(request=REQUEST))
    client = make_client(chat, max_retries=2)

    with pytest.raises(CompletionError) as exc_info:
        asyncio.run(client.complete("s", "u", 10))

    assert len(chat.calls) == 3
    assert exc_info.value.attempts == 3
    assert "after 3 attempts" in exc_info.value.message


@pytest.mark.unit
def test_each_attempt_has_a_deadline():
    """Test that a hung upstream call becomes an error instead of a stall."""
    chat = StubChat(AIMessage(content="late"), delay=1.0)
    client = make_client(chat, timeout=0.05, max_retries=1)

    with pytest.raises(CompletionError, match="timed out"):
        asyncio.run(client.complete("s", "u", 10))
    assert len(chat.calls) == 2


@pytest.mark.unit
def test_auth_errors_are_not_retried():
    error = openai.AuthenticationError(
        "invalid api key", response=httpx.Response(401, request=REQUEST), body=None
    )
    chat = StubChat(error)
    client = make_client(chat, max_retries=3)

    with pytest.raises(CompletionError, match="invalid api key"):
        asyncio.run(client.complete("s", "u", 10))
    assert len(chat.calls) == 1


@pytest.mark.unit
@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_response_is_malformed(content):
    class Blank:
        pass

    response = Blank()
    response.content = content
    client = make_client(StubChat(response))

    with pytest.raises(CompletionError, match="empty or malformed"):
        asyncio.run(client.complete("s", "u", 10))


@pytest.mark.unit
def test_content_blocks_are_joined():
    response = AIMessage(content=[{"type": "text", "text": "Hello "}, "world"])
    client = make_client(StubChat(response))

    assert asyncio.run(client.complete("s", "u", 10)) == "Hello world"


@pytest.mark.unit
def test_missing_api_key_fails_on_first_call():
    client = ChatCompletionClient(api_key=None)

    with pytest.raises(CompletionError, match="DEEPSEEK_API_KEY"):
        asyncio.run(client.complete("s", "u", 10))
