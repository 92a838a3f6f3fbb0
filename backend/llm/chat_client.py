import asyncio
import logging
import random
from typing import Any, Optional

import openai
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from utils.errors import CompletionError
from .base import BaseLLM

# Transport failures worth another attempt; anything else (auth, bad request) is terminal
_RETRIABLE = (
    asyncio.TimeoutError,
    openai.APIConnectionError,  # includes APITimeoutError
    openai.RateLimitError,
    openai.InternalServerError,
)


class ChatCompletionClient(BaseLLM):
    """
    Completion client for an OpenAI-compatible chat endpoint (DeepSeek by default).

    Wraps ChatOpenAI so each call is a single system+user exchange authenticated
    with a bearer key. Every attempt runs under a deadline and transient
    failures are retried a bounded number of times with jittered backoff.
    Attributes:
        model (str): Model name sent with every request.
        timeout (float): Per-attempt deadline in seconds.
        max_retries (int): Extra attempts after the first one.
    Methods:
        complete(system_prompt, user_prompt, max_tokens) -> str:
            Returns the first choice's message content.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.deepseek.com",
        model: str = "deepseek-chat",
        temperature: float = 0.5,
        timeout: float = 120.0,
        max_retries: int = 2,
        retry_base_delay: float = 0.5,
        chat_model: Any = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max(0, int(max_retries))
        self.retry_base_delay = retry_base_delay
        # Built lazily so the app can start without a key configured
        self._chat = chat_model
        self._logger = logging.getLogger("magiccv.llm")

    def _client(self):
        if self._chat is None:
            if not self.api_key:
                raise CompletionError("DEEPSEEK_API_KEY is not configured")
            self._chat = ChatOpenAI(
                base_url=self.base_url,
                api_key=self.api_key,
                model=self.model,
                temperature=self.temperature,
                timeout=self.timeout,
                # Retries are owned by complete() so the deadline applies per attempt
                max_retries=0,
            )
            self._logger.info("Chat client ready model=%s base_url=%s", self.model, self.base_url)
        return self._chat

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        chat = self._client()
        messages = [SystemMessage(system_prompt), HumanMessage(user_prompt)]
        self._logger.info("Completion start max_tokens=%d prompt_chars=%d", max_tokens, len(system_prompt) + len(user_prompt))
        attempts = 0
        while True:
            attempts += 1
            try:
                response = await asyncio.wait_for(
                    chat.ainvoke(messages, max_tokens=max_tokens),
                    timeout=self.timeout,
                )
                break
            except _RETRIABLE as exc:
                if attempts > self.max_retries:
                    self._logger.error("Completion failed after %d attempts: %s", attempts, exc)
                    raise CompletionError(f"Model request failed: {_describe(exc)}", attempts=attempts) from exc
                delay = self.retry_base_delay * (2 ** (attempts - 1)) + random.uniform(0, 0.25)
                self._logger.warning("Retrying completion in %.2fs (attempt %d): %s", delay, attempts, _describe(exc))
                await asyncio.sleep(delay)
            except openai.OpenAIError as exc:
                self._logger.error("Completion rejected: %s", exc)
                raise CompletionError(f"Model request failed: {_describe(exc)}", attempts=attempts) from exc
        text = _content_text(response)
        self._logger.info("Completion done attempts=%d chars=%d", attempts, len(text))
        return text


def _describe(exc: BaseException) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return "timed out"
    return str(exc) or exc.__class__.__name__


def _content_text(response: Any) -> str:
    """Return the message content as text, rejecting shapes that carry none."""
    content = response.content if isinstance(response, AIMessage) else getattr(response, "content", None)
    if isinstance(content, list):
        # Some providers return content blocks; keep only the text ones
        content = "".join(
            block if isinstance(block, str) else block.get("text", "")
            for block in content
            if isinstance(block, (str, dict))
        )
    if not isinstance(content, str) or not content.strip():
        raise CompletionError("Model returned an empty or malformed response")
    return content
