from .base import BaseLLM
from .chat_client import ChatCompletionClient
from .prompts import PromptPair, build_cover_letter_prompt, build_cv_prompt, build_email_prompt

__all__ = [
    "BaseLLM",
    "ChatCompletionClient",
    "PromptPair",
    "build_cover_letter_prompt",
    "build_cv_prompt",
    "build_email_prompt",
]
