from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """BaseLLM is an abstract base class for text-completion backends.

    The pipeline only ever needs one exchange shape: a system prompt and a user
    prompt go in, generated text comes out. Implementations must suspend rather
    than block the event loop while waiting on the network.
    Methods:
        complete(system_prompt: str, user_prompt: str, max_tokens: int) -> str:
            Run one completion and return the generated text.
    """

    model: str = ""

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        """Send one system/user prompt pair to the model and return its text."""
        pass
