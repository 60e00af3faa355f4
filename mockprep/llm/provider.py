"""
Text-completion provider interface used by the interview AI adapter.
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """One completion plus token accounting."""
    content: str
    tokens_in: int = 0
    tokens_out: int = 0
    model: str = ""
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}

    @property
    def total_tokens(self) -> int:
        return self.tokens_in + self.tokens_out


class LLMProvider(ABC):
    """
    A model backend that turns chat messages into text.

    Implementations own transport concerns (timeouts, retries); callers only
    see the returned text or an exception.
    """

    @abstractmethod
    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Run one chat completion.

        Args:
            messages: Message dicts with 'role' and 'content'
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Output token cap (provider default when None)

        Returns:
            LLMResponse with the generated text
        """

    def complete(self, prompt: str, model: str, temperature: float = 0.7) -> LLMResponse:
        """Single-turn completion of a user prompt."""
        return self.chat(
            messages=[{"role": "user", "content": prompt}],
            model=model,
            temperature=temperature,
        )
